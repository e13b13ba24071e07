# design_rules/analyzers.py
"""
Design analyzers module

Features:
- Image decoding to an RGBA raster (Pillow + numpy)
- Dominant color extraction by exact-match pixel counting
- Typography / component detection seams (constant stubs for now)
- Async pipeline: decode, fan out the three detections, join, build DesignElements
"""

import asyncio
import io
import logging
from typing import Optional, Protocol, Sequence, Tuple

import numpy as np
from PIL import Image

from . import config
from .models import (
    DEFAULT_BORDER_RADIUS,
    DEFAULT_FONT_SIZES,
    DEFAULT_FONT_WEIGHTS,
    DEFAULT_SPACING,
    DesignElements,
    Typography,
)

logger = logging.getLogger(__name__)


# ---------- Decoding ----------
def decode_image(image_bytes: bytes) -> Optional[np.ndarray]:
    """
    Decode image bytes into an (H, W, 4) uint8 RGBA array.
    Returns None when the bytes are not a readable image.
    """
    try:
        with Image.open(io.BytesIO(image_bytes)) as img:
            rgba = img.convert("RGBA")
        return np.asarray(rgba, dtype=np.uint8)
    except Exception as e:
        logger.warning("image decode failed: %s", e)
        return None


def _as_pixel_rows(raster) -> np.ndarray:
    if isinstance(raster, (bytes, bytearray, memoryview)):
        flat = np.frombuffer(raster, dtype=np.uint8)
    else:
        flat = np.asarray(raster, dtype=np.uint8).reshape(-1)
    usable = flat.size - flat.size % 4   # drop a trailing partial pixel
    return flat[:usable].reshape(-1, 4)


# ---------- Palette extraction (exact-match counting) ----------
def extract_palette(raster, stride=None, alpha_threshold=None, max_colors=None):
    """
    Return up to `max_colors` hex colors ordered by how often they occur among
    sampled pixels. Ties keep the order in which colors were first seen.

    `raster` is an RGBA buffer: (H, W, 4) array, flat array or raw bytes.
    None means the image could not be decoded and yields the fallback palette.
    """
    stride = max(1, config.SAMPLE_STRIDE if stride is None else stride)
    alpha_threshold = config.ALPHA_THRESHOLD if alpha_threshold is None else alpha_threshold
    max_colors = config.MAX_COLORS if max_colors is None else max_colors

    if raster is None:
        return list(config.FALLBACK_PALETTE)

    sampled = _as_pixel_rows(raster)[::stride]
    opaque = sampled[sampled[:, 3] >= alpha_threshold]
    if opaque.shape[0] == 0:
        return []

    # simple color counting (for a real app, use clustering)
    rgb = opaque[:, :3].astype(np.uint32)
    packed = (rgb[:, 0] << 16) | (rgb[:, 1] << 8) | rgb[:, 2]
    keys, first_seen, counts = np.unique(packed, return_index=True, return_counts=True)

    # lexsort: last key is primary -> count desc, then first occurrence asc
    order = np.lexsort((first_seen, -counts.astype(np.int64)))
    return ["#%06x" % int(k) for k in keys[order][:max_colors]]


def extract_palette_from_bytes(image_bytes: bytes, **kwargs):
    return extract_palette(decode_image(image_bytes), **kwargs)


# ---------- Detector seams ----------
class TypographyDetector(Protocol):
    def detect(self, raster: Optional[np.ndarray]) -> Typography:
        ...


class ComponentDetector(Protocol):
    def detect(self, raster: Optional[np.ndarray]) -> Tuple[str, ...]:
        ...


class StaticTypographyDetector:
    """
    Placeholder detector: returns a plausible type system regardless of the image.
    Swap in an OCR / font-classification backed TypographyDetector to get real values.
    """
    FONT_FAMILY = ("Roboto", "Inter", "Open Sans")
    FONT_SIZES = DEFAULT_FONT_SIZES
    FONT_WEIGHTS = DEFAULT_FONT_WEIGHTS

    def detect(self, raster):
        return Typography(self.FONT_FAMILY, self.FONT_SIZES, self.FONT_WEIGHTS)


class StaticComponentDetector:
    """
    Placeholder detector: returns common UI components regardless of the image.
    Swap in an object-detection backed ComponentDetector to get real values.
    """
    COMPONENTS = ("Button", "Card", "Input", "Navbar", "Modal", "Table", "Dropdown", "Tabs")

    def detect(self, raster):
        return self.COMPONENTS


# ---------- Full pipeline ----------
async def analyze_image_bytes(
    image_bytes: bytes,
    typography_detector: Optional[TypographyDetector] = None,
    component_detector: Optional[ComponentDetector] = None,
    delay: Optional[float] = None,
    spacing: Sequence[float] = DEFAULT_SPACING,
    border_radius: Sequence[float] = DEFAULT_BORDER_RADIUS,
) -> DesignElements:
    typography_detector = typography_detector or StaticTypographyDetector()
    component_detector = component_detector or StaticComponentDetector()
    delay = config.ANALYSIS_DELAY if delay is None else delay

    raster = await asyncio.to_thread(decode_image, image_bytes)
    if delay > 0:
        await asyncio.sleep(delay)

    # the three detections are independent; build the record only after all finish
    colors, typography, components = await asyncio.gather(
        asyncio.to_thread(extract_palette, raster),
        asyncio.to_thread(typography_detector.detect, raster),
        asyncio.to_thread(component_detector.detect, raster),
    )

    if raster is not None:
        logger.info("analyzed %dx%d image: %d colors", raster.shape[1], raster.shape[0], len(colors))

    return DesignElements(
        colors=tuple(colors),
        typography=typography,
        spacing=tuple(spacing),
        border_radius=tuple(border_radius),
        components=tuple(components),
    )
