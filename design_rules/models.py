from dataclasses import dataclass, field
from typing import Any, Dict, Tuple

DEFAULT_SPACING = (4, 8, 16, 24, 32, 48)
DEFAULT_BORDER_RADIUS = (0, 4, 8, 16, 24)
DEFAULT_FONT_SIZES = (12, 14, 16, 18, 24, 32, 48)
DEFAULT_FONT_WEIGHTS = (400, 500, 700)


@dataclass(frozen=True)
class Typography:
    font_family: Tuple[str, ...]       # e.g. ("Roboto", "Inter")
    font_sizes: Tuple[float, ...]      # px
    font_weights: Tuple[int, ...]      # 400, 500, 700 ...

    def to_dict(self) -> Dict[str, Any]:
        return {
            "fontFamily": list(self.font_family),
            "fontSizes": list(self.font_sizes),
            "fontWeights": list(self.font_weights),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Typography":
        return cls(
            font_family=tuple(data.get("fontFamily", ())),
            font_sizes=tuple(data.get("fontSizes", ())),
            font_weights=tuple(data.get("fontWeights", ())),
        )


@dataclass(frozen=True)
class DesignElements:
    """Everything the renderer needs to build a design rule for one uploaded image."""
    colors: Tuple[str, ...]            # hex colors, most frequent first
    typography: Typography
    spacing: Tuple[float, ...] = DEFAULT_SPACING
    border_radius: Tuple[float, ...] = DEFAULT_BORDER_RADIUS
    components: Tuple[str, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "colors": list(self.colors),
            "typography": self.typography.to_dict(),
            "spacing": list(self.spacing),
            "borderRadius": list(self.border_radius),
            "components": list(self.components),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DesignElements":
        return cls(
            colors=tuple(data.get("colors", ())),
            typography=Typography.from_dict(data.get("typography", {})),
            spacing=tuple(data.get("spacing", DEFAULT_SPACING)),
            border_radius=tuple(data.get("borderRadius", DEFAULT_BORDER_RADIUS)),
            components=tuple(data.get("components", ())),
        )
