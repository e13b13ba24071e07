# design_rules/config.py
import logging
import os

logger = logging.getLogger(__name__)


def _env_number(name, default, cast=int):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        logger.warning("ignoring invalid %s=%r, using %r", name, raw, default)
        return default


def _env_log_level(name, default="INFO"):
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    level = raw.strip().upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("ignoring unknown log level %s=%r, using %r", name, raw, default)
        return default
    return level


# ---------- Color extraction ----------
SAMPLE_STRIDE = max(1, _env_number("DESIGN_RULES_SAMPLE_STRIDE", 10))   # every Nth pixel
ALPHA_THRESHOLD = _env_number("DESIGN_RULES_ALPHA_THRESHOLD", 128)      # ~50% opacity
MAX_COLORS = _env_number("DESIGN_RULES_MAX_COLORS", 6)

FALLBACK_PALETTE = ("#3498db", "#2ecc71", "#e74c3c", "#f39c12", "#9b59b6")

# ---------- Pipeline ----------
ANALYSIS_DELAY = _env_number("DESIGN_RULES_ANALYSIS_DELAY", 0.0, cast=float)  # seconds

# ---------- Service ----------
LOG_LEVEL = _env_log_level("DESIGN_RULES_LOG_LEVEL")
ACCEPTED_EXTENSIONS = (".png", ".jpg", ".jpeg", ".webp")
RULE_FILENAME = "cursor-design-rule.md"
