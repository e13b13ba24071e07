# design_rules/rules.py
"""
Design rule rendering: DesignElements -> JSON design system + component CSS + Markdown guidance.
Pure formatting, no analysis. Same record in, same text out.
"""

import json
import math
import re

from .models import DEFAULT_BORDER_RADIUS, DEFAULT_FONT_SIZES, DEFAULT_FONT_WEIGHTS, DEFAULT_SPACING

ROLE_DEFAULTS = ("#3498db", "#2ecc71", "#e74c3c", "#f39c12")   # primary, secondary, danger, warning
DEFAULT_FONT = "Roboto"
DEFAULT_NEUTRAL = "#ddd"

_HEX_RE = re.compile(r"^#[0-9a-fA-F]{6}$")


def _at(values, index, defaults):
    """values[index], or the default scale's value when the record is too short."""
    if index < len(values):
        return values[index]
    return defaults[index]


def _fmt(value):
    # 16.0 -> "16", keep real fractions
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def color_roles(colors):
    padded = list(colors[:4]) + list(ROLE_DEFAULTS[len(colors[:4]):])
    primary, secondary, danger, warning = padded
    return {
        "primary": primary,
        "secondary": secondary,
        "danger": danger,
        "warning": warning,
        "neutrals": list(colors[4:]),
    }


# ---------- Brightness ----------
def adjust_color_brightness(hex_color: str, percent: float) -> str:
    """
    Scale every channel by `percent` (-100..100): c + c * percent / 100,
    clamped to [0, 255] and rounded half up.
    """
    if not _HEX_RE.match(hex_color or ""):
        raise ValueError(f"expected #rrggbb color, got {hex_color!r}")
    out = []
    for i in (1, 3, 5):
        c = int(hex_color[i:i + 2], 16)
        c = max(0, min(255, c + (c * percent / 100)))
        out.append(int(math.floor(c + 0.5)))
    return "#%02x%02x%02x" % tuple(out)


# ---------- JSON design system ----------
def generate_design_system(elements) -> str:
    typo = elements.typography
    system = {
        "colors": color_roles(elements.colors),
        "typography": typo.to_dict(),
        "spacing": list(elements.spacing),
        "borderRadius": list(elements.border_radius),
    }
    return json.dumps(system, indent=2, ensure_ascii=False)


# ---------- Component CSS ----------
def generate_component_styles(elements) -> str:
    roles = color_roles(elements.colors)
    primary, secondary = roles["primary"], roles["secondary"]
    neutral = roles["neutrals"][0] if roles["neutrals"] else DEFAULT_NEUTRAL

    typo = elements.typography
    font = typo.font_family[0] if typo.font_family else DEFAULT_FONT

    def sp(i):
        return _fmt(_at(elements.spacing, i, DEFAULT_SPACING))

    def br(i):
        return _fmt(_at(elements.border_radius, i, DEFAULT_BORDER_RADIUS))

    def fs(i):
        return _fmt(_at(typo.font_sizes, i, DEFAULT_FONT_SIZES))

    def fw(i):
        return _fmt(_at(typo.font_weights, i, DEFAULT_FONT_WEIGHTS))

    return f"""/* Button styles */
.button {{
  background-color: {primary};
  color: #ffffff;
  padding: {sp(1)}px {sp(2)}px;
  border-radius: {br(1)}px;
  font-family: {font}, sans-serif;
  font-weight: {fw(1)};
  font-size: {fs(2)}px;
  border: none;
  cursor: pointer;
  transition: background-color 0.3s ease;
}}

.button:hover {{
  background-color: {adjust_color_brightness(primary, -15)};
}}

.button.secondary {{
  background-color: {secondary};
}}

.button.secondary:hover {{
  background-color: {adjust_color_brightness(secondary, -15)};
}}

/* Card styles */
.card {{
  background-color: #ffffff;
  border-radius: {br(2)}px;
  padding: {sp(3)}px;
  box-shadow: 0 {sp(0)}px {sp(2)}px rgba(0, 0, 0, 0.1);
}}

/* Input styles */
.input {{
  padding: {sp(1)}px {sp(2)}px;
  border-radius: {br(1)}px;
  border: 1px solid {neutral};
  font-family: {font}, sans-serif;
  font-size: {fs(1)}px;
}}

.input:focus {{
  border-color: {primary};
  outline: none;
}}

/* Typography styles */
h1, h2, h3, h4, h5, h6 {{
  font-family: {font}, sans-serif;
  font-weight: {fw(2)};
  margin-bottom: {sp(2)}px;
}}

h1 {{ font-size: {fs(6)}px; }}
h2 {{ font-size: {fs(5)}px; }}
h3 {{ font-size: {fs(4)}px; }}

p {{
  font-family: {font}, sans-serif;
  font-size: {fs(2)}px;
  line-height: 1.5;
}}"""


GUIDANCE = """## Design Guidelines
1. Use the color palette consistently across the UI
2. Maintain spacing rhythm using the specified spacing values
3. Use the font families and font sizes from the typography system
4. Maintain consistent border radius for components
5. Use the component styles as a reference for UI implementation

## Component Usage
- Buttons: Use primary color for main actions, secondary for alternative actions
- Inputs: Maintain consistent padding and border radius
- Typography: Follow the heading hierarchy and font sizes
- Cards: Use consistent shadow and border radius

## Implementation Notes
- Use responsive design principles while maintaining the design language
- Ensure adequate contrast for accessibility
- Maintain consistent component spacing throughout the UI
"""


# ---------- Full document ----------
def generate_cursor_rule(elements) -> str:
    return (
        "# Cursor Design Rule\n"
        "# Generated from design image analysis\n"
        "\n"
        "## Design System\n"
        "```json\n"
        f"{generate_design_system(elements)}\n"
        "```\n"
        "\n"
        "## Component Styles\n"
        "```css\n"
        f"{generate_component_styles(elements)}\n"
        "```\n"
        "\n"
        f"{GUIDANCE}"
    )
