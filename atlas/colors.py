"""Color space conversion between HSL strings, hex strings and picker coordinates.

Themes store every color token as a canonical HSL string (``"220 70% 50%"``).
The editor works on :class:`ColorComponents` while a single token is being
changed and displays hex to the user. The 2D picker surface is not a uniform
saturation x lightness square: the brightest reachable lightness for a given
saturation is ``50 + 50 * (1 - x)``, pinned to 100 near zero saturation.
"""

from __future__ import annotations

import colorsys
import math
import re
from dataclasses import dataclass, replace

_HEX_RE = re.compile(r"^#(?:[0-9A-Fa-f]{3}|[0-9A-Fa-f]{6}|[0-9A-Fa-f]{8})$")

# Below this horizontal position the top edge of the picker is white.
SATURATION_SINGULARITY = 0.01

HUE_MAX = 360.0
ALPHA_SLIDER_MAX = 100.0


@dataclass(frozen=True)
class ColorComponents:
    hue: float = 0.0
    saturation: float = 0.0
    lightness: float = 0.0
    alpha: float = 1.0

    def with_alpha(self, alpha: float) -> ColorComponents:
        return replace(self, alpha=_clamp(alpha, 0.0, 1.0))


BLACK = ColorComponents()


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round(value: float) -> int:
    return math.floor(value + 0.5)


def _parse_segment(parts: list[str], index: int) -> float:
    if index >= len(parts):
        return 0.0
    try:
        value = float(parts[index].replace("%", ""))
    except ValueError:
        return 0.0
    if not math.isfinite(value):
        return 0.0
    return value


def parse_hsl(text: str | None) -> ColorComponents:
    """Parse ``"H S% L%"``. Malformed or missing segments read as 0, never raises."""
    parts = text.split() if isinstance(text, str) else []
    return ColorComponents(
        hue=_parse_segment(parts, 0),
        saturation=_parse_segment(parts, 1),
        lightness=_parse_segment(parts, 2),
    )


def format_hsl(components: ColorComponents) -> str:
    """Render the canonical form written back to a theme record."""
    return f"{_round(components.hue)} {_round(components.saturation)}% {_round(components.lightness)}%"


def to_rgb(components: ColorComponents) -> tuple[int, int, int]:
    h = (components.hue % HUE_MAX) / HUE_MAX
    s = _clamp(components.saturation, 0.0, 100.0) / 100
    light = _clamp(components.lightness, 0.0, 100.0) / 100
    r, g, b = colorsys.hls_to_rgb(h, light, s)
    return _round(r * 255), _round(g * 255), _round(b * 255)


def to_hex(components: ColorComponents, include_alpha: bool = False) -> str:
    r, g, b = to_rgb(components)
    result = f"#{r:02X}{g:02X}{b:02X}"
    if include_alpha:
        result += f"{_round(_clamp(components.alpha, 0.0, 1.0) * 255):02X}"
    return result


def from_hex(text: str | None, previous: ColorComponents = BLACK) -> ColorComponents:
    """Convert hex input from the picker.

    Invalid input returns ``previous`` unchanged so a typo in the hex field
    never moves the picker to an unrelated color.
    """
    value = (text or "").strip()
    if not _HEX_RE.match(value):
        return previous

    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    r, g, b = (int(digits[i : i + 2], 16) / 255 for i in (0, 2, 4))
    alpha = int(digits[6:8], 16) / 255 if len(digits) == 8 else 1.0

    h, light, s = colorsys.rgb_to_hls(r, g, b)
    return ColorComponents(hue=h * HUE_MAX, saturation=s * 100, lightness=light * 100, alpha=alpha)


def hsl_to_hex(text: str | None) -> str:
    return to_hex(parse_hsl(text))


def hex_to_hsl(text: str | None, previous: str = "0 0% 0%") -> str:
    return format_hsl(from_hex(text, parse_hsl(previous)))


# ---------------------------------------------------------------------------
# Picker geometry
# ---------------------------------------------------------------------------


def _top_lightness(x: float) -> float:
    if x < SATURATION_SINGULARITY:
        return 100.0
    return 50 + 50 * (1 - x)


def picker_position_to_hsl(x: float, y: float) -> tuple[float, float]:
    """Map a pointer position on the 2D surface to ``(saturation, lightness)``."""
    x = _clamp(x, 0.0, 1.0)
    y = _clamp(y, 0.0, 1.0)
    saturation = x * 100
    lightness = _top_lightness(x) * (1 - y)
    return saturation, lightness


def hsl_to_picker_position(saturation: float, lightness: float) -> tuple[float, float]:
    """Inverse of :func:`picker_position_to_hsl`, used to place the handle."""
    x = _clamp(saturation / 100, 0.0, 1.0)
    y = 1 - lightness / _top_lightness(x)
    return x, _clamp(y, 0.0, 1.0)


def hue_to_slider(hue: float) -> float:
    return _clamp(hue, 0.0, HUE_MAX) / HUE_MAX


def slider_to_hue(position: float) -> float:
    return _clamp(position, 0.0, 1.0) * HUE_MAX


def alpha_to_slider(alpha: float) -> float:
    return _clamp(alpha, 0.0, 1.0) * ALPHA_SLIDER_MAX


def slider_to_alpha(value: float) -> float:
    return _clamp(value, 0.0, ALPHA_SLIDER_MAX) / ALPHA_SLIDER_MAX
