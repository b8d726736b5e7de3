from __future__ import annotations

import logging
import re
from typing import Annotated, Any

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError

from atlas.errors import InvalidThemePayloadError
from atlas.models.theme import HueShift, PercentAdjust, ShadowStrength

logger = logging.getLogger(__name__)

_HSL_RE = re.compile(r"^\s*(\d+(?:\.\d+)?)\s+(\d+(?:\.\d+)?)%\s+(\d+(?:\.\d+)?)%\s*$")


def _check_hsl(value: str) -> str:
    match = _HSL_RE.match(value)
    if match is None:
        raise ValueError("must be an HSL value in the format 'h s% l%' (e.g. '220 70% 50%')")
    hue, saturation, lightness = (float(g) for g in match.groups())
    if hue > 360 or saturation > 100 or lightness > 100:
        raise ValueError("HSL components out of range")
    return value.strip()


HslValue = Annotated[str, AfterValidator(_check_hsl)]
Adjustment = Annotated[float, Field(allow_inf_nan=False)]


class GeneratedThemePayload(BaseModel):
    """Fixed schema for themes produced by the AI theme generator."""

    model_config = ConfigDict(extra="ignore")

    name: Annotated[str, Field(min_length=3, max_length=60)]
    primary: HslValue
    secondary: HslValue
    accent: HslValue
    base_bg: HslValue
    base_fg: HslValue
    card_bg: HslValue
    card_fg: HslValue
    popover_bg: HslValue
    popover_fg: HslValue
    muted_bg: HslValue
    muted_fg: HslValue
    destructive_bg: HslValue
    destructive_fg: HslValue
    font_sans: Annotated[str, Field(min_length=3)]
    font_serif: Annotated[str, Field(min_length=3)]
    font_mono: Annotated[str, Field(min_length=3)]
    radius: Annotated[str, Field(min_length=2)]
    letter_spacing: Adjustment
    hue_shift: HueShift
    saturation_adjust: PercentAdjust
    lightness_adjust: PercentAdjust
    spacing_scale: Adjustment
    shadow_strength: ShadowStrength


def parse_generated_theme(payload: Any) -> dict[str, Any]:
    """Validate a generated payload and return theme fields.

    Raises InvalidThemePayloadError on any failure; nothing from a
    half-valid payload is returned.
    """
    try:
        parsed = GeneratedThemePayload.model_validate(payload)
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        logger.warning("Rejected generated theme payload: %d error(s)", len(errors))
        raise InvalidThemePayloadError(errors) from exc
    return parsed.model_dump()
