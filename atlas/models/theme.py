from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Annotated

from pydantic import BaseModel, Field


class Mode(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class ShadowStrength(str, Enum):
    NONE = "none"
    SUBTLE = "subtle"
    MEDIUM = "medium"
    STRONG = "strong"


COLOR_TOKENS: tuple[str, ...] = (
    "primary",
    "secondary",
    "accent",
    "base_bg",
    "base_fg",
    "card_bg",
    "card_fg",
    "popover_bg",
    "popover_fg",
    "muted_bg",
    "muted_fg",
    "destructive_bg",
    "destructive_fg",
)

# Long-form names used in the editor UI and by external producers.
TOKEN_ALIASES: dict[str, str] = {
    "base-background": "base_bg",
    "base-foreground": "base_fg",
    "card-background": "card_bg",
    "card-foreground": "card_fg",
    "popover-background": "popover_bg",
    "popover-foreground": "popover_fg",
    "muted-background": "muted_bg",
    "muted-foreground": "muted_fg",
    "destructive-background": "destructive_bg",
    "destructive-foreground": "destructive_fg",
}

TYPOGRAPHY_FIELDS = ("font_sans", "font_serif", "font_mono", "letter_spacing")
LAYOUT_FIELDS = ("radius", "hue_shift", "saturation_adjust", "lightness_adjust", "spacing_scale", "shadow_strength")


def normalize_token(token: str) -> str:
    """Return the field name for ``token``, raising ``ValueError`` if unknown."""
    name = TOKEN_ALIASES.get(token, token)
    if name not in COLOR_TOKENS:
        raise ValueError(f"Unknown color token: {token!r}")
    return name


def mode_field(token: str, mode: Mode | str) -> str:
    return f"{normalize_token(token)}_{Mode(mode).value}"


HueShift = Annotated[float, Field(ge=-180, le=180)]  # degrees
PercentAdjust = Annotated[float, Field(ge=-50, le=50)]


class Theme(BaseModel):
    id: int = 0
    slug: str = ""
    name: str = ""

    # Legacy, mode-neutral color tokens
    primary: str | None = None
    secondary: str | None = None
    accent: str | None = None
    base_bg: str | None = None
    base_fg: str | None = None
    card_bg: str | None = None
    card_fg: str | None = None
    popover_bg: str | None = None
    popover_fg: str | None = None
    muted_bg: str | None = None
    muted_fg: str | None = None
    destructive_bg: str | None = None
    destructive_fg: str | None = None

    # Light mode variants
    primary_light: str | None = None
    secondary_light: str | None = None
    accent_light: str | None = None
    base_bg_light: str | None = None
    base_fg_light: str | None = None
    card_bg_light: str | None = None
    card_fg_light: str | None = None
    popover_bg_light: str | None = None
    popover_fg_light: str | None = None
    muted_bg_light: str | None = None
    muted_fg_light: str | None = None
    destructive_bg_light: str | None = None
    destructive_fg_light: str | None = None

    # Dark mode variants
    primary_dark: str | None = None
    secondary_dark: str | None = None
    accent_dark: str | None = None
    base_bg_dark: str | None = None
    base_fg_dark: str | None = None
    card_bg_dark: str | None = None
    card_fg_dark: str | None = None
    popover_bg_dark: str | None = None
    popover_fg_dark: str | None = None
    muted_bg_dark: str | None = None
    muted_fg_dark: str | None = None
    destructive_bg_dark: str | None = None
    destructive_fg_dark: str | None = None

    # Typography
    font_sans: str | None = None
    font_serif: str | None = None
    font_mono: str | None = None
    letter_spacing: float | None = None  # em

    # Layout & adjustments
    radius: str | None = None
    hue_shift: HueShift | None = None
    saturation_adjust: PercentAdjust | None = None
    lightness_adjust: PercentAdjust | None = None
    spacing_scale: float | None = None
    shadow_strength: ShadowStrength | None = None

    # Lineage
    supports_both_modes: bool = False
    is_built_in: bool = False
    parent_theme_id: int | None = None
    user_id: int | None = None

    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def is_persisted(self) -> bool:
        return self.id > 0


class UserThemeSettings(BaseModel):
    user_id: int
    active_theme_id: int | None = None
    wallpaper_url: str | None = None
    low_motion: bool = False
    updated_at: datetime | None = None


# Columns persisted for a theme row, in table order (identity and timestamps excluded).
THEME_COLUMNS: tuple[str, ...] = (
    "slug",
    "name",
    *COLOR_TOKENS,
    *(f"{token}_light" for token in COLOR_TOKENS),
    *(f"{token}_dark" for token in COLOR_TOKENS),
    *TYPOGRAPHY_FIELDS,
    *LAYOUT_FIELDS,
    "supports_both_modes",
    "is_built_in",
    "parent_theme_id",
    "user_id",
)
