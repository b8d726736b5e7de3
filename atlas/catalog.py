"""Built-in theme catalog.

Every built-in carries both light and dark variants plus legacy fields that
mirror the light variant. Records returned from here are copies; the catalog
itself is never mutated.
"""

from __future__ import annotations

import random

from atlas.models.theme import COLOR_TOKENS, ShadowStrength, Theme

# Fallback for a token that neither the mode field nor the legacy field sets.
SYSTEM_DEFAULTS: dict[str, str] = {
    "primary": "220 70% 50%",
    "secondary": "220 20% 90%",
    "accent": "220 80% 60%",
    "base_bg": "0 0% 100%",
    "base_fg": "0 0% 10%",
    "card_bg": "0 0% 100%",
    "card_fg": "0 0% 10%",
    "popover_bg": "0 0% 100%",
    "popover_fg": "0 0% 10%",
    "muted_bg": "220 20% 96%",
    "muted_fg": "220 10% 40%",
    "destructive_bg": "0 70% 50%",
    "destructive_fg": "0 0% 100%",
}

DEFAULT_FONT_SANS = "Inter, system-ui, sans-serif"
DEFAULT_FONT_SERIF = "Source Serif 4, Georgia, serif"
DEFAULT_FONT_MONO = "JetBrains Mono, monospace"
DEFAULT_RADIUS = "0.5rem"

DEFAULT_THEME_SLUG = "default"


def _built_in(
    slug: str,
    name: str,
    colors: dict[str, tuple[str, str]],
    radius: str = DEFAULT_RADIUS,
    shadow_strength: ShadowStrength = ShadowStrength.MEDIUM,
) -> Theme:
    fields: dict = {}
    for token in COLOR_TOKENS:
        light, dark = colors[token]
        fields[token] = light
        fields[f"{token}_light"] = light
        fields[f"{token}_dark"] = dark
    return Theme(
        id=0,
        slug=slug,
        name=name,
        font_sans=DEFAULT_FONT_SANS,
        font_serif=DEFAULT_FONT_SERIF,
        font_mono=DEFAULT_FONT_MONO,
        letter_spacing=0,
        radius=radius,
        hue_shift=0,
        saturation_adjust=0,
        lightness_adjust=0,
        spacing_scale=1,
        shadow_strength=shadow_strength,
        supports_both_modes=True,
        is_built_in=True,
        parent_theme_id=None,
        user_id=None,
        **fields,
    )


_BUILT_IN_THEMES: tuple[Theme, ...] = (
    _built_in(
        "default",
        "Default",
        {
            "primary": ("215 95% 55%", "215 95% 60%"),
            "secondary": ("220 15% 92%", "220 15% 18%"),
            "accent": ("165 75% 45%", "165 75% 50%"),
            "base_bg": ("220 20% 98%", "220 20% 10%"),
            "base_fg": ("220 15% 15%", "220 15% 92%"),
            "card_bg": ("0 0% 100%", "220 15% 14%"),
            "card_fg": ("220 15% 15%", "220 15% 92%"),
            "popover_bg": ("0 0% 100%", "220 15% 16%"),
            "popover_fg": ("220 15% 15%", "220 15% 92%"),
            "muted_bg": ("220 15% 95%", "220 15% 18%"),
            "muted_fg": ("220 10% 45%", "220 10% 60%"),
            "destructive_bg": ("0 72% 51%", "0 72% 55%"),
            "destructive_fg": ("0 0% 100%", "0 0% 100%"),
        },
    ),
    _built_in(
        "ocean",
        "Ocean",
        {
            "primary": ("200 85% 50%", "200 85% 55%"),
            "secondary": ("195 20% 88%", "200 25% 15%"),
            "accent": ("180 70% 45%", "180 75% 50%"),
            "base_bg": ("195 30% 97%", "200 30% 8%"),
            "base_fg": ("200 20% 15%", "195 20% 90%"),
            "card_bg": ("195 30% 100%", "200 25% 12%"),
            "card_fg": ("200 20% 15%", "195 20% 90%"),
            "popover_bg": ("195 30% 100%", "200 25% 14%"),
            "popover_fg": ("200 20% 15%", "195 20% 90%"),
            "muted_bg": ("195 20% 92%", "200 20% 16%"),
            "muted_fg": ("200 15% 40%", "195 15% 55%"),
            "destructive_bg": ("0 70% 50%", "0 70% 55%"),
            "destructive_fg": ("0 0% 100%", "0 0% 100%"),
        },
        radius="0.75rem",
    ),
    _built_in(
        "forest",
        "Forest",
        {
            "primary": ("145 60% 45%", "145 65% 50%"),
            "secondary": ("140 20% 88%", "145 25% 15%"),
            "accent": ("30 75% 50%", "30 80% 55%"),
            "base_bg": ("140 25% 97%", "145 25% 9%"),
            "base_fg": ("145 25% 15%", "140 15% 90%"),
            "card_bg": ("140 20% 100%", "145 20% 13%"),
            "card_fg": ("145 25% 15%", "140 15% 90%"),
            "popover_bg": ("140 20% 100%", "145 20% 15%"),
            "popover_fg": ("145 25% 15%", "140 15% 90%"),
            "muted_bg": ("140 15% 92%", "145 15% 17%"),
            "muted_fg": ("145 15% 40%", "140 10% 55%"),
            "destructive_bg": ("0 70% 50%", "0 70% 55%"),
            "destructive_fg": ("0 0% 100%", "0 0% 100%"),
        },
        shadow_strength=ShadowStrength.SUBTLE,
    ),
    _built_in(
        "sunset",
        "Sunset",
        {
            "primary": ("25 90% 55%", "25 95% 60%"),
            "secondary": ("30 25% 90%", "30 20% 16%"),
            "accent": ("340 75% 55%", "340 75% 60%"),
            "base_bg": ("30 40% 97%", "25 25% 10%"),
            "base_fg": ("25 20% 15%", "30 15% 90%"),
            "card_bg": ("30 30% 100%", "25 20% 14%"),
            "card_fg": ("25 20% 15%", "30 15% 90%"),
            "popover_bg": ("30 30% 100%", "25 20% 16%"),
            "popover_fg": ("25 20% 15%", "30 15% 90%"),
            "muted_bg": ("30 20% 92%", "25 15% 18%"),
            "muted_fg": ("25 15% 40%", "30 10% 55%"),
            "destructive_bg": ("0 70% 50%", "0 70% 55%"),
            "destructive_fg": ("0 0% 100%", "0 0% 100%"),
        },
        radius="0.75rem",
    ),
    _built_in(
        "lavender",
        "Lavender",
        {
            "primary": ("270 60% 60%", "270 65% 65%"),
            "secondary": ("270 20% 90%", "270 20% 16%"),
            "accent": ("200 70% 55%", "200 75% 60%"),
            "base_bg": ("270 30% 98%", "270 25% 10%"),
            "base_fg": ("270 15% 15%", "270 15% 92%"),
            "card_bg": ("270 25% 100%", "270 20% 14%"),
            "card_fg": ("270 15% 15%", "270 15% 92%"),
            "popover_bg": ("270 25% 100%", "270 20% 16%"),
            "popover_fg": ("270 15% 15%", "270 15% 92%"),
            "muted_bg": ("270 18% 94%", "270 15% 18%"),
            "muted_fg": ("270 12% 42%", "270 10% 58%"),
            "destructive_bg": ("0 70% 50%", "0 70% 55%"),
            "destructive_fg": ("0 0% 100%", "0 0% 100%"),
        },
        radius="1rem",
        shadow_strength=ShadowStrength.SUBTLE,
    ),
    _built_in(
        "midnight",
        "Midnight",
        {
            "primary": ("250 70% 55%", "250 75% 60%"),
            "secondary": ("250 15% 88%", "250 20% 14%"),
            "accent": ("45 90% 55%", "45 95% 60%"),
            "base_bg": ("250 20% 97%", "250 30% 7%"),
            "base_fg": ("250 15% 15%", "250 12% 92%"),
            "card_bg": ("250 15% 100%", "250 25% 11%"),
            "card_fg": ("250 15% 15%", "250 12% 92%"),
            "popover_bg": ("250 15% 100%", "250 25% 13%"),
            "popover_fg": ("250 15% 15%", "250 12% 92%"),
            "muted_bg": ("250 12% 92%", "250 20% 15%"),
            "muted_fg": ("250 10% 40%", "250 10% 58%"),
            "destructive_bg": ("0 70% 50%", "0 70% 55%"),
            "destructive_fg": ("0 0% 100%", "0 0% 100%"),
        },
        shadow_strength=ShadowStrength.STRONG,
    ),
    _built_in(
        "monochrome",
        "Monochrome",
        {
            "primary": ("0 0% 20%", "0 0% 85%"),
            "secondary": ("0 0% 88%", "0 0% 16%"),
            "accent": ("0 0% 35%", "0 0% 65%"),
            "base_bg": ("0 0% 98%", "0 0% 8%"),
            "base_fg": ("0 0% 10%", "0 0% 92%"),
            "card_bg": ("0 0% 100%", "0 0% 12%"),
            "card_fg": ("0 0% 10%", "0 0% 92%"),
            "popover_bg": ("0 0% 100%", "0 0% 14%"),
            "popover_fg": ("0 0% 10%", "0 0% 92%"),
            "muted_bg": ("0 0% 92%", "0 0% 16%"),
            "muted_fg": ("0 0% 42%", "0 0% 58%"),
            "destructive_bg": ("0 70% 50%", "0 70% 55%"),
            "destructive_fg": ("0 0% 100%", "0 0% 100%"),
        },
        radius="0.3rem",
        shadow_strength=ShadowStrength.NONE,
    ),
)

BUILT_IN_SLUGS: tuple[str, ...] = tuple(theme.slug for theme in _BUILT_IN_THEMES)


def get_built_in(slug: str) -> Theme | None:
    for theme in _BUILT_IN_THEMES:
        if theme.slug == slug:
            return theme.model_copy(deep=True)
    return None


def list_built_ins() -> list[Theme]:
    return [theme.model_copy(deep=True) for theme in _BUILT_IN_THEMES]


def random_built_in(rng: random.Random | None = None) -> Theme:
    """Uniform draw over the whole catalog."""
    chooser = rng or random
    return chooser.choice(_BUILT_IN_THEMES).model_copy(deep=True)


def default_theme() -> Theme:
    theme = get_built_in(DEFAULT_THEME_SLUG)
    if theme is None:
        raise RuntimeError(f"Built-in catalog is missing the '{DEFAULT_THEME_SLUG}' theme")
    return theme
