from __future__ import annotations

from jinja2 import Environment, StrictUndefined

from atlas.catalog import DEFAULT_FONT_MONO, DEFAULT_FONT_SANS, DEFAULT_FONT_SERIF, DEFAULT_RADIUS
from atlas.models.theme import Mode, Theme
from atlas.resolver import resolve_palette

# CSS custom property -> color token it is painted with.
CSS_VARIABLES: tuple[tuple[str, str], ...] = (
    ("primary", "primary"),
    ("primary-foreground", "base_fg"),
    ("secondary", "secondary"),
    ("secondary-foreground", "base_fg"),
    ("accent", "accent"),
    ("accent-foreground", "base_fg"),
    ("background", "base_bg"),
    ("foreground", "base_fg"),
    ("card", "card_bg"),
    ("card-foreground", "card_fg"),
    ("popover", "popover_bg"),
    ("popover-foreground", "popover_fg"),
    ("muted", "muted_bg"),
    ("muted-foreground", "muted_fg"),
    ("destructive", "destructive_bg"),
    ("destructive-foreground", "destructive_fg"),
    ("border", "muted_bg"),
    ("input", "muted_bg"),
    ("ring", "primary"),
)

_env = Environment(undefined=StrictUndefined, autoescape=False, trim_blocks=True, lstrip_blocks=True)

_THEME_TEMPLATE = _env.from_string(
    """{{ selector }} {
{% for name, value in colors %}
  --{{ name }}: hsl({{ value }});
{% endfor %}
  --radius: {{ radius }};
  --font-sans: {{ font_sans }};
  --font-serif: {{ font_serif }};
  --font-mono: {{ font_mono }};
}"""
)


def theme_selector(theme: Theme, mode: Mode | str) -> str:
    if Mode(mode) is Mode.DARK:
        return f'.dark[data-theme-id="{theme.slug}"]'
    return f':root[data-theme-id="{theme.slug}"]'


def generate_theme_css(theme: Theme, mode: Mode | str = Mode.LIGHT) -> str:
    """Render one mode of ``theme`` as a block of CSS custom properties."""
    palette = resolve_palette(theme, mode)
    return _THEME_TEMPLATE.render(
        selector=theme_selector(theme, mode),
        colors=[(name, palette[token]) for name, token in CSS_VARIABLES],
        radius=theme.radius or DEFAULT_RADIUS,
        font_sans=theme.font_sans or DEFAULT_FONT_SANS,
        font_serif=theme.font_serif or DEFAULT_FONT_SERIF,
        font_mono=theme.font_mono or DEFAULT_FONT_MONO,
    )


def generate_complete_theme_css(theme: Theme) -> str:
    return f"{generate_theme_css(theme, Mode.LIGHT)}\n\n{generate_theme_css(theme, Mode.DARK)}"
