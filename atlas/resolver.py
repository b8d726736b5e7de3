from __future__ import annotations

from atlas.catalog import SYSTEM_DEFAULTS
from atlas.models.theme import COLOR_TOKENS, Mode, Theme, normalize_token


def resolve_color(theme: Theme, token: str, mode: Mode | str) -> str:
    """Resolve the color to paint for ``token`` in ``mode``.

    Hierarchy: mode-specific field -> legacy field -> system default.
    Each token resolves independently, so a half-migrated record still
    renders every token.
    """
    name = normalize_token(token)
    mode = Mode(mode)

    # 1. Mode-specific variant
    value = getattr(theme, f"{name}_{mode.value}")
    if value:
        return value

    # 2. Legacy mode-neutral field
    value = getattr(theme, name)
    if value:
        return value

    # 3. System default
    return SYSTEM_DEFAULTS[name]


def resolve_palette(theme: Theme, mode: Mode | str) -> dict[str, str]:
    return {token: resolve_color(theme, token, mode) for token in COLOR_TOKENS}


def fill_mode_variants(theme: Theme) -> Theme:
    """Return a copy with every light and dark field populated.

    Used before flagging a record ``supports_both_modes`` so the flag never
    sits on a record where one variant set is missing.
    """
    updates: dict[str, str] = {}
    for mode in Mode:
        for token, value in resolve_palette(theme, mode).items():
            updates[f"{token}_{mode.value}"] = value
    return theme.model_copy(update={**updates, "supports_both_modes": True})
