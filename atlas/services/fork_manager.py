"""Copy-on-first-edit for built-in themes.

Built-ins are shared presets and are never mutated. The first edit of an
unforked built-in produces a private copy owned by the editing user; later
edits land on that copy. The current record is never modified; callers keep
the returned record as their edit buffer.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from atlas.colors import format_hsl, parse_hsl
from atlas.models.theme import COLOR_TOKENS, TOKEN_ALIASES, Mode, Theme
from atlas.resolver import fill_mode_variants

logger = logging.getLogger(__name__)

# Identity and lineage are owned by this module and by storage, never by an edit.
PROTECTED_FIELDS = frozenset(
    {"id", "slug", "is_built_in", "parent_theme_id", "user_id", "supports_both_modes", "created_at", "updated_at"}
)


def map_updates(updates: Mapping[str, Any], mode: Mode | str) -> dict[str, Any]:
    """Route token updates to ``<token>_<mode>`` and mirror them into the legacy field."""
    mode = Mode(mode)
    mapped: dict[str, Any] = {}
    for key, value in updates.items():
        name = TOKEN_ALIASES.get(key, key)
        if name in PROTECTED_FIELDS:
            raise ValueError(f"Field '{key}' cannot be edited")
        if name not in Theme.model_fields:
            raise ValueError(f"Unknown theme field: {key!r}")
        if name in COLOR_TOKENS:
            if value is not None and not isinstance(value, str):
                raise ValueError(f"Color {key!r} must be an HSL string, got {type(value).__name__}")
            color = None if value is None else format_hsl(parse_hsl(value))
            mapped[f"{name}_{mode.value}"] = color
            mapped[name] = color
        else:
            mapped[name] = value
    return mapped


def needs_fork(theme: Theme) -> bool:
    return theme.is_built_in and theme.parent_theme_id is None


def custom_name_prefix(parent: Theme) -> str:
    return f"Custom {parent.name}"


def _is_fork_of(candidate: Theme, parent: Theme, owner_user_id: int) -> bool:
    if candidate.is_built_in or candidate.user_id != owner_user_id:
        return False
    if not (candidate.name or "").startswith(custom_name_prefix(parent)):
        return False
    if parent.is_persisted:
        return candidate.parent_theme_id == parent.id
    # Parent never persisted: forks carry no parent id, so lineage is read from the slug.
    return candidate.parent_theme_id is None and candidate.slug.startswith(f"{parent.slug}-custom-{owner_user_id}-")


def fork_slug(parent: Theme, owner_user_id: int, index: int) -> str:
    return f"{parent.slug}-custom-{owner_user_id}-{index}"


def next_fork_index(parent: Theme, owner_user_id: int, existing_forks: Iterable[Theme]) -> int:
    """One past the number of the user's current forks of ``parent``.

    Skips ahead when that number is still taken, which happens after an
    earlier fork was deleted.
    """
    existing = list(existing_forks)
    index = 1 + sum(1 for theme in existing if _is_fork_of(theme, parent, owner_user_id))
    taken_slugs = {theme.slug for theme in existing}
    taken_names = {theme.name for theme in existing if theme.user_id == owner_user_id}
    while (
        fork_slug(parent, owner_user_id, index) in taken_slugs
        or f"{custom_name_prefix(parent)} {index}" in taken_names
    ):
        index += 1
    return index


def fork(parent: Theme, owner_user_id: int, existing_forks: Iterable[Theme] = ()) -> Theme:
    """Create an unsaved, user-owned copy of ``parent`` carrying both variants."""
    index = next_fork_index(parent, owner_user_id, existing_forks)
    copy = fill_mode_variants(parent)
    return copy.model_copy(
        update={
            "id": 0,
            "slug": fork_slug(parent, owner_user_id, index),
            "name": f"{custom_name_prefix(parent)} {index}",
            "is_built_in": False,
            "parent_theme_id": parent.id if parent.is_persisted else None,
            "user_id": owner_user_id,
            "supports_both_modes": True,
            "created_at": None,
            "updated_at": None,
        }
    )


def apply_edit(
    current: Theme,
    updates: Mapping[str, Any],
    mode: Mode | str,
    owner_user_id: int | None,
    existing_forks: Iterable[Theme] = (),
) -> Theme:
    """Apply ``updates`` to ``current``, forking first if it is an unforked built-in."""
    if owner_user_id is None:
        raise ValueError("Cannot edit a theme without an owning user")

    mapped = map_updates(updates, mode)

    if needs_fork(current):
        base = fork(current, owner_user_id, existing_forks)
        # The fork's generated name wins over a rename in the same edit.
        mapped.pop("name", None)
        result = Theme.model_validate({**base.model_dump(), **mapped})
        logger.info(
            "Forked built-in theme: parent=%s fork=%s user=%s",
            current.slug,
            result.slug,
            owner_user_id,
        )
        return result

    result = Theme.model_validate({**current.model_dump(), **mapped})
    logger.debug("Edited theme in place: slug=%s fields=%s", result.slug, sorted(mapped))
    return result
