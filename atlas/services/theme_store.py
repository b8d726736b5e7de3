from __future__ import annotations

import logging
import random
from collections.abc import Mapping
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from atlas import catalog
from atlas.css import generate_complete_theme_css
from atlas.errors import ThemeNotFoundError, ThemePersistenceError
from atlas.models.generated_theme import parse_generated_theme
from atlas.models.theme import Mode, Theme, UserThemeSettings
from atlas.repositories.base import ThemeRepository, UserThemeSettingsRepository
from atlas.resolver import fill_mode_variants, resolve_color, resolve_palette
from atlas.services import fork_manager

logger = logging.getLogger(__name__)


def custom_slug_for_user(user_id: int) -> str:
    return f"custom-user-{user_id}"


class ThemeStore:
    def __init__(
        self,
        theme_repo: ThemeRepository,
        settings_repo: UserThemeSettingsRepository,
        default_theme_slug: str = catalog.DEFAULT_THEME_SLUG,
        rng: random.Random | None = None,
    ) -> None:
        self.theme_repo = theme_repo
        self.settings_repo = settings_repo
        self.default_theme_slug = default_theme_slug
        self.rng = rng

    # ------------------------------------------------------------------
    # Built-in catalog (read-only)
    # ------------------------------------------------------------------

    def get_built_in(self, slug: str) -> Theme | None:
        theme = catalog.get_built_in(slug)
        if theme is None:
            return None
        return self._with_persisted_ids([theme])[0]

    def list_built_ins(self) -> list[Theme]:
        return self._with_persisted_ids(catalog.list_built_ins())

    def random_built_in(self) -> Theme:
        return self._with_persisted_ids([catalog.random_built_in(self.rng)])[0]

    def seed_built_ins(self) -> int:
        """Store any catalog theme missing from the database. Returns how many were created."""
        created = 0
        for theme in catalog.list_built_ins():
            if self.theme_repo.get_by_slug(theme.slug) is None:
                self.theme_repo.create(theme)
                created += 1
        if created:
            logger.info("Seeded %d built-in theme(s)", created)
        return created

    def _with_persisted_ids(self, themes: list[Theme]) -> list[Theme]:
        ids = {theme.slug: theme.id for theme in self.theme_repo.list_built_ins()}
        return [theme.model_copy(update={"id": ids.get(theme.slug, 0)}) for theme in themes]

    def _attach_stored_id(self, built_in: Theme) -> Theme:
        """Give a catalog copy the id of its stored row so forks keep their parent link."""
        stored = self.theme_repo.get_by_slug(built_in.slug)
        if stored is None or not stored.is_built_in:
            return built_in
        return built_in.model_copy(update={"id": stored.id})

    # ------------------------------------------------------------------
    # Listing & lookup
    # ------------------------------------------------------------------

    def list_themes(self, user_id: int) -> list[Theme]:
        built_ins = self._with_persisted_ids(catalog.list_built_ins())
        custom = self.theme_repo.list_custom_for_user(user_id)
        logger.debug("Listed %d built-in and %d custom theme(s) for user=%s", len(built_ins), len(custom), user_id)
        return built_ins + custom

    def get_theme_for_user(self, user_id: int, theme_id: int) -> Theme:
        """Return a built-in or a theme owned by ``user_id``."""
        theme = self.theme_repo.get_by_id(theme_id)
        if theme is None or (not theme.is_built_in and theme.user_id != user_id):
            raise ThemeNotFoundError(theme_id=theme_id)
        return theme

    def get_user_theme_settings(self, user_id: int) -> UserThemeSettings | None:
        return self.settings_repo.get(user_id)

    def get_user_active_theme(self, user_id: int) -> Theme | None:
        user_settings = self.settings_repo.get(user_id)
        if user_settings is None or user_settings.active_theme_id is None:
            return None
        theme = self.theme_repo.get_by_id(user_settings.active_theme_id)
        if theme is None:
            logger.warning(
                "Active theme %s for user=%s no longer exists",
                user_settings.active_theme_id,
                user_id,
            )
        return theme

    def get_active_theme_or_default(self, user_id: int) -> Theme:
        theme = self.get_user_active_theme(user_id)
        if theme is not None:
            return theme
        default = catalog.get_built_in(self.default_theme_slug) or catalog.default_theme()
        return self._with_persisted_ids([default])[0]

    # ------------------------------------------------------------------
    # Selection & saving
    # ------------------------------------------------------------------

    def select_theme(self, user_id: int, theme_id: int) -> UserThemeSettings:
        """Make ``theme_id`` the user's active theme.

        Selecting clears the wallpaper override, which is tied to the theme
        it was chosen for.
        """
        self.get_theme_for_user(user_id, theme_id)
        result = self.settings_repo.set_active_theme(user_id, theme_id, clear_wallpaper=True)
        logger.info("Theme selected: user=%s theme=%s", user_id, theme_id)
        return result

    def set_wallpaper(self, user_id: int, wallpaper_url: str | None) -> UserThemeSettings:
        result = self.settings_repo.set_wallpaper(user_id, wallpaper_url)
        logger.info("Wallpaper %s for user=%s", "set" if wallpaper_url else "cleared", user_id)
        return result

    def apply_edit(self, draft: Theme, updates: Mapping[str, Any], mode: Mode | str, user_id: int | None) -> Theme:
        existing_forks: list[Theme] = []
        if user_id is not None and fork_manager.needs_fork(draft):
            if not draft.is_persisted:
                draft = self._attach_stored_id(draft)
            existing_forks = self.theme_repo.list_custom_for_user(user_id)
        return fork_manager.apply_edit(draft, updates, mode, user_id, existing_forks)

    def save_custom_theme(self, user_id: int, draft: Theme | Mapping[str, Any]) -> Theme:
        """Upsert a user's custom theme and make it the active theme.

        Storage failures raise ThemePersistenceError; ``draft`` is never
        modified, so the caller can retry with the same edit buffer.
        """
        if not isinstance(draft, Theme):
            draft = Theme.model_validate(draft)
        if draft.is_built_in:
            raise ValueError("Built-in themes are read-only; edit a fork instead")

        slug = draft.slug or custom_slug_for_user(user_id)
        record = draft.model_copy(update={"slug": slug, "user_id": user_id, "is_built_in": False})
        if record.supports_both_modes:
            record = fill_mode_variants(record)

        try:
            if draft.is_persisted:
                existing = self.theme_repo.get_by_id(draft.id)
            else:
                existing = self.theme_repo.get_by_slug(slug)

            if existing is not None:
                if existing.is_built_in or existing.user_id != user_id:
                    raise ValueError(f"Theme '{existing.slug}' is not owned by user {user_id}")
                saved = self.theme_repo.update(record.model_copy(update={"id": existing.id, "slug": existing.slug}))
                logger.info("Custom theme updated: id=%s slug=%s user=%s", saved.id, saved.slug, user_id)
            else:
                saved = self.theme_repo.create(record.model_copy(update={"id": 0}))
                logger.info("Custom theme created: id=%s slug=%s user=%s", saved.id, saved.slug, user_id)

            self.settings_repo.set_active_theme(user_id, saved.id)
        except (SQLAlchemyError, RuntimeError) as exc:
            logger.exception("Failed to save custom theme for user=%s", user_id)
            if isinstance(exc, SQLAlchemyError):
                self.theme_repo.rollback()
            raise ThemePersistenceError(f"Could not save theme: {exc}", user_id=user_id) from exc
        return saved

    def apply_custom_theme(self, user_id: int, draft: Theme | Mapping[str, Any]) -> int:
        return self.save_custom_theme(user_id, draft).id

    def apply_generated_theme(self, user_id: int, payload: Any) -> Theme:
        """Validate an AI-generated payload, then save it as the user's custom theme.

        An invalid payload raises InvalidThemePayloadError before anything is
        stored.
        """
        fields = parse_generated_theme(payload)
        draft = Theme(**fields, user_id=user_id, supports_both_modes=True)
        return self.save_custom_theme(user_id, draft)


class ThemeEditSession:
    """Holds one user's in-progress theme draft.

    Readers get resolved colors, never the raw record. Abandoning a session
    discards the draft; only ``save`` touches storage.
    """

    def __init__(self, store: ThemeStore, user_id: int, mode: Mode | str = Mode.LIGHT, draft: Theme | None = None):
        self.store = store
        self.user_id = user_id
        self.mode = Mode(mode)
        self._draft = draft if draft is not None else store.get_active_theme_or_default(user_id)
        self.has_unsaved_changes = False

    @property
    def draft(self) -> Theme:
        return self._draft.model_copy(deep=True)

    def set_mode(self, mode: Mode | str) -> None:
        self.mode = Mode(mode)

    def select(self, theme_id: int) -> Theme:
        self.store.select_theme(self.user_id, theme_id)
        self._draft = self.store.get_theme_for_user(self.user_id, theme_id)
        self.has_unsaved_changes = False
        return self.draft

    def load(self, theme: Theme) -> None:
        """Preview ``theme`` in the editor without persisting the selection."""
        self._draft = theme.model_copy(deep=True)
        self.has_unsaved_changes = False

    def apply_edit(self, updates: Mapping[str, Any]) -> Theme:
        self._draft = self.store.apply_edit(self._draft, updates, self.mode, self.user_id)
        self.has_unsaved_changes = True
        return self.draft

    def save(self) -> int:
        saved = self.store.save_custom_theme(self.user_id, self._draft)
        self._draft = saved
        self.has_unsaved_changes = False
        return saved.id

    def resolved_color(self, token: str) -> str:
        return resolve_color(self._draft, token, self.mode)

    def palette(self) -> dict[str, str]:
        return resolve_palette(self._draft, self.mode)

    def css(self) -> str:
        return generate_complete_theme_css(self._draft)
