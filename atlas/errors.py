"""Exceptions raised by the theme engine."""

from __future__ import annotations

from typing import Any


class ThemeError(Exception):
    """Base class for theme engine failures."""


class ThemeNotFoundError(ThemeError):
    def __init__(self, theme_id: int | None = None, slug: str | None = None) -> None:
        self.theme_id = theme_id
        self.slug = slug
        key = f"id={theme_id}" if slug is None else f"slug={slug}"
        super().__init__(f"Theme not found ({key})")


class InvalidThemePayloadError(ThemeError):
    """A generated theme payload failed validation and was rejected as a whole."""

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        self.errors = errors
        fields = ", ".join(".".join(str(p) for p in err.get("loc", ())) or "<root>" for err in errors)
        super().__init__(f"Invalid theme payload: {fields}")

    def to_dict(self) -> dict[str, Any]:
        return {
            "error": "invalid_theme_payload",
            "errors": [
                {"field": ".".join(str(p) for p in err.get("loc", ())), "message": err.get("msg", "")}
                for err in self.errors
            ],
        }


class ThemePersistenceError(ThemeError):
    """Storage failed while saving a theme. The in-memory draft is untouched."""

    retryable = True

    def __init__(self, message: str, *, user_id: int | None = None) -> None:
        self.user_id = user_id
        super().__init__(message)
