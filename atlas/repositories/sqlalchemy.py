from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Connection, text
from sqlalchemy.engine import RowMapping

from atlas.models.theme import THEME_COLUMNS, ShadowStrength, Theme, UserThemeSettings
from atlas.repositories.base import ThemeRepository, UserThemeSettingsRepository

# "primary" is a reserved word in SQL.
_COLUMN_OVERRIDES = {"primary": "primary_color"}
_BOOL_FIELDS = ("supports_both_modes", "is_built_in")


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _column(field: str) -> str:
    return _COLUMN_OVERRIDES.get(field, field)


_INSERT_COLUMNS = ", ".join(_column(f) for f in THEME_COLUMNS)
_INSERT_PARAMS = ", ".join(f":{f}" for f in THEME_COLUMNS)
# Slug and built-in flag are fixed at creation.
_UPDATE_FIELDS = tuple(f for f in THEME_COLUMNS if f not in ("slug", "is_built_in"))
_UPDATE_SET = ", ".join(f"{_column(f)} = :{f}" for f in _UPDATE_FIELDS)


class SQLAlchemyThemeRepository(ThemeRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_theme(row: RowMapping) -> Theme:
        fields = {field: row[_column(field)] for field in THEME_COLUMNS}
        for field in _BOOL_FIELDS:
            fields[field] = bool(fields[field])
        if fields["shadow_strength"] is not None:
            fields["shadow_strength"] = ShadowStrength(fields["shadow_strength"])
        return Theme(
            id=row["id"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
            **fields,
        )

    @staticmethod
    def _params(theme: Theme) -> dict:
        params = {field: getattr(theme, field) for field in THEME_COLUMNS}
        if theme.shadow_strength is not None:
            params["shadow_strength"] = theme.shadow_strength.value
        return params

    def create(self, theme: Theme) -> Theme:
        now = _now()
        result = self.conn.execute(
            text(
                f"INSERT INTO themes ({_INSERT_COLUMNS}, created_at, updated_at) "
                f"VALUES ({_INSERT_PARAMS}, :created_at, :updated_at)"
            ),
            {**self._params(theme), "created_at": now, "updated_at": now},
        )
        theme_id = result.lastrowid
        self.conn.commit()
        created = self.get_by_id(theme_id)
        if created is None:
            raise RuntimeError(f"Failed to retrieve theme after create (slug={theme.slug})")
        return created

    def get_by_id(self, theme_id: int) -> Theme | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM themes WHERE id = :id"),
                {"id": theme_id},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_theme(row)

    def get_by_slug(self, slug: str) -> Theme | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM themes WHERE slug = :slug"),
                {"slug": slug},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_theme(row)

    def list_built_ins(self) -> list[Theme]:
        rows = self.conn.execute(text("SELECT * FROM themes WHERE is_built_in = 1 ORDER BY id")).mappings().fetchall()
        return [self._row_to_theme(row) for row in rows]

    def list_custom_for_user(self, user_id: int) -> list[Theme]:
        rows = (
            self.conn.execute(
                text("SELECT * FROM themes WHERE is_built_in = 0 AND user_id = :user_id ORDER BY id"),
                {"user_id": user_id},
            )
            .mappings()
            .fetchall()
        )
        return [self._row_to_theme(row) for row in rows]

    def update(self, theme: Theme) -> Theme:
        if not theme.is_persisted:
            raise ValueError("Cannot update theme without an id")
        if theme.is_built_in:
            raise ValueError("Built-in themes are read-only")
        params = {field: value for field, value in self._params(theme).items() if field in _UPDATE_FIELDS}
        self.conn.execute(
            text(f"UPDATE themes SET {_UPDATE_SET}, updated_at = :updated_at WHERE id = :id AND is_built_in = 0"),
            {**params, "updated_at": _now(), "id": theme.id},
        )
        self.conn.commit()
        result = self.get_by_id(theme.id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve theme after update (id={theme.id})")
        return result

    def rollback(self) -> None:
        self.conn.rollback()


class SQLAlchemyUserThemeSettingsRepository(UserThemeSettingsRepository):
    def __init__(self, conn: Connection) -> None:
        self.conn = conn

    @staticmethod
    def _row_to_settings(row: RowMapping) -> UserThemeSettings:
        return UserThemeSettings(
            user_id=row["user_id"],
            active_theme_id=row["active_theme_id"],
            wallpaper_url=row["wallpaper_url"],
            low_motion=bool(row["low_motion"]),
            updated_at=row["updated_at"],
        )

    def get(self, user_id: int) -> UserThemeSettings | None:
        row = (
            self.conn.execute(
                text("SELECT * FROM user_theme_settings WHERE user_id = :user_id"),
                {"user_id": user_id},
            )
            .mappings()
            .fetchone()
        )
        if row is None:
            return None
        return self._row_to_settings(row)

    def _ensure_row(self, user_id: int) -> None:
        if self.get(user_id) is None:
            self.conn.execute(
                text(
                    "INSERT INTO user_theme_settings (user_id, low_motion, updated_at) "
                    "VALUES (:user_id, 0, :updated_at)"
                ),
                {"user_id": user_id, "updated_at": _now()},
            )

    def _get_or_raise(self, user_id: int) -> UserThemeSettings:
        result = self.get(user_id)
        if result is None:
            raise RuntimeError(f"Failed to retrieve theme settings after write (user_id={user_id})")
        return result

    def set_active_theme(self, user_id: int, theme_id: int, *, clear_wallpaper: bool = False) -> UserThemeSettings:
        self._ensure_row(user_id)
        if clear_wallpaper:
            sql = (
                "UPDATE user_theme_settings SET active_theme_id = :theme_id, wallpaper_url = NULL, "
                "updated_at = :updated_at WHERE user_id = :user_id"
            )
        else:
            sql = (
                "UPDATE user_theme_settings SET active_theme_id = :theme_id, "
                "updated_at = :updated_at WHERE user_id = :user_id"
            )
        self.conn.execute(text(sql), {"theme_id": theme_id, "updated_at": _now(), "user_id": user_id})
        self.conn.commit()
        return self._get_or_raise(user_id)

    def set_wallpaper(self, user_id: int, wallpaper_url: str | None) -> UserThemeSettings:
        self._ensure_row(user_id)
        self.conn.execute(
            text(
                "UPDATE user_theme_settings SET wallpaper_url = :wallpaper_url, "
                "updated_at = :updated_at WHERE user_id = :user_id"
            ),
            {"wallpaper_url": wallpaper_url, "updated_at": _now(), "user_id": user_id},
        )
        self.conn.commit()
        return self._get_or_raise(user_id)
