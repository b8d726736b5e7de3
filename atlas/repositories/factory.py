from atlas.repositories.base import ThemeRepository, UserThemeSettingsRepository


def get_theme_repository() -> ThemeRepository:
    from atlas.db import get_connection
    from atlas.repositories.sqlalchemy import SQLAlchemyThemeRepository

    return SQLAlchemyThemeRepository(get_connection())


def get_user_theme_settings_repository() -> UserThemeSettingsRepository:
    from atlas.db import get_connection
    from atlas.repositories.sqlalchemy import SQLAlchemyUserThemeSettingsRepository

    return SQLAlchemyUserThemeSettingsRepository(get_connection())
