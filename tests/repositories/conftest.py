import pytest
from sqlalchemy import Connection

from atlas.repositories.sqlalchemy import SQLAlchemyThemeRepository, SQLAlchemyUserThemeSettingsRepository


@pytest.fixture()
def theme_repo(db_connection: Connection) -> SQLAlchemyThemeRepository:
    return SQLAlchemyThemeRepository(db_connection)


@pytest.fixture()
def settings_repo(db_connection: Connection) -> SQLAlchemyUserThemeSettingsRepository:
    return SQLAlchemyUserThemeSettingsRepository(db_connection)
