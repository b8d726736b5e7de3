from unittest.mock import MagicMock, patch

from atlas.repositories.factory import get_theme_repository, get_user_theme_settings_repository
from atlas.repositories.sqlalchemy import SQLAlchemyThemeRepository, SQLAlchemyUserThemeSettingsRepository


class TestRepoFactory:
    @patch("atlas.db.get_connection")
    def test_get_theme_repository(self, mock_conn):
        mock_conn.return_value = MagicMock()
        repo = get_theme_repository()
        assert isinstance(repo, SQLAlchemyThemeRepository)
        assert repo.conn is mock_conn.return_value

    @patch("atlas.db.get_connection")
    def test_get_user_theme_settings_repository(self, mock_conn):
        mock_conn.return_value = MagicMock()
        repo = get_user_theme_settings_repository()
        assert isinstance(repo, SQLAlchemyUserThemeSettingsRepository)
