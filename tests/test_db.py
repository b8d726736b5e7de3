import os
from unittest.mock import MagicMock, patch

import atlas.db as db_module


class TestEngineOptions:
    def test_sqlite(self):
        assert db_module._engine_options("sqlite:///atlas.db") == {"connect_args": {"check_same_thread": False}}

    def test_server_backends_ping(self):
        options = db_module._engine_options("postgresql://u:p@host/db")
        assert options["pool_pre_ping"] is True


class TestGetEngine:
    def test_creates_engine(self, monkeypatch):
        monkeypatch.setattr(db_module, "_engine", None)
        with patch.object(db_module, "settings") as mock_settings:
            mock_settings.db_url = "sqlite:///:memory:"
            engine = db_module.get_engine()
            assert engine is not None
            assert db_module._engine is engine

    def test_returns_cached_engine(self, monkeypatch):
        sentinel = MagicMock()
        monkeypatch.setattr(db_module, "_engine", sentinel)
        engine = db_module.get_engine()
        assert engine is sentinel


class TestGetConnection:
    def test_creates_connection(self, monkeypatch):
        monkeypatch.setattr(db_module, "_connection", None)
        mock_engine = MagicMock()
        mock_conn = MagicMock()
        mock_engine.connect.return_value = mock_conn
        with patch.object(db_module, "get_engine", return_value=mock_engine):
            conn = db_module.get_connection()
            assert conn is mock_conn

    def test_returns_cached_connection(self, monkeypatch):
        sentinel = MagicMock()
        monkeypatch.setattr(db_module, "_connection", sentinel)
        conn = db_module.get_connection()
        assert conn is sentinel


class TestAlembicConfig:
    def test_points_at_project_migrations(self):
        with patch.object(db_module, "settings") as mock_settings:
            mock_settings.db_url = "sqlite:///elsewhere.db"
            cfg = db_module._get_alembic_config()
        assert cfg.get_main_option("sqlalchemy.url") == "sqlite:///elsewhere.db"
        assert cfg.get_main_option("script_location").endswith(os.path.join("", "alembic"))


class TestInitializeDb:
    @patch("atlas.db.command")
    @patch("atlas.db._get_alembic_config")
    def test_calls_alembic_upgrade(self, mock_config, mock_command):
        mock_cfg = MagicMock()
        mock_config.return_value = mock_cfg
        db_module.initialize_db()
        mock_command.upgrade.assert_called_once_with(mock_cfg, "head")

    def test_migrations_build_schema(self, tmp_path, monkeypatch):
        from sqlalchemy import create_engine, inspect

        url = f"sqlite:///{tmp_path / 'migrated.db'}"
        monkeypatch.setattr(db_module.settings, "db_url", url)
        db_module.initialize_db()

        inspector = inspect(create_engine(url))
        assert set(inspector.get_table_names()) >= {"themes", "user_theme_settings", "alembic_version"}
        columns = {c["name"] for c in inspector.get_columns("themes")}
        assert {"primary_color", "primary_light", "primary_dark", "parent_theme_id", "shadow_strength"} <= columns
