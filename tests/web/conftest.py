"""Web test fixtures: TestClient with shared in-memory SQLite."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine, event, text
from sqlalchemy.pool import StaticPool

from atlas.repositories.sqlalchemy import SQLAlchemyThemeRepository, SQLAlchemyUserThemeSettingsRepository
from atlas.services.theme_store import ThemeStore
from tests.conftest import SCHEMA_DDL

TEST_USER_ID = 1


def _make_test_engine():
    """Create a fresh in-memory SQLite engine with shared connection pool."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    with engine.connect() as conn:
        for statement in SCHEMA_DDL.strip().split(";"):
            stmt = statement.strip()
            if stmt:
                conn.execute(text(stmt))
        conn.commit()

    return engine


def store_for(engine) -> tuple[ThemeStore, object]:
    """ThemeStore on a fresh connection. Caller closes the returned connection."""
    conn = engine.connect()
    return ThemeStore(SQLAlchemyThemeRepository(conn), SQLAlchemyUserThemeSettingsRepository(conn)), conn


def built_in_id(engine, slug: str) -> int:
    with engine.connect() as conn:
        return conn.execute(text("SELECT id FROM themes WHERE slug = :slug"), {"slug": slug}).scalar_one()


@pytest.fixture(autouse=True)
def web_test_db(monkeypatch):
    """Set up in-memory DB with the catalog seeded and patch the web app to use it."""
    engine = _make_test_engine()

    import web.deps as deps_module

    monkeypatch.setattr(deps_module, "get_engine", lambda: engine)

    import web.app as app_module

    monkeypatch.setattr(app_module, "initialize_db", lambda: None)
    monkeypatch.setattr(app_module, "get_engine", lambda: engine)

    store, conn = store_for(engine)
    store.seed_built_ins()
    conn.close()

    yield engine

    engine.dispose()


@pytest.fixture()
def test_engine(web_test_db):
    """Expose the test engine for helpers that need direct DB access."""
    return web_test_db


@pytest.fixture()
def client():
    from starlette.testclient import TestClient

    from web.app import app

    return TestClient(app)


@pytest.fixture()
def auth_client(client):
    """Client whose requests run as TEST_USER_ID."""
    from web.app import app
    from web.deps import current_user_id

    app.dependency_overrides[current_user_id] = lambda: TEST_USER_ID
    yield client
    app.dependency_overrides.pop(current_user_id, None)
