"""Root conftest: in-memory SQLite engine and fixtures for the full schema."""

from __future__ import annotations

import pytest
from sqlalchemy import Connection, create_engine, event, text
from sqlalchemy.engine import Engine

from atlas.models.theme import Theme

# Matches Alembic head: 3f1c2a9d7b10 (create themes and user theme settings)
SCHEMA_DDL = """
CREATE TABLE themes (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    slug VARCHAR(120) NOT NULL UNIQUE,
    name VARCHAR(100) NOT NULL DEFAULT '',
    primary_color TEXT,
    primary_light TEXT,
    primary_dark TEXT,
    secondary TEXT,
    secondary_light TEXT,
    secondary_dark TEXT,
    accent TEXT,
    accent_light TEXT,
    accent_dark TEXT,
    base_bg TEXT,
    base_bg_light TEXT,
    base_bg_dark TEXT,
    base_fg TEXT,
    base_fg_light TEXT,
    base_fg_dark TEXT,
    card_bg TEXT,
    card_bg_light TEXT,
    card_bg_dark TEXT,
    card_fg TEXT,
    card_fg_light TEXT,
    card_fg_dark TEXT,
    popover_bg TEXT,
    popover_bg_light TEXT,
    popover_bg_dark TEXT,
    popover_fg TEXT,
    popover_fg_light TEXT,
    popover_fg_dark TEXT,
    muted_bg TEXT,
    muted_bg_light TEXT,
    muted_bg_dark TEXT,
    muted_fg TEXT,
    muted_fg_light TEXT,
    muted_fg_dark TEXT,
    destructive_bg TEXT,
    destructive_bg_light TEXT,
    destructive_bg_dark TEXT,
    destructive_fg TEXT,
    destructive_fg_light TEXT,
    destructive_fg_dark TEXT,
    font_sans TEXT,
    font_serif TEXT,
    font_mono TEXT,
    letter_spacing FLOAT,
    radius VARCHAR(20),
    hue_shift FLOAT,
    saturation_adjust FLOAT,
    lightness_adjust FLOAT,
    spacing_scale FLOAT,
    shadow_strength VARCHAR(10),
    supports_both_modes TINYINT NOT NULL DEFAULT 0,
    is_built_in TINYINT NOT NULL DEFAULT 0,
    parent_theme_id INTEGER REFERENCES themes(id) ON DELETE SET NULL,
    user_id INTEGER,
    created_at DATETIME NOT NULL,
    updated_at DATETIME NOT NULL
);

CREATE INDEX ix_themes_user_id ON themes (user_id);

CREATE TABLE user_theme_settings (
    user_id INTEGER PRIMARY KEY,
    active_theme_id INTEGER REFERENCES themes(id) ON DELETE SET NULL,
    wallpaper_url TEXT,
    low_motion TINYINT NOT NULL DEFAULT 0,
    updated_at DATETIME NOT NULL
);
"""


@pytest.fixture()
def db_engine() -> Engine:
    engine = create_engine("sqlite:///:memory:")

    @event.listens_for(engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys = ON")
        cursor.close()

    return engine


@pytest.fixture()
def db_connection(db_engine: Engine) -> Connection:
    conn = db_engine.connect()
    for statement in SCHEMA_DDL.strip().split(";"):
        stmt = statement.strip()
        if stmt:
            conn.execute(text(stmt))
    conn.commit()
    yield conn
    conn.close()


def sample_custom_theme(**overrides) -> Theme:
    defaults = dict(
        slug="custom-user-1",
        name="My Theme",
        primary="10 80% 50%",
        primary_light="10 80% 50%",
        primary_dark="10 80% 60%",
        base_bg="0 0% 100%",
        radius="0.5rem",
        user_id=1,
    )
    defaults.update(overrides)
    return Theme(**defaults)


def sample_generated_payload(**overrides) -> dict:
    payload = {
        "name": "Desert Dusk",
        "primary": "25 85% 55%",
        "secondary": "30 30% 88%",
        "accent": "350 70% 60%",
        "base_bg": "35 40% 97%",
        "base_fg": "20 20% 12%",
        "card_bg": "0 0% 100%",
        "card_fg": "20 20% 12%",
        "popover_bg": "0 0% 100%",
        "popover_fg": "20 20% 12%",
        "muted_bg": "30 25% 92%",
        "muted_fg": "20 10% 42%",
        "destructive_bg": "0 72% 51%",
        "destructive_fg": "0 0% 100%",
        "font_sans": "Inter, system-ui, sans-serif",
        "font_serif": "Lora, Georgia, serif",
        "font_mono": "Fira Code, monospace",
        "radius": "0.75rem",
        "letter_spacing": 0.01,
        "hue_shift": 0,
        "saturation_adjust": 5,
        "lightness_adjust": -3,
        "spacing_scale": 1.1,
        "shadow_strength": "subtle",
    }
    payload.update(overrides)
    return payload
