"""create themes and user theme settings

Revision ID: 3f1c2a9d7b10
Revises:
Create Date: 2026-10-18 12:00:00.000000

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a9d7b10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

COLOR_TOKENS = (
    "primary",
    "secondary",
    "accent",
    "base_bg",
    "base_fg",
    "card_bg",
    "card_fg",
    "popover_bg",
    "popover_fg",
    "muted_bg",
    "muted_fg",
    "destructive_bg",
    "destructive_fg",
)


def _color_columns() -> list[sa.Column]:
    columns = []
    for token in COLOR_TOKENS:
        # "primary" is reserved in SQL
        legacy = "primary_color" if token == "primary" else token
        columns.append(sa.Column(legacy, sa.String(32), nullable=True))
        columns.append(sa.Column(f"{token}_light", sa.String(32), nullable=True))
        columns.append(sa.Column(f"{token}_dark", sa.String(32), nullable=True))
    return columns


def upgrade() -> None:
    op.create_table(
        "themes",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("slug", sa.String(120), nullable=False, unique=True),
        sa.Column("name", sa.String(100), nullable=False, server_default=""),
        *_color_columns(),
        sa.Column("font_sans", sa.String(255), nullable=True),
        sa.Column("font_serif", sa.String(255), nullable=True),
        sa.Column("font_mono", sa.String(255), nullable=True),
        sa.Column("letter_spacing", sa.Float, nullable=True),
        sa.Column("radius", sa.String(20), nullable=True),
        sa.Column("hue_shift", sa.Float, nullable=True),
        sa.Column("saturation_adjust", sa.Float, nullable=True),
        sa.Column("lightness_adjust", sa.Float, nullable=True),
        sa.Column("spacing_scale", sa.Float, nullable=True),
        sa.Column("shadow_strength", sa.String(10), nullable=True),
        sa.Column("supports_both_modes", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("is_built_in", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column(
            "parent_theme_id",
            sa.Integer,
            sa.ForeignKey("themes.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("user_id", sa.Integer, nullable=True),
        sa.Column("created_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()),
    )
    op.create_index("ix_themes_user_id", "themes", ["user_id"])
    op.create_index("ix_themes_parent_theme_id", "themes", ["parent_theme_id"])

    op.create_table(
        "user_theme_settings",
        sa.Column("user_id", sa.Integer, primary_key=True, autoincrement=False),
        sa.Column(
            "active_theme_id",
            sa.Integer,
            sa.ForeignKey("themes.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("wallpaper_url", sa.Text, nullable=True),
        sa.Column("low_motion", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("updated_at", sa.DateTime, nullable=False, server_default=sa.func.current_timestamp()),
    )


def downgrade() -> None:
    op.drop_table("user_theme_settings")
    op.drop_index("ix_themes_parent_theme_id", table_name="themes")
    op.drop_index("ix_themes_user_id", table_name="themes")
    op.drop_table("themes")
