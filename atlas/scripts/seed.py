"""Seed the database with the built-in catalog and a few demo customizations.

Usage:
    python -m atlas.scripts.seed
"""

from __future__ import annotations

import random

from faker import Faker
from rich.console import Console
from rich.table import Table
from sqlalchemy import text

from atlas.colors import hex_to_hsl
from atlas.db import get_connection, initialize_db
from atlas.models.theme import Mode
from atlas.repositories.factory import get_theme_repository, get_user_theme_settings_repository
from atlas.services.theme_store import ThemeEditSession, ThemeStore

console = Console()
fake = Faker()

DEMO_USER_IDS = (1, 2, 3)
EDITABLE_TOKENS = ("primary", "accent", "base_bg", "card_bg")

TABLES_TO_CLEAR = [
    "user_theme_settings",
    "themes",
]


def _clear_all(conn) -> None:
    console.print("\n[yellow]Clearing theme tables...[/yellow]")
    for table in TABLES_TO_CLEAR:
        conn.execute(text(f"DELETE FROM {table}"))  # noqa: S608
        console.print(f"  Cleared [dim]{table}[/dim]")
    conn.commit()
    console.print("[green]All theme tables cleared.[/green]\n")


def _seed_built_ins(theme_store: ThemeStore) -> int:
    console.print("[cyan]Storing built-in themes...[/cyan]")
    created = theme_store.seed_built_ins()
    console.print(f"[green]{created} built-in themes stored.[/green]\n")
    return created


def _customize(theme_store: ThemeStore, rng: random.Random) -> Table:
    console.print("[cyan]Creating demo customizations...[/cyan]")

    table = Table(title="Demo Users")
    table.add_column("User", justify="right")
    table.add_column("Forked From")
    table.add_column("Custom Theme")
    table.add_column("Edited")
    table.add_column("Wallpaper")

    built_ins = [t for t in theme_store.list_themes(DEMO_USER_IDS[0]) if t.is_built_in]
    for user_id in DEMO_USER_IDS:
        parent = rng.choice(built_ins)
        session = ThemeEditSession(theme_store, user_id, mode=rng.choice(list(Mode)))
        session.select(parent.id)

        token = rng.choice(EDITABLE_TOKENS)
        session.apply_edit({token: hex_to_hsl(fake.hex_color())})
        session.save()

        wallpaper = None
        if rng.random() < 0.5:
            wallpaper = fake.image_url()
            theme_store.set_wallpaper(user_id, wallpaper)

        table.add_row(
            str(user_id),
            parent.name,
            session.draft.name,
            f"{token} ({session.mode.value})",
            wallpaper or "-",
        )

    console.print(table)
    console.print(f"\n[green]{len(DEMO_USER_IDS)} users customized.[/green]\n")
    return table


def main() -> None:
    console.print("[bold magenta]Atlas - Theme Seeder[/bold magenta]")
    console.print("=" * 40)

    initialize_db()
    conn = get_connection()

    _clear_all(conn)

    theme_store = ThemeStore(get_theme_repository(), get_user_theme_settings_repository())
    rng = random.Random()

    created = _seed_built_ins(theme_store)
    _customize(theme_store, rng)

    console.print("[bold green]Seeding complete![/bold green]")
    console.print(f"  Built-in themes: {created}")
    console.print(f"  Demo users:      {len(DEMO_USER_IDS)}")


if __name__ == "__main__":  # pragma: no cover
    main()
