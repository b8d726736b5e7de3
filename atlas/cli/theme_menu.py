from __future__ import annotations

import questionary
from rich.console import Console
from rich.table import Table

from atlas.colors import hsl_to_hex
from atlas.css import generate_theme_css
from atlas.models.theme import Mode, Theme
from atlas.resolver import resolve_palette
from atlas.services.theme_store import ThemeStore

console = Console()


def _pick_theme(theme_store: ThemeStore) -> Theme | None:
    themes = theme_store.list_built_ins()
    choices = [questionary.Choice(title=f"{t.name} ({t.slug})", value=t.slug) for t in themes]
    choices.append(questionary.Choice(title="Back", value=None))

    slug = questionary.select("Select a theme:", choices=choices).ask()
    if slug is None:
        return None
    return theme_store.get_built_in(slug)


def _pick_mode() -> Mode | None:
    value = questionary.select("Mode:", choices=[m.value for m in Mode]).ask()
    return Mode(value) if value else None


def list_themes_menu(theme_store: ThemeStore) -> None:
    themes = theme_store.list_built_ins()

    table = Table(title="Built-in Themes")
    table.add_column("Slug", style="cyan")
    table.add_column("Name")
    table.add_column("Primary (light)")
    table.add_column("Primary (dark)")
    table.add_column("Radius", justify="right")
    table.add_column("Shadow")

    for t in themes:
        table.add_row(
            t.slug,
            t.name,
            hsl_to_hex(t.primary_light or ""),
            hsl_to_hex(t.primary_dark or ""),
            t.radius or "-",
            t.shadow_strength.value if t.shadow_strength else "-",
        )

    console.print(table)


def show_palette_menu(theme_store: ThemeStore) -> None:
    theme = _pick_theme(theme_store)
    if theme is None:
        return
    mode = _pick_mode()
    if mode is None:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    table = Table(title=f"{theme.name} ({mode.value})")
    table.add_column("Token", style="cyan")
    table.add_column("HSL")
    table.add_column("Hex")
    table.add_column("Swatch")

    for token, value in resolve_palette(theme, mode).items():
        hex_value = hsl_to_hex(value)
        table.add_row(token, value, hex_value, f"[on {hex_value.lower()}]      [/]")

    console.print(table)


def print_css_menu(theme_store: ThemeStore) -> None:
    theme = _pick_theme(theme_store)
    if theme is None:
        return
    mode = _pick_mode()
    if mode is None:
        console.print("[yellow]Cancelled.[/yellow]")
        return

    console.print(generate_theme_css(theme, mode), markup=False, highlight=False)


def seed_catalog(theme_store: ThemeStore) -> None:
    try:
        created = theme_store.seed_built_ins()
    except Exception as e:
        console.print(f"[red]Failed to seed themes: {e}[/red]")
        return

    if created:
        console.print(f"[green bold]{created} built-in theme(s) stored.[/green bold]")
    else:
        console.print("[yellow]All built-in themes are already stored.[/yellow]")
