import questionary
from rich.console import Console

from atlas.cli.theme_menu import list_themes_menu, print_css_menu, seed_catalog, show_palette_menu
from atlas.repositories.factory import get_theme_repository, get_user_theme_settings_repository
from atlas.services.theme_store import ThemeStore
from atlas.settings import settings

console = Console()


def _build_services() -> tuple[ThemeStore]:
    theme_repo = get_theme_repository()
    settings_repo = get_user_theme_settings_repository()
    return (ThemeStore(theme_repo, settings_repo, default_theme_slug=settings.default_theme_slug),)


def main_menu() -> None:
    (theme_store,) = _build_services()

    console.print()
    console.print("[bold]Atlas Themes[/bold]", style="cyan")
    console.print()

    while True:
        choice = questionary.select(
            "Main Menu",
            choices=[
                "List Built-in Themes",
                "Show Palette",
                "Print CSS",
                "Seed Built-in Themes",
                "Exit",
            ],
        ).ask()

        if choice is None or choice == "Exit":
            console.print("[bold]Bye![/bold]")
            break
        elif choice == "List Built-in Themes":
            list_themes_menu(theme_store)
        elif choice == "Show Palette":
            show_palette_menu(theme_store)
        elif choice == "Print CSS":
            print_css_menu(theme_store)
        elif choice == "Seed Built-in Themes":
            seed_catalog(theme_store)
