from atlas.cli.app import main_menu
from atlas.db import initialize_db
from atlas.logging import configure_logging


def main() -> None:
    configure_logging()
    initialize_db()
    main_menu()


if __name__ == "__main__":
    main()
