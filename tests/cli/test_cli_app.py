from unittest.mock import MagicMock, patch


class TestBuildServices:
    @patch("atlas.cli.app.get_user_theme_settings_repository")
    @patch("atlas.cli.app.get_theme_repository")
    def test_returns_theme_store(self, mock_theme_repo, mock_settings_repo):
        from atlas.cli.app import _build_services
        from atlas.services.theme_store import ThemeStore

        result = _build_services()
        assert isinstance(result, tuple)
        assert len(result) == 1
        (store,) = result
        assert isinstance(store, ThemeStore)
        assert store.theme_repo is mock_theme_repo.return_value


class TestMainMenu:
    @patch("atlas.cli.app._build_services")
    @patch("atlas.cli.app.questionary")
    def test_exit_immediately(self, mock_q, mock_build):
        from atlas.cli.app import main_menu

        mock_build.return_value = (MagicMock(),)
        mock_q.select.return_value.ask.return_value = "Exit"

        main_menu()
        mock_q.select.return_value.ask.assert_called()

    @patch("atlas.cli.app._build_services")
    @patch("atlas.cli.app.questionary")
    def test_none_exits(self, mock_q, mock_build):
        from atlas.cli.app import main_menu

        mock_build.return_value = (MagicMock(),)
        mock_q.select.return_value.ask.return_value = None

        main_menu()

    @patch("atlas.cli.app.seed_catalog")
    @patch("atlas.cli.app.print_css_menu")
    @patch("atlas.cli.app.show_palette_menu")
    @patch("atlas.cli.app.list_themes_menu")
    @patch("atlas.cli.app._build_services")
    @patch("atlas.cli.app.questionary")
    def test_dispatches_each_choice(self, mock_q, mock_build, mock_list, mock_palette, mock_css, mock_seed):
        from atlas.cli.app import main_menu

        store = MagicMock()
        mock_build.return_value = (store,)
        mock_q.select.return_value.ask.side_effect = [
            "List Built-in Themes",
            "Show Palette",
            "Print CSS",
            "Seed Built-in Themes",
            "Exit",
        ]

        main_menu()

        mock_list.assert_called_once_with(store)
        mock_palette.assert_called_once_with(store)
        mock_css.assert_called_once_with(store)
        mock_seed.assert_called_once_with(store)


class TestMain:
    @patch("atlas.__main__.main_menu")
    @patch("atlas.__main__.initialize_db")
    @patch("atlas.__main__.configure_logging")
    def test_main(self, mock_logging, mock_init, mock_menu):
        from atlas.__main__ import main

        main()
        mock_logging.assert_called_once()
        mock_init.assert_called_once()
        mock_menu.assert_called_once()
