import logging
from unittest.mock import patch

from atlas.logging import QUIET_LOGGERS, configure_logging


class TestConfigureLogging:
    def test_json_format(self):
        with patch("atlas.logging.settings") as mock_settings:
            mock_settings.log_level = "INFO"
            mock_settings.log_json = True
            configure_logging()

        root = logging.getLogger()
        assert len(root.handlers) == 1
        handler = root.handlers[0]
        from pythonjsonlogger.json import JsonFormatter

        assert isinstance(handler.formatter, JsonFormatter)

    def test_text_format(self):
        with patch("atlas.logging.settings") as mock_settings:
            mock_settings.log_level = "debug"
            mock_settings.log_json = False
            configure_logging()

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert not root.handlers[0].formatter.__class__.__name__.startswith("Json")

    def test_reconfigure_does_not_stack_handlers(self):
        with patch("atlas.logging.settings") as mock_settings:
            mock_settings.log_level = "INFO"
            mock_settings.log_json = False
            configure_logging()
            configure_logging()

        assert len(logging.getLogger().handlers) == 1

    def test_quiet_loggers(self):
        with patch("atlas.logging.settings") as mock_settings:
            mock_settings.log_level = "DEBUG"
            mock_settings.log_json = False
            configure_logging()

        for name in QUIET_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        with patch("atlas.logging.settings") as mock_settings:
            mock_settings.log_level = "chatty"
            mock_settings.log_json = False
            configure_logging()

        assert logging.getLogger().level == logging.INFO
