import logging
import sys

from atlas.settings import settings

TEXT_FORMAT = "%(levelname)s %(name)s: %(message)s"

# Third-party loggers that are noisy at INFO.
QUIET_LOGGERS = ("uvicorn.access", "alembic.runtime.migration", "sqlalchemy.engine")


def configure_logging() -> None:
    """Install a single stderr handler on the root logger.

    Call once at startup and again through ``reconfigure()`` after Alembic
    migrations, whose ``fileConfig`` replaces the root handlers.
    """
    level = getattr(logging, settings.log_level.upper(), logging.INFO)

    handler = logging.StreamHandler(sys.stderr)

    if settings.log_json:
        from pythonjsonlogger.json import JsonFormatter

        handler.setFormatter(
            JsonFormatter(
                fmt="%(asctime)s %(levelname)s %(name)s %(message)s",
                rename_fields={"asctime": "timestamp", "levelname": "level"},
            )
        )
    else:
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers.clear()
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))


reconfigure = configure_logging
