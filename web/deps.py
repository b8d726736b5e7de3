from __future__ import annotations

import logging

from fastapi import HTTPException, Request
from starlette.types import ASGIApp, Receive, Scope, Send

from atlas.db import get_engine
from atlas.repositories.sqlalchemy import SQLAlchemyThemeRepository, SQLAlchemyUserThemeSettingsRepository
from atlas.services.theme_store import ThemeStore
from atlas.settings import settings

logger = logging.getLogger(__name__)


class DBConnectionMiddleware:
    """Pure ASGI middleware: at most one DB connection per request."""

    def __init__(self, app: ASGIApp) -> None:
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request = Request(scope)
        request.state.db_conn = None
        try:
            await self.app(scope, receive, send)
        finally:
            conn = getattr(request.state, "db_conn", None)
            if conn is not None:
                conn.close()
                logger.debug("DB connection closed for %s %s", request.method, request.url.path)


def _get_conn(request: Request):
    """Lazy per-request connection, created on first use and closed by the middleware."""
    if request.state.db_conn is None:
        logger.debug("Creating DB connection for %s %s", request.method, request.url.path)
        request.state.db_conn = get_engine().connect()
    return request.state.db_conn


def get_theme_store(request: Request) -> ThemeStore:
    conn = _get_conn(request)
    return ThemeStore(
        SQLAlchemyThemeRepository(conn),
        SQLAlchemyUserThemeSettingsRepository(conn),
        default_theme_slug=settings.default_theme_slug,
    )


def current_user_id(request: Request) -> int:
    """User id from the signed session cookie; 401 when nobody is signed in."""
    user_id = request.session.get("user_id")
    if not user_id:
        logger.info("Unauthenticated request: %s %s", request.method, request.url.path)
        raise HTTPException(status_code=401, detail="Not authenticated")
    return int(user_id)
