from __future__ import annotations

import logging
import traceback
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from atlas.db import get_engine, initialize_db
from atlas.errors import InvalidThemePayloadError, ThemeNotFoundError, ThemePersistenceError
from atlas.logging import configure_logging, reconfigure
from atlas.repositories.sqlalchemy import SQLAlchemyThemeRepository, SQLAlchemyUserThemeSettingsRepository
from atlas.services.theme_store import ThemeStore
from atlas.settings import settings
from web.deps import DBConnectionMiddleware
from web.routes.theme import router as theme_router

configure_logging()
logger = logging.getLogger(__name__)


def seed_catalog() -> None:
    with get_engine().connect() as conn:
        store = ThemeStore(SQLAlchemyThemeRepository(conn), SQLAlchemyUserThemeSettingsRepository(conn))
        store.seed_built_ins()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    initialize_db()
    # Re-apply logging config, Alembic's fileConfig may have overridden it
    reconfigure()
    if settings.seed_built_ins_on_startup:
        seed_catalog()
    logger.info("Application started")
    yield


app = FastAPI(docs_url=None, redoc_url=None, lifespan=lifespan)

app.add_middleware(DBConnectionMiddleware)
app.add_middleware(SessionMiddleware, secret_key=settings.get_secret_key())

app.include_router(theme_router)


@app.exception_handler(InvalidThemePayloadError)
async def invalid_payload_handler(request: Request, exc: InvalidThemePayloadError):
    logger.info("Rejected theme payload on %s %s (%d error(s))", request.method, request.url.path, len(exc.errors))
    return JSONResponse(exc.to_dict(), status_code=422)


@app.exception_handler(ThemeNotFoundError)
async def not_found_handler(request: Request, exc: ThemeNotFoundError):
    return JSONResponse({"error": "theme_not_found", "detail": str(exc)}, status_code=404)


@app.exception_handler(ThemePersistenceError)
async def persistence_error_handler(request: Request, exc: ThemePersistenceError):
    return JSONResponse(
        {"error": "theme_not_saved", "detail": str(exc), "retryable": exc.retryable},
        status_code=503,
    )


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    logger.info("Bad request on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"error": "bad_request", "detail": str(exc)}, status_code=400)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(
        "Unhandled exception on %s %s:\n%s",
        request.method,
        request.url.path,
        traceback.format_exc(),
    )
    return JSONResponse({"error": "internal_error"}, status_code=500)


@app.get("/health")
async def health():
    return {"status": "ok"}
