from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import BaseModel
from starlette.responses import Response

from atlas.css import generate_complete_theme_css
from atlas.errors import ThemeNotFoundError
from atlas.models.theme import Mode, Theme
from atlas.resolver import resolve_palette
from atlas.services.theme_store import ThemeStore
from web.deps import current_user_id, get_theme_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/themes")


class SelectThemeRequest(BaseModel):
    theme_id: int


class EditThemeRequest(BaseModel):
    draft: Theme | None = None
    updates: dict[str, Any]
    mode: Mode = Mode.LIGHT


class SaveThemeRequest(BaseModel):
    draft: Theme


class WallpaperRequest(BaseModel):
    url: str | None = None


def _serialize_theme(theme: Theme) -> dict:
    return theme.model_dump(mode="json")


def _with_palettes(theme: Theme) -> dict:
    return {
        "theme": _serialize_theme(theme),
        "palette": {mode.value: resolve_palette(theme, mode) for mode in Mode},
    }


@router.get("")
async def list_themes(user_id: int = Depends(current_user_id), store: ThemeStore = Depends(get_theme_store)):
    themes = store.list_themes(user_id)
    return {"themes": [_serialize_theme(t) for t in themes]}


@router.get("/built-ins")
async def list_built_ins(store: ThemeStore = Depends(get_theme_store)):
    return {"themes": [_serialize_theme(t) for t in store.list_built_ins()]}


@router.get("/random")
async def random_built_in(store: ThemeStore = Depends(get_theme_store)):
    return _with_palettes(store.random_built_in())


@router.get("/active")
async def active_theme(user_id: int = Depends(current_user_id), store: ThemeStore = Depends(get_theme_store)):
    theme = store.get_active_theme_or_default(user_id)
    user_settings = store.get_user_theme_settings(user_id)
    return {
        **_with_palettes(theme),
        "wallpaper_url": user_settings.wallpaper_url if user_settings else None,
    }


@router.get("/active.css")
async def active_theme_css(user_id: int = Depends(current_user_id), store: ThemeStore = Depends(get_theme_store)):
    theme = store.get_active_theme_or_default(user_id)
    return Response(generate_complete_theme_css(theme), media_type="text/css")


@router.post("/select")
async def select_theme(
    body: SelectThemeRequest,
    user_id: int = Depends(current_user_id),
    store: ThemeStore = Depends(get_theme_store),
):
    logger.info("POST /themes/select: user=%s theme=%s", user_id, body.theme_id)
    user_settings = store.select_theme(user_id, body.theme_id)
    return {"active_theme_id": user_settings.active_theme_id, "wallpaper_url": user_settings.wallpaper_url}


@router.post("/edit")
async def edit_theme(
    body: EditThemeRequest,
    user_id: int = Depends(current_user_id),
    store: ThemeStore = Depends(get_theme_store),
):
    """Apply updates to a draft and return the new draft. Nothing is saved."""
    draft = body.draft if body.draft is not None else store.get_active_theme_or_default(user_id)
    edited = store.apply_edit(draft, body.updates, body.mode, user_id)
    return _with_palettes(edited)


@router.post("/save")
async def save_theme(
    body: SaveThemeRequest,
    user_id: int = Depends(current_user_id),
    store: ThemeStore = Depends(get_theme_store),
):
    logger.info("POST /themes/save: user=%s slug=%s", user_id, body.draft.slug or "<new>")
    saved = store.save_custom_theme(user_id, body.draft)
    return {"theme_id": saved.id, "theme": _serialize_theme(saved)}


@router.post("/generate")
async def save_generated_theme(
    payload: Any = Body(...),
    user_id: int = Depends(current_user_id),
    store: ThemeStore = Depends(get_theme_store),
):
    logger.info("POST /themes/generate: user=%s", user_id)
    saved = store.apply_generated_theme(user_id, payload)
    return {"theme_id": saved.id, "theme": _serialize_theme(saved)}


@router.put("/wallpaper")
async def set_wallpaper(
    body: WallpaperRequest,
    user_id: int = Depends(current_user_id),
    store: ThemeStore = Depends(get_theme_store),
):
    user_settings = store.set_wallpaper(user_id, body.url)
    return {"wallpaper_url": user_settings.wallpaper_url}


@router.get("/css/{slug}")
async def built_in_css(slug: str, store: ThemeStore = Depends(get_theme_store)):
    theme = store.get_built_in(slug)
    if theme is None:
        raise ThemeNotFoundError(slug=slug)
    return Response(generate_complete_theme_css(theme), media_type="text/css")
