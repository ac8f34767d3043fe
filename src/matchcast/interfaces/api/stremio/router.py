"""Stremio addon API endpoints (manifest, catalog, stream)."""

from __future__ import annotations

import json
from typing import Any, cast
from urllib.parse import parse_qsl

import structlog
from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from matchcast.infrastructure.config import AppConfig
from matchcast.interfaces.app_state import AppState

log = structlog.get_logger(__name__)

router = APIRouter(tags=["stremio"])

ADDON_ID = "community.matchcast"
ADDON_VERSION = "1.0.0"

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
}


def build_manifest(config: AppConfig) -> dict[str, Any]:
    """Build the Stremio addon manifest."""
    catalog = config.catalog
    return {
        "id": ADDON_ID,
        "version": ADDON_VERSION,
        "name": "Matchcast",
        "description": "Live media catalog with optional premium link unlocking",
        "resources": ["catalog", "stream"],
        "types": [catalog.type],
        "catalogs": [
            {
                "type": catalog.type,
                "id": catalog.id,
                "name": catalog.name,
                "extra": [
                    {
                        "name": "genre",
                        "options": list(catalog.category_aliases),
                        "isRequired": False,
                    }
                ],
            }
        ],
        "idPrefixes": [f"{catalog.id_prefix}:"],
        "behaviorHints": {
            "adult": False,
            "configurable": False,
        },
    }


def parse_extra(raw: str | None) -> dict[str, Any]:
    """Decode the catalog ``extra`` path segment.

    Accepts Stremio's ``genre=action&skip=0`` form and a JSON object.
    Raises ValueError for undecodable JSON.
    """
    if not raw:
        return {}
    text = raw.strip()
    if text.startswith("{"):
        return dict(json.loads(text))
    return dict(parse_qsl(text, keep_blank_values=False))


@router.get("/manifest.json")
async def stremio_manifest(request: Request) -> JSONResponse:
    """Serve the Stremio addon manifest."""
    state = cast(AppState, request.app.state)
    return JSONResponse(content=build_manifest(state.config), headers=CORS_HEADERS)


async def _catalog_response(
    state: AppState,
    content_type: str,
    catalog_id: str,
    extra: dict[str, Any],
) -> JSONResponse:
    metas = await state.pipeline.catalog(content_type, catalog_id, extra)
    return JSONResponse(
        content={"metas": [m.to_dict() for m in metas]},
        headers=CORS_HEADERS,
    )


@router.get("/catalog/{content_type}/{catalog_id}.json")
async def stremio_catalog(
    request: Request,
    content_type: str,
    catalog_id: str,
) -> JSONResponse:
    """Serve the live catalog (all categories)."""
    state = cast(AppState, request.app.state)
    return await _catalog_response(state, content_type, catalog_id, {})


@router.get("/catalog/{content_type}/{catalog_id}/{extra}.json")
async def stremio_catalog_extra(
    request: Request,
    content_type: str,
    catalog_id: str,
    extra: str,
) -> JSONResponse:
    """Serve the live catalog filtered by the ``extra`` segment (genre)."""
    state = cast(AppState, request.app.state)
    try:
        extra_obj = parse_extra(extra)
    except ValueError:
        log.warning("stremio_catalog_bad_extra", extra=extra)
        return JSONResponse(
            status_code=500,
            content={"error": "Service temporarily unavailable"},
            headers=CORS_HEADERS,
        )
    return await _catalog_response(state, content_type, catalog_id, extra_obj)


@router.get("/stream/{content_type}/{stream_id}.json")
async def stremio_stream(
    request: Request,
    content_type: str,
    stream_id: str,
) -> JSONResponse:
    """Resolve streams for a composite catalog id."""
    state = cast(AppState, request.app.state)
    log.info("stremio_stream_request", content_type=content_type, stream_id=stream_id)

    options = await state.pipeline.streams(content_type, stream_id)
    return JSONResponse(
        content={"streams": [o.to_dict() for o in options]},
        headers=CORS_HEADERS,
    )
