"""Composition root: dependency injection via FastAPI lifespan."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator, cast

import httpx
import structlog
from fastapi import FastAPI

from matchcast.application.use_cases.resolution_pipeline import ResolutionPipeline
from matchcast.infrastructure.config.schema import AppConfig
from matchcast.infrastructure.content_api.client import (
    HttpxContentCatalogFetcher,
    HttpxMediaFetcher,
)
from matchcast.infrastructure.stremio.stream_ranker import StreamRanker
from matchcast.infrastructure.unlock.link_unlocker import HttpxLinkUnlocker
from matchcast.interfaces.app_state import AppState

log = structlog.get_logger(__name__)


def build_http_client(config: AppConfig) -> httpx.AsyncClient:
    """Shared client for every upstream call (no retries, one timeout)."""
    return httpx.AsyncClient(
        timeout=httpx.Timeout(config.http_timeout_seconds),
        follow_redirects=config.http_follow_redirects,
        headers={"User-Agent": config.http_user_agent},
    )


def wire_state(state: AppState, http_client: httpx.AsyncClient) -> None:
    """Build fetchers, unlocker and ranker into the pipeline on ``state``."""
    config = state.config
    state.http_client = http_client

    catalog_fetcher = HttpxContentCatalogFetcher(
        base_url=config.content_api_base_url,
        http_client=http_client,
        category_aliases=config.catalog.category_aliases,
    )
    media_fetcher = HttpxMediaFetcher(
        base_url=config.content_api_base_url,
        http_client=http_client,
    )
    unlocker = HttpxLinkUnlocker(
        base_url=config.unlock_api_base_url,
        agent=config.unlock_agent,
        api_key=config.premium_api_key,
        http_client=http_client,
    )
    state.pipeline = ResolutionPipeline(
        catalog_fetcher=catalog_fetcher,
        media_fetcher=media_fetcher,
        unlocker=unlocker,
        ranker=StreamRanker(),
        config=config.catalog,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Lifespan Hook: Initialize and cleanup all resources (DI Composition Root).

    Order matters:
        1. HTTP client (required by every upstream adapter)
        2. Content API fetchers, link unlocker, stream ranker
        3. Resolution pipeline
    """
    state = cast(AppState, app.state)
    config = state.config

    http_client = build_http_client(config)
    log.info(
        "http_client_initialized",
        timeout_seconds=config.http_timeout_seconds,
        follow_redirects=config.http_follow_redirects,
    )

    wire_state(state, http_client)
    log.info(
        "pipeline_initialized",
        content_api=config.content_api_base_url,
        premium_enabled=config.premium_enabled,
        catalog_id=config.catalog.id,
    )

    try:
        yield
    finally:
        await http_client.aclose()
        log.info("http_client_closed")
