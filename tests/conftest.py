"""Shared test fixtures for Matchcast test suite."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from matchcast.domain.entities.catalog import (
    CatalogEntry,
    FetchResult,
    MediaItem,
    SourceRef,
)
from matchcast.infrastructure.config.schema import CatalogConfig

# ---------------------------------------------------------------------------
# Domain entity fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def catalog_entry() -> CatalogEntry:
    """Entry with two sources."""
    return CatalogEntry(
        id=42,
        title="Arsenal vs Chelsea",
        poster="https://img.example.com/42.png",
        sources=(
            SourceRef(source="alpha", id="a-1"),
            SourceRef(source="bravo", id="b-1"),
        ),
    )


@pytest.fixture()
def catalog_config() -> CatalogConfig:
    return CatalogConfig()


# ---------------------------------------------------------------------------
# Mock port fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def mock_catalog_fetcher(catalog_entry: CatalogEntry) -> AsyncMock:
    """Mock ContentCatalogPort returning one entry."""
    fetcher = AsyncMock()
    fetcher.fetch_result.return_value = FetchResult.of([catalog_entry])
    fetcher.fetch.return_value = [catalog_entry]
    return fetcher


@pytest.fixture()
def mock_media_fetcher() -> AsyncMock:
    """Mock MediaPort: one media item per source."""
    fetcher = AsyncMock()

    async def _fetch(source: str, source_id: str) -> list[MediaItem]:
        url = f"https://cdn.example.com/{source}/{source_id}.m3u8"
        return [MediaItem(url=url, source=source)]

    fetcher.fetch.side_effect = _fetch
    return fetcher


@pytest.fixture()
def mock_unlocker() -> AsyncMock:
    """Mock LinkUnlockerPort with premium disabled."""
    unlocker = AsyncMock()
    unlocker.enabled = False
    unlocker.unlock.return_value = None
    return unlocker
