"""Ports for the upstream catalog/media content API."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from matchcast.domain.entities.catalog import CatalogEntry, FetchResult, MediaItem


@runtime_checkable
class ContentCatalogPort(Protocol):
    """Lists catalog entries for a category (``"all"`` = everything)."""

    async def fetch_result(self, category: str) -> FetchResult[CatalogEntry]:
        """Fetch entries with a status explaining an empty list."""
        ...

    async def fetch(self, category: str) -> list[CatalogEntry]:
        """Fetch entries. Never raises; failures yield an empty list."""
        ...


@runtime_checkable
class MediaPort(Protocol):
    """Lists playable media items for one (source, id) pair."""

    async def fetch_result(
        self, source: str, source_id: str
    ) -> FetchResult[MediaItem]:
        """Fetch media items with a status explaining an empty list."""
        ...

    async def fetch(self, source: str, source_id: str) -> list[MediaItem]:
        """Fetch media items. Never raises; failures yield an empty list."""
        ...
