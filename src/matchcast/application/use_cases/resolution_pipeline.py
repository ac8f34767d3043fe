"""Live-media resolution pipeline.

catalog: category -> content API -> display items (first N).
streams: composite id -> re-fetch catalog -> per source media list
-> unlock or direct -> rank -> StreamOption list.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any, Protocol
from uuid import uuid4

import structlog

from matchcast.domain.entities.catalog import (
    CatalogEntry,
    CompositeId,
    MediaItem,
    MetaPreview,
    MetaVideo,
    StreamOption,
    UnlockedLink,
)
from matchcast.domain.ports.content_api import ContentCatalogPort, MediaPort
from matchcast.domain.ports.link_unlocker import LinkUnlockerPort

log = structlog.get_logger(__name__)

# ---------------------------------------------------------------------------
# Protocols for what this use case needs from its collaborators.
# ---------------------------------------------------------------------------


class _CatalogConfig(Protocol):
    """Configuration values consumed by ResolutionPipeline."""

    type: str
    id: str
    id_prefix: str
    max_items: int
    default_category: str
    poster_placeholder: str


class _StreamRanker(Protocol):
    def rank(self, options: list[StreamOption]) -> list[StreamOption]: ...


PREMIUM_LABEL = "Premium Service"
DIRECT_LABEL = "Direct Access"
DEFAULT_MEDIA_QUALITY = "HD"

_BYTES_PER_MB = 1024 * 1024
_HALF_MB = _BYTES_PER_MB // 2

_GENRES = ["Entertainment", "Live", "Premium"]
_VIDEO_TITLE = "Premium Stream"
_DESCRIPTION_FOOTER = (
    "Premium Access\n"
    "• Enhanced quality\n"
    "• Unrestricted streaming\n"
    "• Global availability"
)


def _fallback_id() -> str:
    return uuid4().hex[:12]


def _current_year() -> int:
    return datetime.now(timezone.utc).year


def premium_option(link: UnlockedLink) -> StreamOption:
    """StreamOption for a successfully unlocked link."""
    # Half-up rounding in integer arithmetic; sizes can exceed float range.
    size_mb = (link.size + _HALF_MB) // _BYTES_PER_MB
    return StreamOption(
        url=link.url,
        title=f"{link.quality} Premium - {link.host}",
        label=PREMIUM_LABEL,
        description=(
            "Enhanced streaming via premium service\n"
            f"Quality: {link.quality}\n"
            f"Provider: {link.host}\n"
            f"Size: {size_mb}MB"
        ),
    )


def direct_option(item: MediaItem) -> StreamOption:
    """StreamOption for the raw URL of a media item."""
    if not item.url:
        raise ValueError(f"media item from {item.source} has no url")
    return StreamOption(
        url=item.url,
        title=f"{item.quality or DEFAULT_MEDIA_QUALITY} - {item.source}",
        label=DIRECT_LABEL,
        description=f"Direct stream from {item.source}",
    )


class ResolutionPipeline:
    """Catalog listing and stream resolution for one live-media catalog.

    Both operations are total: they never raise and degrade to an empty
    list on any failure. Sources and media items are processed strictly in
    order, one request at a time.
    """

    def __init__(
        self,
        *,
        catalog_fetcher: ContentCatalogPort,
        media_fetcher: MediaPort,
        unlocker: LinkUnlockerPort,
        ranker: _StreamRanker,
        config: _CatalogConfig,
        id_factory: Callable[[], str] = _fallback_id,
        year_factory: Callable[[], int] = _current_year,
    ) -> None:
        self._catalog = catalog_fetcher
        self._media = media_fetcher
        self._unlocker = unlocker
        self._ranker = ranker
        self._config = config
        self._id_factory = id_factory
        self._year_factory = year_factory

    # ------------------------------------------------------------------
    # Catalog
    # ------------------------------------------------------------------

    async def catalog(
        self,
        content_type: str,
        catalog_id: str,
        extra: Mapping[str, Any] | None = None,
    ) -> list[MetaPreview]:
        """List display items for the configured catalog."""
        if content_type != self._config.type or catalog_id != self._config.id:
            return []

        genre = (extra or {}).get("genre")
        category = str(genre) if genre else self._config.default_category

        try:
            result = await self._catalog.fetch_result(category)
        except Exception:
            log.warning("catalog_fetch_failed", category=category, exc_info=True)
            return []

        if not result.ok:
            log.info("catalog_upstream_empty", category=category, status=result.status)

        metas = [self._to_meta(entry, category) for entry in result.items]
        return metas[: self._config.max_items]

    def _to_meta(self, entry: CatalogEntry, category: str) -> MetaPreview:
        raw_id = str(entry.id) if entry.id is not None else self._id_factory()
        composite = str(CompositeId(self._config.id_prefix, category, raw_id))
        name = entry.title or (
            f"{entry.home_team or 'Content'} vs {entry.away_team or 'Live'}"
        )
        intro = entry.description or f"Live {category} content"
        return MetaPreview(
            id=composite,
            type=self._config.type,
            name=name,
            poster=entry.poster or self._config.poster_placeholder,
            description=f"{intro}\n\n{_DESCRIPTION_FOOTER}",
            year=self._year_factory(),
            genres=list(_GENRES),
            videos=[MetaVideo(id=f"{composite}:1:1", title=_VIDEO_TITLE)],
        )

    # ------------------------------------------------------------------
    # Streams
    # ------------------------------------------------------------------

    def parse_id(self, content_type: str, stream_id: str) -> CompositeId | None:
        """Validate type + prefix and split the composite id."""
        if content_type != self._config.type:
            return None
        if not stream_id.startswith(f"{self._config.id_prefix}:"):
            return None
        return CompositeId.parse(stream_id)

    async def streams(self, content_type: str, stream_id: str) -> list[StreamOption]:
        """Resolve a composite id to ranked stream options."""
        parsed = self.parse_id(content_type, stream_id)
        if parsed is None:
            return []

        try:
            entry = await self._locate(parsed)
            if entry is None or not entry.sources:
                log.info(
                    "stream_entry_unavailable",
                    category=parsed.category,
                    raw_id=parsed.raw_id,
                    found=entry is not None,
                )
                return []

            options: list[StreamOption] = []
            for ref in entry.sources:
                try:
                    options.extend(await self._resolve_source(ref.source, ref.id))
                except Exception:
                    log.warning(
                        "stream_source_failed",
                        source=ref.source,
                        source_id=ref.id,
                        exc_info=True,
                    )
                    continue

            ranked = self._ranker.rank(options)
        except Exception:
            log.warning("stream_resolution_failed", stream_id=stream_id, exc_info=True)
            return []

        log.info(
            "stream_resolved",
            stream_id=stream_id,
            sources=len(entry.sources),
            streams=len(ranked),
            premium=sum(1 for o in ranked if o.is_premium),
        )
        return ranked

    async def _locate(self, parsed: CompositeId) -> CatalogEntry | None:
        # Always a fresh fetch: entries are ephemeral upstream.
        entries = await self._catalog.fetch(parsed.category)
        for entry in entries:
            if entry.id is not None and str(entry.id) == parsed.raw_id:
                return entry
        return None

    async def _resolve_source(self, source: str, source_id: str) -> list[StreamOption]:
        options: list[StreamOption] = []
        for item in await self._media.fetch(source, source_id):
            if not item.url:
                continue
            unlocked = await self._unlocker.unlock(item.url)
            if unlocked is not None:
                options.append(premium_option(unlocked))
            else:
                options.append(direct_option(item))
        return options
