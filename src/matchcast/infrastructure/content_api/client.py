"""Content API clients: async httpx implementations of the catalog/media ports.

Every failure (network error, non-2xx status, undecodable or wrongly shaped
payload) collapses to an empty ``FetchResult`` with a status telling which
kind of failure it was. Nothing is raised to the caller and nothing is
retried.
"""

from __future__ import annotations

import math
from typing import Any, Mapping
from urllib.parse import quote

import httpx
import structlog

from matchcast.domain.entities.catalog import (
    CatalogEntry,
    FetchResult,
    FetchStatus,
    MediaItem,
    SourceRef,
)

log = structlog.get_logger(__name__)


class _ContentApiBase:
    """Shared GET-and-decode helper for the content API."""

    def __init__(self, *, base_url: str, http_client: httpx.AsyncClient) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = http_client

    async def _get_list(self, path: str) -> tuple[list[Any], FetchStatus]:
        """GET ``path`` and return the decoded JSON array plus a status."""
        url = f"{self._base_url}{path}"
        try:
            resp = await self._http.get(url)
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            log.warning(
                "content_api_http_error",
                path=path,
                status=exc.response.status_code,
            )
            return [], FetchStatus.UPSTREAM_UNAVAILABLE
        except httpx.HTTPError:
            log.warning("content_api_network_error", path=path, exc_info=True)
            return [], FetchStatus.UPSTREAM_UNAVAILABLE

        try:
            payload = resp.json()
        except ValueError:
            log.warning("content_api_malformed_payload", path=path, reason="not_json")
            return [], FetchStatus.MALFORMED

        if payload is None:
            return [], FetchStatus.EMPTY
        if not isinstance(payload, list):
            log.warning(
                "content_api_malformed_payload",
                path=path,
                reason="not_a_list",
                payload_type=type(payload).__name__,
            )
            return [], FetchStatus.MALFORMED
        return payload, FetchStatus.OK


def _str_or_none(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def _team_name(entry: Mapping[str, Any], side: str) -> str | None:
    """Team name from flat ``home_team`` or nested ``teams.home.name``."""
    flat = _str_or_none(entry.get(f"{side}_team"))
    if flat:
        return flat
    teams = entry.get("teams")
    if isinstance(teams, Mapping):
        team = teams.get(side)
        if isinstance(team, Mapping):
            return _str_or_none(team.get("name"))
    return None


def _parse_sources(raw: Any) -> tuple[SourceRef, ...]:
    if not isinstance(raw, list):
        return ()
    refs: list[SourceRef] = []
    for item in raw:
        if not isinstance(item, Mapping):
            continue
        source = _str_or_none(item.get("source"))
        source_id = _str_or_none(item.get("id"))
        if source is None or source_id is None:
            continue
        refs.append(SourceRef(source=source, id=source_id))
    return tuple(refs)


def _entry_id(value: Any) -> str | int | None:
    """Normalise an upstream id; integral floats lose their ``.0``."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        return int(value) if value.is_integer() else str(value)
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value:
        return value
    return None


def parse_catalog_entry(raw: Mapping[str, Any]) -> CatalogEntry:
    """Build a CatalogEntry from one element of the ``/matches`` array."""
    return CatalogEntry(
        id=_entry_id(raw.get("id")),
        title=_str_or_none(raw.get("title")),
        home_team=_team_name(raw, "home"),
        away_team=_team_name(raw, "away"),
        poster=_str_or_none(raw.get("poster")),
        description=_str_or_none(raw.get("description")),
        sources=_parse_sources(raw.get("sources")),
    )


class HttpxContentCatalogFetcher(_ContentApiBase):
    """Lists catalog entries via ``GET {base}/matches[/{category}]``.

    Implements ``ContentCatalogPort`` from domain.ports.content_api.
    """

    def __init__(
        self,
        *,
        base_url: str,
        http_client: httpx.AsyncClient,
        category_aliases: Mapping[str, str] | None = None,
    ) -> None:
        super().__init__(base_url=base_url, http_client=http_client)
        self._aliases = dict(category_aliases or {})

    def endpoint_for(self, category: str) -> str:
        """Path for a category; unmapped categories are used literally."""
        if category == "all":
            return "/matches"
        segment = self._aliases.get(category, category)
        return f"/matches/{quote(segment, safe='')}"

    async def fetch_result(self, category: str) -> FetchResult[CatalogEntry]:
        raw_entries, status = await self._get_list(self.endpoint_for(category))
        if status is not FetchStatus.OK:
            return FetchResult.failed(status)

        entries = [parse_catalog_entry(e) for e in raw_entries if isinstance(e, Mapping)]
        log.debug(
            "catalog_fetched",
            category=category,
            received=len(raw_entries),
            entries=len(entries),
        )
        return FetchResult.of(entries)

    async def fetch(self, category: str) -> list[CatalogEntry]:
        return (await self.fetch_result(category)).items


class HttpxMediaFetcher(_ContentApiBase):
    """Lists media items via ``GET {base}/stream/{source}/{id}``.

    Implements ``MediaPort`` from domain.ports.content_api.
    """

    async def fetch_result(
        self, source: str, source_id: str
    ) -> FetchResult[MediaItem]:
        path = f"/stream/{quote(source, safe='')}/{quote(source_id, safe='')}"
        raw_items, status = await self._get_list(path)
        if status is not FetchStatus.OK:
            return FetchResult.failed(status)

        items: list[MediaItem] = []
        for raw in raw_items:
            if not isinstance(raw, Mapping):
                continue
            url = raw.get("url")
            items.append(
                MediaItem(
                    url=url if isinstance(url, str) and url else None,
                    source=source,
                    quality=_str_or_none(raw.get("quality")),
                )
            )
        return FetchResult.of(items)

    async def fetch(self, source: str, source_id: str) -> list[MediaItem]:
        return (await self.fetch_result(source, source_id)).items
