"""Premium link unlocking via an async httpx client for the unlock service."""

from __future__ import annotations

import math
from typing import Any

import httpx
import structlog

from matchcast.domain.entities.catalog import UnlockedLink
from matchcast.infrastructure.stremio.quality import classify_quality

log = structlog.get_logger(__name__)

_UNLOCK_PATH = "/link/unlock"


class HttpxLinkUnlocker:
    """Exchanges raw media URLs for premium links.

    Implements ``LinkUnlockerPort`` from domain.ports.link_unlocker.
    Without an API key no request is ever sent and ``unlock`` returns None.
    """

    def __init__(
        self,
        *,
        base_url: str,
        agent: str,
        api_key: str | None,
        http_client: httpx.AsyncClient,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._agent = agent
        self._api_key = api_key or None
        self._http = http_client

    @property
    def enabled(self) -> bool:
        return self._api_key is not None

    async def unlock(self, url: str) -> UnlockedLink | None:
        """Return the premium link for ``url`` or None when unavailable."""
        if self._api_key is None:
            return None

        data = await self._request(url)
        if data is None:
            return None

        link = data.get("link")
        if not isinstance(link, str) or not link:
            log.debug("link_unlock_no_link", url=url)
            return None

        filename = data.get("filename") or ""
        if not isinstance(filename, str):
            filename = str(filename)

        return UnlockedLink(
            url=link,
            filename=filename or "Media",
            quality=classify_quality(filename),
            host=str(data.get("host") or "Premium"),
            size=_as_size(data.get("filesize")),
        )

    async def _request(self, url: str) -> dict[str, Any] | None:
        """GET the unlock endpoint. Returns the ``data`` object on success."""
        params = {"agent": self._agent, "apikey": self._api_key, "link": url}
        try:
            resp = await self._http.get(f"{self._base_url}{_UNLOCK_PATH}", params=params)
            resp.raise_for_status()
            payload = resp.json()
        except httpx.HTTPStatusError as exc:
            log.warning(
                "link_unlock_failed",
                url=url,
                status=exc.response.status_code,
            )
            return None
        except httpx.HTTPError:
            log.warning("link_unlock_failed", url=url, exc_info=True)
            return None
        except ValueError:
            log.warning("link_unlock_malformed_payload", url=url)
            return None

        if not isinstance(payload, dict) or payload.get("status") != "success":
            error = payload.get("error") if isinstance(payload, dict) else None
            log.info("link_unlock_rejected", url=url, error=error)
            return None

        data = payload.get("data")
        if not isinstance(data, dict):
            log.debug("link_unlock_no_data", url=url)
            return None
        return data


def _as_size(value: Any) -> int:
    """File size in bytes; anything unusable (incl. inf/nan) counts as 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            value = float(value)
        except ValueError:
            return 0
    if isinstance(value, float) and not math.isfinite(value):
        return 0
    if isinstance(value, (int, float)):
        return max(int(value), 0)
    return 0
