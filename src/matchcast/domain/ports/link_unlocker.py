"""Port for exchanging raw media URLs for premium links."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from matchcast.domain.entities.catalog import UnlockedLink


@runtime_checkable
class LinkUnlockerPort(Protocol):
    """Upgrades a raw URL via an unlock service.

    Returns None whenever no premium link is available (no credential,
    rejected link, upstream error). None is a fallback signal, not an error.
    """

    @property
    def enabled(self) -> bool:
        """Whether a premium credential is configured."""
        ...

    async def unlock(self, url: str) -> UnlockedLink | None: ...
