"""Stream ranking for the Stremio addon: premium links first."""

from __future__ import annotations

from collections.abc import Iterable

from matchcast.domain.entities.catalog import StreamOption


class StreamRanker:
    """Stable partition of stream options.

    Premium options come first, then direct ones. Within each group the
    input order (source order, then per-source media order) is kept.
    """

    def rank(self, options: Iterable[StreamOption]) -> list[StreamOption]:
        # list.sort is stable; False (premium) sorts before True.
        ranked = list(options)
        ranked.sort(key=lambda o: not o.is_premium)
        return ranked
