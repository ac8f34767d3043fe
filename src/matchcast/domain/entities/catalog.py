"""Domain entities for the live-media catalog and stream resolution.

Pure value objects without framework dependencies or I/O.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Generic, Literal, TypeVar

QualityTier = Literal["4K", "2K", "FHD", "HD", "SD"]

T = TypeVar("T")


@dataclass(frozen=True)
class SourceRef:
    """Where to fetch playable media for one catalog entry."""

    source: str  # e.g. "alpha", "bravo"
    id: str


@dataclass(frozen=True)
class CatalogEntry:
    """One listable live-media item returned by the content API.

    Rebuilt on every fetch, never persisted.
    """

    id: str | int | None
    title: str | None = None
    home_team: str | None = None
    away_team: str | None = None
    poster: str | None = None
    description: str | None = None
    sources: tuple[SourceRef, ...] = ()


@dataclass(frozen=True)
class MediaItem:
    """A single playable media item for one SourceRef."""

    url: str | None
    source: str
    quality: str | None = None


@dataclass(frozen=True)
class UnlockedLink:
    """Premium link returned by the unlock service."""

    url: str
    filename: str
    quality: QualityTier
    host: str = "Premium"
    size: int = 0  # bytes


@dataclass(frozen=True)
class StreamOption:
    """Stremio stream object (JSON-serializable via ``to_dict``)."""

    url: str
    title: str
    label: str  # rendered as "name" in the Stremio UI
    description: str

    @property
    def is_premium(self) -> bool:
        return "Premium" in self.label

    def to_dict(self) -> dict[str, str]:
        return {
            "url": self.url,
            "title": self.title,
            "name": self.label,
            "description": self.description,
        }


@dataclass(frozen=True)
class CompositeId:
    """Parsed ``<prefix>:<category>:<rawId>`` identifier.

    Trailing fields (e.g. the ``:1:1`` video suffix) are ignored.
    """

    prefix: str
    category: str
    raw_id: str

    @classmethod
    def parse(cls, value: str) -> CompositeId | None:
        parts = value.split(":")
        if len(parts) < 3:
            return None
        return cls(prefix=parts[0], category=parts[1], raw_id=parts[2])

    def __str__(self) -> str:
        return f"{self.prefix}:{self.category}:{self.raw_id}"


@dataclass(frozen=True)
class MetaVideo:
    """Single video entry attached to a catalog preview."""

    id: str
    title: str
    season: int = 1
    episode: int = 1


@dataclass(frozen=True)
class MetaPreview:
    """Stremio catalog item (MetaPreview object)."""

    id: str
    type: str
    name: str
    poster: str = ""
    description: str = ""
    year: int | None = None
    genres: list[str] = field(default_factory=list)
    videos: list[MetaVideo] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "type": self.type,
            "name": self.name,
            "poster": self.poster,
            "description": self.description,
            "genre": list(self.genres),
            "year": self.year,
            "videos": [
                {
                    "id": v.id,
                    "title": v.title,
                    "season": v.season,
                    "episode": v.episode,
                }
                for v in self.videos
            ],
        }


class FetchStatus(str, Enum):
    """Why a fetch produced the items it did."""

    OK = "ok"
    EMPTY = "empty"  # upstream answered, nothing to list
    UPSTREAM_UNAVAILABLE = "upstream_unavailable"  # network / non-2xx
    MALFORMED = "malformed"  # unparseable payload


@dataclass(frozen=True)
class FetchResult(Generic[T]):
    """Items plus the status that explains them.

    Callers at the addon boundary only look at ``items``; the status keeps
    "nothing there" apart from "upstream failed" for logging and tests.
    """

    items: list[T] = field(default_factory=list)
    status: FetchStatus = FetchStatus.OK

    @property
    def ok(self) -> bool:
        return self.status in (FetchStatus.OK, FetchStatus.EMPTY)

    @classmethod
    def of(cls, items: list[T]) -> FetchResult[T]:
        return cls(items=items, status=FetchStatus.OK if items else FetchStatus.EMPTY)

    @classmethod
    def failed(cls, status: FetchStatus) -> FetchResult[T]:
        return cls(items=[], status=status)
