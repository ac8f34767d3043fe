from .catalog import (
    CatalogEntry,
    CompositeId,
    FetchResult,
    FetchStatus,
    MediaItem,
    MetaPreview,
    MetaVideo,
    QualityTier,
    SourceRef,
    StreamOption,
    UnlockedLink,
)

__all__ = [
    "CatalogEntry",
    "CompositeId",
    "FetchResult",
    "FetchStatus",
    "MediaItem",
    "MetaPreview",
    "MetaVideo",
    "QualityTier",
    "SourceRef",
    "StreamOption",
    "UnlockedLink",
]
