"""Quality tier classification from filename keywords."""

from __future__ import annotations

from matchcast.domain.entities.catalog import QualityTier

DEFAULT_QUALITY: QualityTier = "HD"

# Evaluated top to bottom; the first keyword found anywhere in the
# filename wins, so "1440p" beats "1080p" even if it appears later.
QUALITY_KEYWORDS: tuple[tuple[str, QualityTier], ...] = (
    ("uhd", "4K"),
    ("4k", "4K"),
    ("2160p", "4K"),
    ("1440p", "2K"),
    ("1080p", "FHD"),
    ("720p", "HD"),
    ("480p", "SD"),
)


def classify_quality(filename: str) -> QualityTier:
    """Map a filename to one of 4K / 2K / FHD / HD / SD (default HD)."""
    lowered = filename.lower()
    for keyword, tier in QUALITY_KEYWORDS:
        if keyword in lowered:
            return tier
    return DEFAULT_QUALITY
