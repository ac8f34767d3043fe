"""Hardcoded default configuration values."""

from __future__ import annotations

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {
    "app_name": "matchcast",
    "environment": "dev",
    "http": {
        "timeout_seconds": 15.0,
        "follow_redirects": True,
        "user_agent": "Matchcast/1.0.0",
    },
    "logging": {
        "level": "INFO",
        "format": None,  # Derived from environment in schema.py
    },
    "content_api": {
        "base_url": "https://streamed.pk/api",
    },
    "unlock": {
        "base_url": "https://api.alldebrid.com/v4",
        "agent": "matchcast",
        "api_key": None,
    },
    "catalog": {
        "type": "tv",
        "id": "live-media-premium",
        "id_prefix": "pm-content",
        "max_items": 15,
        "default_category": "all",
        "category_aliases": {
            "action": "football",
            "drama": "basketball",
            "comedy": "tennis",
            "documentary": "boxing",
        },
    },
}
