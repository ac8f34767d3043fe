"""Shared fixtures for integration tests.

These tests use real infrastructure components (httpx fetchers, unlocker,
config loader) with mocked HTTP via respx.
"""

from __future__ import annotations

import httpx
import pytest
import respx

CONTENT_BASE = "https://content.example.com/api"
UNLOCK_BASE = "https://unlock.example.com/v4"

_ENV_VARS = (
    "MATCHCAST_APP_NAME",
    "MATCHCAST_ENVIRONMENT",
    "MATCHCAST_HTTP_TIMEOUT_SECONDS",
    "MATCHCAST_LOG_LEVEL",
    "MATCHCAST_LOG_FORMAT",
    "MATCHCAST_CONTENT_API_BASE_URL",
    "MATCHCAST_UNLOCK_API_BASE_URL",
    "MATCHCAST_UNLOCK_AGENT",
    "MATCHCAST_PREMIUM_API_KEY",
    "PREMIUM_SERVICE_KEY",
    "PS_KEY",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the host environment out of config precedence tests."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def http_client() -> httpx.AsyncClient:
    """Real httpx.AsyncClient for use with respx mocking."""
    return httpx.AsyncClient()


@pytest.fixture()
def respx_mock() -> respx.MockRouter:
    """Explicit respx mock router for request interception."""
    with respx.mock(assert_all_called=False) as router:
        yield router
