"""End-to-end tests for the Stremio addon API.

Tests the full request-response cycle through:
    HTTP Request -> FastAPI app (lifespan wiring) -> ResolutionPipeline
    -> httpx adapters -> JSON Response

Only upstream HTTP is mocked (respx); the app is built by create_app() and
its lifespan constructs the real HTTP client and adapters.

Endpoints covered:
    GET /manifest.json
    GET /catalog/{type}/{id}.json
    GET /catalog/{type}/{id}/{extra}.json
    GET /stream/{type}/{id}.json
    GET /health
"""

from __future__ import annotations

from collections.abc import Iterator

import httpx
import pytest
import respx
from fastapi.testclient import TestClient

from matchcast.infrastructure.config import AppConfig
from matchcast.interfaces.app import create_app

pytestmark = pytest.mark.e2e

_CONTENT = "https://content.example.com/api"
_UNLOCK = "https://unlock.example.com/v4"


def _config(api_key: str | None = None) -> AppConfig:
    return AppConfig(
        content_api_base_url=_CONTENT,
        unlock_api_base_url=_UNLOCK,
        premium_api_key=api_key,
    )


@pytest.fixture()
def upstream() -> Iterator[respx.MockRouter]:
    with respx.mock(assert_all_called=False) as router:
        yield router


@pytest.fixture()
def client(upstream: respx.MockRouter) -> Iterator[TestClient]:
    with TestClient(create_app(_config())) as test_client:
        yield test_client


class TestManifest:
    def test_manifest(self, client: TestClient) -> None:
        resp = client.get("/manifest.json")

        assert resp.status_code == 200
        body = resp.json()
        assert body["catalogs"][0]["id"] == "live-media-premium"
        assert body["idPrefixes"] == ["pm-content:"]


class TestCatalog:
    def test_catalog_lists_entries(
        self, client: TestClient, upstream: respx.MockRouter
    ) -> None:
        upstream.get(f"{_CONTENT}/matches").mock(
            return_value=httpx.Response(
                200,
                json=[
                    {"id": 1, "title": "Cup Final"},
                    {"id": 2, "home_team": "Lakers", "away_team": "Celtics"},
                ],
            )
        )

        resp = client.get("/catalog/tv/live-media-premium.json")

        assert resp.status_code == 200
        metas = resp.json()["metas"]
        assert [m["id"] for m in metas] == ["pm-content:all:1", "pm-content:all:2"]
        assert metas[1]["name"] == "Lakers vs Celtics"
        assert metas[0]["videos"][0]["id"] == "pm-content:all:1:1:1"

    def test_catalog_genre_hits_mapped_endpoint(
        self, client: TestClient, upstream: respx.MockRouter
    ) -> None:
        route = upstream.get(f"{_CONTENT}/matches/basketball").mock(
            return_value=httpx.Response(200, json=[{"id": 9, "title": "Game 7"}])
        )

        resp = client.get("/catalog/tv/live-media-premium/genre=drama.json")

        assert route.called
        assert resp.json()["metas"][0]["id"] == "pm-content:drama:9"

    def test_unknown_catalog_is_empty(
        self, client: TestClient, upstream: respx.MockRouter
    ) -> None:
        route = upstream.get(f"{_CONTENT}/matches")

        resp = client.get("/catalog/movie/live-media-premium.json")

        assert resp.json() == {"metas": []}
        assert route.call_count == 0

    def test_upstream_failure_is_empty(
        self, client: TestClient, upstream: respx.MockRouter
    ) -> None:
        upstream.get(f"{_CONTENT}/matches").mock(return_value=httpx.Response(502))

        resp = client.get("/catalog/tv/live-media-premium.json")

        assert resp.status_code == 200
        assert resp.json() == {"metas": []}


class TestStream:
    def test_direct_stream(self, client: TestClient, upstream: respx.MockRouter) -> None:
        upstream.get(f"{_CONTENT}/matches").mock(
            return_value=httpx.Response(
                200, json=[{"id": 42, "sources": [{"source": "x", "id": "1"}]}]
            )
        )
        upstream.get(f"{_CONTENT}/stream/x/1").mock(
            return_value=httpx.Response(200, json=[{"url": "http://a/1.mp4"}])
        )

        resp = client.get("/stream/tv/pm-content:all:42.json")

        assert resp.status_code == 200
        assert resp.json() == {
            "streams": [
                {
                    "url": "http://a/1.mp4",
                    "title": "HD - x",
                    "name": "Direct Access",
                    "description": "Direct stream from x",
                }
            ]
        }

    def test_invalid_id_is_empty(self, client: TestClient) -> None:
        resp = client.get("/stream/tv/tt1234567.json")

        assert resp.json() == {"streams": []}

    def test_premium_stream(self, upstream: respx.MockRouter) -> None:
        upstream.get(f"{_CONTENT}/matches").mock(
            return_value=httpx.Response(
                200, json=[{"id": 42, "sources": [{"source": "x", "id": "1"}]}]
            )
        )
        upstream.get(f"{_CONTENT}/stream/x/1").mock(
            return_value=httpx.Response(200, json=[{"url": "http://a/1.mp4"}])
        )
        upstream.get(f"{_UNLOCK}/link/unlock").mock(
            return_value=httpx.Response(
                200,
                json={
                    "status": "success",
                    "data": {
                        "link": "https://p.example.com/1.mkv",
                        "filename": "1.720p.mkv",
                    },
                },
            )
        )

        with TestClient(create_app(_config(api_key="key"))) as premium_client:
            resp = premium_client.get("/stream/tv/pm-content:all:42.json")
            health = premium_client.get("/health")

        streams = resp.json()["streams"]
        assert streams[0]["name"] == "Premium Service"
        assert streams[0]["url"] == "https://p.example.com/1.mkv"
        assert streams[0]["title"] == "HD Premium - Premium"
        assert health.json()["premium"] is True
