"""FastAPI application factory (create_app)."""

from __future__ import annotations

import time
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone

import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.responses import Response

from matchcast.infrastructure.config import AppConfig
from matchcast.interfaces.api.stremio.router import ADDON_VERSION, CORS_HEADERS
from matchcast.interfaces.api.stremio.router import router as stremio_router
from matchcast.interfaces.app_state import AppState
from matchcast.interfaces.composition import lifespan

log = structlog.get_logger(__name__)


def create_app(config: AppConfig) -> FastAPI:
    """Create the FastAPI app. Configuration only, no resource initialization.

    Resources (HTTP client, fetchers, pipeline) are created in lifespan().
    """
    app = FastAPI(
        title="Matchcast",
        description="Stremio addon for live media with premium link unlocking",
        version=ADDON_VERSION,
        lifespan=lifespan,
    )

    app.state = AppState()
    app.state.config = config

    app.include_router(stremio_router)

    @app.get("/health")
    async def health() -> JSONResponse:
        """Liveness probe plus the premium capability flag."""
        return JSONResponse(
            {
                "status": "operational",
                "service": "active",
                "premium": config.premium_enabled,
                "timestamp": datetime.now(timezone.utc)
                .isoformat()
                .replace("+00:00", "Z"),
            },
            headers=CORS_HEADERS,
        )

    @app.get("/")
    async def index(request: Request) -> JSONResponse:
        """Landing page pointing at the manifest URL."""
        return JSONResponse(
            {
                "message": f"{config.app_name} addon - operational",
                "endpoint": f"{request.base_url}manifest.json",
            },
            headers=CORS_HEADERS,
        )

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        start = time.perf_counter()
        response: Response | None = None
        try:
            response = await call_next(request)
            return response
        finally:
            duration_ms = (time.perf_counter() - start) * 1000.0
            log.info(
                "http_request",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code if response is not None else 500,
                duration_ms=round(duration_ms, 2),
                client_host=(request.client.host if request.client else None),
            )

    return app
