"""Application state container for FastAPI dependency injection."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx
from starlette.datastructures import State

from matchcast.infrastructure.config import AppConfig

if TYPE_CHECKING:
    from matchcast.application.use_cases.resolution_pipeline import (
        ResolutionPipeline,
    )


class AppState(State):
    """FastAPI application state with all DI resources.

    Lifecycle managed by composition.py::lifespan().
    """

    # Configuration
    config: AppConfig

    # Infrastructure
    http_client: httpx.AsyncClient

    # Application Services
    pipeline: ResolutionPipeline
