"""
FastAPI application for the gantt-timeline dashboard.

PURPOSE: Application factory and server runner.
AI CONTEXT: Creates the app with all routes registered.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from ..__version__ import __version__
from ..config import Config
from .routes import router

__all__ = ["create_app", "run_dashboard"]

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:  # noqa: ARG001
    """
    Log dashboard startup and shutdown.

    Args:
        app: The FastAPI application instance (provided by FastAPI).

    Yields:
        None. Control returns to FastAPI to handle requests.
    """
    logger.info(
        f"Gantt timeline dashboard starting (v{__version__}, data: {Config.get_data_dir()})"
    )
    yield
    logger.info("Gantt timeline dashboard shutting down")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI dashboard application.

    Business context: One app serves both the HTML dashboard for people
    and the JSON API for scripts and browser-side renderers.

    Returns:
        FastAPI application with all routes registered (/, /partials/*,
        /charts/*, /api/*) and OpenAPI docs at /docs.

    Example:
        >>> from fastapi.testclient import TestClient
        >>> client = TestClient(create_app())
        >>> client.get('/api/dataview').status_code
        200
    """
    app = FastAPI(
        title="Gantt Timeline",
        description="Gantt-style timeline charts from (label, date, value) records",
        version=__version__,
        lifespan=lifespan,
    )
    app.include_router(router)
    return app


def run_dashboard(
    host: str = Config.DEFAULT_HOST,
    port: int = Config.DEFAULT_PORT,
    reload: bool = False,
    log_level: str = "info",
) -> None:
    """
    Launch the dashboard server.

    Args:
        host: Interface to bind. '127.0.0.1' (default) for local-only
            access, '0.0.0.0' for network access.
        port: TCP port. Default 8000.
        reload: Auto-reload on code changes, for development.
        log_level: Uvicorn logging verbosity.

    Returns:
        None. Blocks until the server is stopped (Ctrl+C).

    Raises:
        OSError: If the port is already in use or host is invalid.

    Example:
        >>> run_dashboard(host='127.0.0.1', port=8000, reload=True)
    """
    uvicorn.run(
        "gantt_timeline.web.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level=log_level,
    )


if __name__ == "__main__":
    run_dashboard()
