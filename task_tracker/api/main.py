"""FastAPI application factory and configuration."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from task_tracker import __version__
from task_tracker.api import tasks
from task_tracker.api.exceptions import register_exception_handlers
from task_tracker.api.middleware import RequestLoggingMiddleware
from task_tracker.config import Settings, get_settings
from task_tracker.repositories import TaskRepository, create_repository
from task_tracker.utils.logging import get_logger, setup_logging

logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Handles startup and shutdown events.
    """
    settings: Settings = app.state.settings
    logger.info(
        "Starting %s v%s (storage: %s)",
        settings.app_name,
        __version__,
        settings.storage_backend,
    )
    yield
    logger.info("Shutting down...")


def create_app(
    settings: Settings | None = None,
    repository: TaskRepository | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use; defaults to the cached environment settings.
        repository: Repository to serve; defaults to the configured backend.

    Returns:
        FastAPI: Configured application instance.
    """
    settings = settings or get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="A REST API for tracking, filtering, searching and exporting tasks.",
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.repository = repository if repository is not None else create_repository(settings)

    register_exception_handlers(app)
    app.add_middleware(RequestLoggingMiddleware)

    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])

    @app.get("/health", tags=["System"])
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app


def run() -> None:
    """Run the application server."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format, settings.log_file)
    uvicorn.run(
        create_app(settings),
        host=settings.api_host,
        port=settings.api_port,
    )
