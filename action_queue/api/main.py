"""FastAPI application entry point for the action queue."""

import os
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from structlog import get_logger

from action_queue import __version__
from action_queue.api.dependencies.action_queue import (
    set_action_dispatchers,
    set_queue_aggregator,
)
from action_queue.api.middleware.logging_middleware import LoggingMiddleware
from action_queue.api.routes.action_queue import router as action_queue_router
from action_queue.api.routes.health import router as health_router
from action_queue.bootstrap.action_queue import build_action_queue
from action_queue.bootstrap.logging import configure_structlog
from action_queue.domain.models.viewer_role import ViewerRole

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Wire services on startup and release them on shutdown."""
    configure_structlog(os.environ.get("ENVIRONMENT", "development"))
    services = build_action_queue()
    set_queue_aggregator(services.aggregator)
    set_action_dispatchers(services.dispatchers)
    services.aggregator.start_background_refresh(list(ViewerRole))
    logger.info("action_queue_started", api_base_url=services.config.api_base_url)
    try:
        yield
    finally:
        await services.aclose()
        logger.info("action_queue_stopped")


def create_app(use_lifespan: bool = True) -> FastAPI:
    """Create the FastAPI application.

    Args:
        use_lifespan: Wire HTTP-backed services at startup. Tests pass
            False and inject services through the dependency setters.
    """
    app = FastAPI(
        title="Action Queue API",
        description="Prioritized action queue for managers and residents",
        version=__version__,
        lifespan=lifespan if use_lifespan else None,
    )
    app.add_middleware(LoggingMiddleware)
    app.include_router(health_router)
    app.include_router(action_queue_router)
    return app


app = create_app()
