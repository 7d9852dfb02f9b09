"""API routers."""

from action_queue.api.routes.action_queue import router as action_queue_router
from action_queue.api.routes.health import router as health_router

__all__ = ["action_queue_router", "health_router"]
