"""Bootstrap wiring for the action queue."""

from action_queue.bootstrap.action_queue import (
    SOURCE_DOMAINS,
    ActionQueueServices,
    build_action_queue,
    build_queue_controller,
)
from action_queue.bootstrap.logging import configure_structlog

__all__ = [
    "SOURCE_DOMAINS",
    "ActionQueueServices",
    "build_action_queue",
    "build_queue_controller",
    "configure_structlog",
]
