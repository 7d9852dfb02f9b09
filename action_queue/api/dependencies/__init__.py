"""FastAPI dependency providers."""

from action_queue.api.dependencies.action_queue import (
    get_action_dispatchers,
    get_queue_aggregator,
    reset_action_queue_dependencies,
    set_action_dispatchers,
    set_queue_aggregator,
)

__all__ = [
    "get_action_dispatchers",
    "get_queue_aggregator",
    "reset_action_queue_dependencies",
    "set_action_dispatchers",
    "set_queue_aggregator",
]
