"""Action queue dependencies.

FastAPI dependency injection for the aggregator and the per-role
dispatchers. Both are singletons set during startup; tests either call
the setters with stub-backed services or use app.dependency_overrides.
"""

from collections.abc import Mapping

from action_queue.application.services.action_dispatcher_service import (
    ActionDispatcherService,
)
from action_queue.application.services.queue_aggregator_service import (
    QueueAggregatorService,
)
from action_queue.domain.models.viewer_role import ViewerRole

# Singleton instances (initialized at startup)
_queue_aggregator: QueueAggregatorService | None = None
_action_dispatchers: dict[ViewerRole, ActionDispatcherService] | None = None


def get_queue_aggregator() -> QueueAggregatorService:
    """Get the queue aggregator singleton.

    Raises:
        RuntimeError: If not initialized (startup error).
    """
    if _queue_aggregator is None:
        raise RuntimeError(
            "QueueAggregatorService not initialized. "
            "Call set_queue_aggregator() during startup."
        )
    return _queue_aggregator


def set_queue_aggregator(service: QueueAggregatorService) -> None:
    global _queue_aggregator
    _queue_aggregator = service


def get_action_dispatchers() -> Mapping[ViewerRole, ActionDispatcherService]:
    """Get the dispatcher for every viewer role.

    Raises:
        RuntimeError: If not initialized (startup error).
    """
    if _action_dispatchers is None:
        raise RuntimeError(
            "Action dispatchers not initialized. "
            "Call set_action_dispatchers() during startup."
        )
    return _action_dispatchers


def set_action_dispatchers(dispatchers: Mapping[ViewerRole, ActionDispatcherService]) -> None:
    """Set the per-role dispatchers.

    Raises:
        ValueError: If a dispatcher is registered under another role.
    """
    global _action_dispatchers
    for role, dispatcher in dispatchers.items():
        if dispatcher.role is not role:
            raise ValueError(
                f"Dispatcher for {dispatcher.role.value} registered as {role.value}"
            )
    _action_dispatchers = dict(dispatchers)


def reset_action_queue_dependencies() -> None:
    """Clear all singletons (test teardown)."""
    global _queue_aggregator, _action_dispatchers
    _queue_aggregator = None
    _action_dispatchers = None


__all__ = [
    "get_action_dispatchers",
    "get_queue_aggregator",
    "reset_action_queue_dependencies",
    "set_action_dispatchers",
    "set_queue_aggregator",
]
