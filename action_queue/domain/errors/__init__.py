"""Domain errors for the action queue.

Provides specific exception classes for different failure scenarios.
All exceptions inherit from ActionQueueError.
"""

from action_queue.domain.errors.queue import (
    ActionInProgressError,
    AggregationError,
    ConfirmationStateError,
    InvalidActionError,
    ItemNotFoundError,
    MutationError,
    NavigationRouteError,
)

__all__: list[str] = [
    "ActionInProgressError",
    "AggregationError",
    "ConfirmationStateError",
    "InvalidActionError",
    "ItemNotFoundError",
    "MutationError",
    "NavigationRouteError",
]
