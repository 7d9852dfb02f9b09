"""API request/response models."""

from action_queue.api.models.action_queue import (
    ActionButtonResponse,
    ActionExecutionRequest,
    ActionExecutionResponse,
    ActionItemResponse,
    ActionQueueErrorResponse,
    ActionQueueResponse,
    PriorityCountsResponse,
)
from action_queue.api.models.health import HealthResponse

__all__ = [
    "ActionButtonResponse",
    "ActionExecutionRequest",
    "ActionExecutionResponse",
    "ActionItemResponse",
    "ActionQueueErrorResponse",
    "ActionQueueResponse",
    "HealthResponse",
    "PriorityCountsResponse",
]
