"""
Domain layer - Pure queue logic for the action queue.

This layer contains:
- Queue models (ActionItem, QueueFilters, QueueSnapshot)
- Ranking and filtering rules
- Domain exceptions

CRITICAL: This layer must NOT import from application, infrastructure, or api.
Only stdlib and typing imports are allowed.
"""

from action_queue.domain.exceptions import ActionQueueError

__all__: list[str] = ["ActionQueueError"]
