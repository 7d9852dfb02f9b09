"""Domain models for the action queue.

Contains the immutable value objects that describe pending work and the
derived views over it. These models contain no infrastructure dependencies.
"""

from action_queue.domain.models.action_item import (
    PRIORITY_RANK,
    ActionButton,
    ActionItem,
    ActionKind,
    ButtonVariant,
    EntityType,
    ItemType,
    Priority,
)
from action_queue.domain.models.queue_filters import NO_FILTERS, QueueFilters
from action_queue.domain.models.queue_snapshot import PriorityCounts, QueueSnapshot
from action_queue.domain.models.viewer_role import (
    ROLE_ITEM_TYPES,
    ViewerRole,
    item_types_for,
)

__all__: list[str] = [
    "NO_FILTERS",
    "PRIORITY_RANK",
    "ROLE_ITEM_TYPES",
    "ActionButton",
    "ActionItem",
    "ActionKind",
    "ButtonVariant",
    "EntityType",
    "ItemType",
    "Priority",
    "PriorityCounts",
    "QueueFilters",
    "QueueSnapshot",
    "ViewerRole",
    "item_types_for",
]
