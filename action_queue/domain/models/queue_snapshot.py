"""Queue snapshot: the derived, read-only view handed to callers.

A snapshot is never stored by the engine. It pairs the filtered, ranked
items for one viewer role with per-priority counts computed over the
unfiltered role-scoped candidate set, so badges reflect total workload
rather than the current view.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from action_queue.domain.models.action_item import ActionItem, Priority
from action_queue.domain.models.queue_filters import QueueFilters
from action_queue.domain.models.viewer_role import ViewerRole


@dataclass(frozen=True)
class PriorityCounts:
    """Item counts per priority bucket.

    Attributes:
        urgent: Number of urgent items.
        high: Number of high items.
        medium: Number of medium items.
        low: Number of low items.
    """

    urgent: int = 0
    high: int = 0
    medium: int = 0
    low: int = 0

    @property
    def total(self) -> int:
        return self.urgent + self.high + self.medium + self.low

    def for_priority(self, priority: Priority) -> int:
        return getattr(self, priority.value)

    def to_dict(self) -> dict[str, int]:
        return {
            "urgent": self.urgent,
            "high": self.high,
            "medium": self.medium,
            "low": self.low,
            "total": self.total,
        }


@dataclass(frozen=True)
class QueueSnapshot:
    """Filtered, ranked items plus unfiltered counts for one role.

    Attributes:
        role: Viewer role the snapshot was built for.
        items: Filtered items in ranking order.
        counts: Per-priority counts over the unfiltered candidate set.
        filters: Filters that produced `items`.
        fetched_at: When the underlying candidate set was fetched.
    """

    role: ViewerRole
    items: tuple[ActionItem, ...]
    counts: PriorityCounts
    fetched_at: datetime
    filters: QueueFilters = field(default_factory=QueueFilters)

    def __len__(self) -> int:
        return len(self.items)

    def index_of(self, item_id: str) -> int:
        """Return the position of `item_id`, or -1 if not present."""
        for index, item in enumerate(self.items):
            if item.id == item_id:
                return index
        return -1

    def get(self, item_id: str) -> ActionItem | None:
        index = self.index_of(item_id)
        return self.items[index] if index >= 0 else None


__all__ = ["PriorityCounts", "QueueSnapshot"]
