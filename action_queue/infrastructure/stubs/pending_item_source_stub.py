"""Pending item source stub for development and testing.

In-memory implementation of PendingItemSourceProtocol with failure
injection and a call log for assertions.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from action_queue.domain.errors.queue import AggregationError
from action_queue.domain.models.action_item import ActionItem
from action_queue.domain.models.viewer_role import ViewerRole


@dataclass
class SourceQueryEntry:
    """Record of a list_pending_items call (for test assertions).

    Attributes:
        role: Role that was queried.
        timestamp: When the query ran.
        result_count: Number of items returned (0 on failure).
    """

    role: ViewerRole
    timestamp: datetime
    result_count: int


class PendingItemSourceStub:
    """Stub implementation of PendingItemSourceProtocol.

    Items are kept per role in insertion order. resolve_item() removes an
    item everywhere, which is how ActionPerformerStub simulates a server
    that no longer reports a resolved item.

    Attributes:
        _items: Items per role.
        _query_history: All queries for assertions.
        _fail_next: Whether to fail the next query.
    """

    def __init__(self, domain: str = "stub") -> None:
        self._domain = domain
        self._items: dict[ViewerRole, list[ActionItem]] = {}
        self._query_history: list[SourceQueryEntry] = []
        self._fail_next = False
        self._fail_exception: Exception | None = None

    @property
    def domain(self) -> str:
        return self._domain

    async def list_pending_items(self, role: ViewerRole) -> list[ActionItem]:
        timestamp = datetime.now(timezone.utc)
        if self._fail_next:
            self._fail_next = False
            self._query_history.append(SourceQueryEntry(role, timestamp, 0))
            exc = self._fail_exception or AggregationError(role, self._domain)
            self._fail_exception = None
            raise exc

        items = list(self._items.get(role, []))
        self._query_history.append(SourceQueryEntry(role, timestamp, len(items)))
        return items

    # Test helper methods

    def add_item(self, role: ViewerRole, item: ActionItem) -> None:
        self._items.setdefault(role, []).append(item)

    def set_items(self, role: ViewerRole, items: list[ActionItem]) -> None:
        self._items[role] = list(items)

    def resolve_item(self, item_id: str) -> bool:
        """Remove an item from every role. Returns True if anything was removed."""
        removed = False
        for role, items in self._items.items():
            kept = [item for item in items if item.id != item_id]
            removed = removed or len(kept) != len(items)
            self._items[role] = kept
        return removed

    def set_fail_next(self, exception: Exception | None = None) -> None:
        self._fail_next = True
        self._fail_exception = exception

    def get_query_history(self) -> list[SourceQueryEntry]:
        return list(self._query_history)

    @property
    def query_count(self) -> int:
        return len(self._query_history)

    def clear(self) -> None:
        self._items.clear()
        self._query_history.clear()
        self._fail_next = False
        self._fail_exception = None
