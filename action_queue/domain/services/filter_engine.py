"""Filter engine for the action queue.

Pure, deterministic narrowing of a candidate list. No I/O, no clock, no
re-sorting: the output preserves the input order.

Rules:
- types / priorities: set membership (OR within the set)
- search: case-insensitive substring of title or description
- dimensions combine with logical AND
- an absent or empty dimension is a pass-through, never exclude-all
"""

from __future__ import annotations

from collections.abc import Iterable

from action_queue.domain.models.action_item import ActionItem
from action_queue.domain.models.queue_filters import QueueFilters


def matches_filters(item: ActionItem, filters: QueueFilters) -> bool:
    """Check whether a single item satisfies every present dimension."""
    if filters.types and item.type not in filters.types:
        return False
    if filters.priorities and item.priority not in filters.priorities:
        return False
    needle = filters.normalized_search
    if needle is not None:
        if needle not in item.title.lower() and needle not in item.description.lower():
            return False
    return True


def apply_filters(
    items: Iterable[ActionItem], filters: QueueFilters | None
) -> list[ActionItem]:
    """Narrow items to those matching the filters.

    Args:
        items: Candidate items, typically already ranked.
        filters: Active filters; None behaves like an empty filter set.

    Returns:
        New list of matching items in input order.
    """
    if filters is None or filters.is_empty:
        return list(items)
    return [item for item in items if matches_filters(item, filters)]


__all__ = ["apply_filters", "matches_filters"]
