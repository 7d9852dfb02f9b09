"""Ranking rule for the action queue.

Items are totally ordered by priority bucket using the fixed severity map
(urgent=0, high=1, medium=2, low=3). The sort is stable: items of equal
priority keep their aggregation-time relative order. No secondary key
(creation time, due date, title) is consulted.

The rule is applied once at aggregation time, before filtering. Filtering
preserves order, so a filtered view never needs to be re-sorted.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable

from action_queue.domain.models.action_item import PRIORITY_RANK, ActionItem, Priority
from action_queue.domain.models.queue_snapshot import PriorityCounts


def rank_items(items: Iterable[ActionItem]) -> list[ActionItem]:
    """Return items sorted by priority bucket, ties in input order.

    Args:
        items: Candidate items in aggregation order.

    Returns:
        New list in ranking order. Ranking an already ranked list
        returns the same order.
    """
    # list.sort is guaranteed stable
    return sorted(items, key=lambda item: PRIORITY_RANK[item.priority])


def count_by_priority(items: Iterable[ActionItem]) -> PriorityCounts:
    """Count items per priority bucket."""
    counter = Counter(item.priority for item in items)
    return PriorityCounts(
        urgent=counter[Priority.URGENT],
        high=counter[Priority.HIGH],
        medium=counter[Priority.MEDIUM],
        low=counter[Priority.LOW],
    )


__all__ = ["count_by_priority", "rank_items"]
