"""Queue filter model.

A QueueFilters value narrows a candidate list along three dimensions:
item type, priority bucket, and free-text search. An absent (or empty)
dimension places no constraint; an item passes iff it satisfies every
present dimension (AND across dimensions, OR within a dimension's set).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, replace

from action_queue.domain.models.action_item import ItemType, Priority


@dataclass(frozen=True)
class QueueFilters:
    """Active filter set of a queue view.

    Attributes:
        types: Allowed item types, or None for no constraint.
        priorities: Allowed priority buckets, or None for no constraint.
        search: Case-insensitive substring over title and description.
    """

    types: frozenset[ItemType] | None = None
    priorities: frozenset[Priority] | None = None
    search: str | None = None

    @property
    def normalized_search(self) -> str | None:
        """Search text lowercased, or None if empty or whitespace only.

        Surrounding whitespace is part of the needle.
        """
        if self.search is None or not self.search.strip():
            return None
        return self.search.lower()

    @property
    def is_empty(self) -> bool:
        return not self.types and not self.priorities and self.normalized_search is None

    def with_types(self, types: Iterable[ItemType] | None) -> QueueFilters:
        return replace(self, types=frozenset(types) if types is not None else None)

    def with_priorities(self, priorities: Iterable[Priority] | None) -> QueueFilters:
        return replace(
            self,
            priorities=frozenset(priorities) if priorities is not None else None,
        )

    def with_search(self, search: str | None) -> QueueFilters:
        return replace(self, search=search)

    def cleared(self) -> QueueFilters:
        return QueueFilters()


NO_FILTERS = QueueFilters()


__all__ = ["NO_FILTERS", "QueueFilters"]
