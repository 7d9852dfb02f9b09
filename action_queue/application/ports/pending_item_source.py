"""Pending item source port.

Each source domain (fault service, approval service, vote service,
messaging service, meter-reading service, announcement service) contributes
items already shaped as ActionItem. The aggregator knows nothing about the
services' own schemas.
"""

from __future__ import annotations

from typing import Protocol

from action_queue.domain.models.action_item import ActionItem
from action_queue.domain.models.viewer_role import ViewerRole


class PendingItemSourceProtocol(Protocol):
    """Protocol for one source domain of pending work.

    Implementation Requirements:
    - Side-effect free; may be called any number of times
    - Raise on transport/server failure (the aggregator wraps it)
    """

    @property
    def domain(self) -> str:
        """Short name of the source domain (e.g. "faults")."""
        ...

    async def list_pending_items(self, role: ViewerRole) -> list[ActionItem]:
        """List the pending items this domain holds for a viewer role.

        Args:
            role: Role of the viewer.

        Returns:
            Items in the domain's own order.

        Raises:
            AggregationError: If the domain cannot be reached.
        """
        ...


__all__ = ["PendingItemSourceProtocol"]
