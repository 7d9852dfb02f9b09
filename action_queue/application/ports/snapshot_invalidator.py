"""Snapshot invalidation port, implemented by the queue aggregator."""

from __future__ import annotations

from typing import Protocol

from action_queue.domain.models.viewer_role import ViewerRole


class SnapshotInvalidatorProtocol(Protocol):
    """Protocol for marking a role's cached snapshot stale."""

    def invalidate(self, role: ViewerRole) -> None:
        """Force the next read for `role` to refetch from the sources."""
        ...


__all__ = ["SnapshotInvalidatorProtocol"]
