"""Action performer port.

Consumes the domain mutation endpoints: `perform_action(item_id, action)`
succeeds or raises MutationError. Transport, auth and per-domain side
effects are the implementation's concern.
"""

from __future__ import annotations

from typing import Protocol

from action_queue.domain.models.action_item import ActionKind


class ActionPerformerProtocol(Protocol):
    """Protocol for executing an action against the owning domain."""

    async def perform_action(self, item_id: str, action: ActionKind) -> None:
        """Execute an action on the domain record behind an item.

        Args:
            item_id: Identifier of the addressed item.
            action: Operation to perform.

        Raises:
            MutationError: If the endpoint rejects the action or fails.
        """
        ...


__all__ = ["ActionPerformerProtocol"]
