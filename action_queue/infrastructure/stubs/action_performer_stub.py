"""Action performer stub for development and testing.

Records every perform_action call and can simulate endpoint failures or a
request that stays in flight until released.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable
from dataclasses import dataclass

from action_queue.domain.errors.queue import MutationError
from action_queue.domain.models.action_item import ActionKind
from action_queue.infrastructure.stubs.pending_item_source_stub import (
    PendingItemSourceStub,
)

# Actions that make the server stop reporting the item
RESOLVING_ACTIONS: frozenset[ActionKind] = frozenset(
    {
        ActionKind.APPROVE,
        ActionKind.REJECT,
        ActionKind.DISMISS,
        ActionKind.COMPLETE,
        ActionKind.ESCALATE,
    }
)


@dataclass(frozen=True)
class PerformedAction:
    """Record of a perform_action call."""

    item_id: str
    action: ActionKind


class ActionPerformerStub:
    """Stub implementation of ActionPerformerProtocol.

    Attributes:
        calls: Every call, including failed ones, in order.
    """

    def __init__(self, sources: Iterable[PendingItemSourceStub] = ()) -> None:
        """Initialize the stub.

        Args:
            sources: Source stubs from which successfully resolved items are
                     removed, so the next aggregation no longer returns them.
        """
        self._sources = list(sources)
        self.calls: list[PerformedAction] = []
        self._fail_next: MutationError | None = None
        self._gate: asyncio.Event | None = None

    async def perform_action(self, item_id: str, action: ActionKind) -> None:
        self.calls.append(PerformedAction(item_id, action))
        if self._gate is not None:
            await self._gate.wait()
        if self._fail_next is not None:
            error, self._fail_next = self._fail_next, None
            raise error
        if action in RESOLVING_ACTIONS:
            for source in self._sources:
                source.resolve_item(item_id)

    # Test helper methods

    def set_fail_next(
        self,
        item_id: str,
        action: ActionKind,
        status_code: int | None = 500,
        message: str | None = None,
    ) -> None:
        self._fail_next = MutationError(item_id, action, message, status_code=status_code)

    def hold(self) -> None:
        """Keep subsequent calls in flight until release() is called."""
        self._gate = asyncio.Event()

    def release(self) -> None:
        if self._gate is not None:
            self._gate.set()
            self._gate = None

    @property
    def call_count(self) -> int:
        return len(self.calls)
