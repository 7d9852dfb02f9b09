"""Deep-link resolver.

Consumes an external "focus this item" instruction (for example from a
notification click) against the current filtered, ranked list.

Behavior:
- Found: select the item, highlight it, request scroll-into-view and
  focus of its row, and arm a timer that clears the highlight after a
  fixed window (default 2000 ms)
- Not found (filtered out or already resolved): silent no-op
- Either way the instruction is cleared as soon as it is read, so later
  renders cannot re-trigger the jump

The expiry timer is a scoped resource: a newer resolution cancels the
previous timer before arming its own, and teardown() cancels whatever is
pending so no callback fires into a destroyed view.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from structlog import get_logger

from action_queue.application.ports.deep_link import DeepLinkInstructionProtocol
from action_queue.application.ports.timer_scheduler import (
    TimerHandle,
    TimerSchedulerProtocol,
)
from action_queue.application.ports.viewport import ViewportProtocol
from action_queue.domain.models.queue_snapshot import QueueSnapshot

logger = get_logger(__name__)

DEFAULT_HIGHLIGHT_DURATION_MS = 2000


@dataclass(frozen=True)
class DeepLinkResolution:
    """Outcome of a successful deep-link jump.

    Attributes:
        item_id: The resolved item.
        index: Its position in the current list.
    """

    item_id: str
    index: int


class DeepLinkResolver:
    """Resolves one-shot deep links into selection and a timed highlight."""

    def __init__(
        self,
        scheduler: TimerSchedulerProtocol,
        viewport: ViewportProtocol | None = None,
        highlight_duration_ms: int = DEFAULT_HIGHLIGHT_DURATION_MS,
    ) -> None:
        """Initialize the resolver.

        Args:
            scheduler: Schedules the highlight expiry callback.
            viewport: Receives scroll/focus requests (optional headless).
            highlight_duration_ms: Highlight lifetime.
        """
        self._scheduler = scheduler
        self._viewport = viewport
        self._highlight_seconds = highlight_duration_ms / 1000
        self._timer: TimerHandle | None = None

    @property
    def has_pending_expiry(self) -> bool:
        return self._timer is not None

    def resolve(
        self,
        instruction: DeepLinkInstructionProtocol | None,
        snapshot: QueueSnapshot,
        on_expire: Callable[[str], None],
    ) -> DeepLinkResolution | None:
        """Consume the instruction and jump to its target if present.

        Args:
            instruction: External one-shot instruction (None if absent).
            snapshot: The current filtered, ranked list.
            on_expire: Called with the item id when the highlight expires.

        Returns:
            DeepLinkResolution if the target was found, None otherwise.
        """
        if instruction is None:
            return None
        target_id = instruction.peek()
        if target_id is None:
            return None
        instruction.clear()

        index = snapshot.index_of(target_id)
        if index < 0:
            logger.debug("deep_link_target_not_found", item_id=target_id)
            return None

        if self._viewport is not None:
            self._viewport.scroll_into_view(target_id)
            self._viewport.focus_row(target_id)

        self._arm_expiry(target_id, on_expire)
        logger.info("deep_link_resolved", item_id=target_id, index=index)
        return DeepLinkResolution(item_id=target_id, index=index)

    def teardown(self) -> None:
        """Cancel a pending highlight expiry."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _arm_expiry(self, item_id: str, on_expire: Callable[[str], None]) -> None:
        self.teardown()

        def _expire() -> None:
            self._timer = None
            on_expire(item_id)

        self._timer = self._scheduler.call_later(self._highlight_seconds, _expire)


__all__ = ["DEFAULT_HIGHLIGHT_DURATION_MS", "DeepLinkResolution", "DeepLinkResolver"]
