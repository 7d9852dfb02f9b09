"""In-memory stubs for development and testing."""

from action_queue.infrastructure.stubs.action_performer_stub import (
    ActionPerformerStub,
    PerformedAction,
)
from action_queue.infrastructure.stubs.pending_item_source_stub import (
    PendingItemSourceStub,
)
from action_queue.infrastructure.stubs.timer_scheduler_stub import (
    ManualTimerHandle,
    ManualTimerScheduler,
)
from action_queue.infrastructure.stubs.viewport_stub import NavigatorStub, ViewportStub

__all__: list[str] = [
    "ActionPerformerStub",
    "ManualTimerHandle",
    "ManualTimerScheduler",
    "NavigatorStub",
    "PendingItemSourceStub",
    "PerformedAction",
    "ViewportStub",
]
