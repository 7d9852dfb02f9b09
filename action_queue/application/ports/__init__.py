"""Application ports - contracts for every external collaborator.

Ports are implemented by infrastructure adapters (HTTP, asyncio) and by
the in-memory stubs used for development and testing.
"""

from action_queue.application.ports.action_performer import ActionPerformerProtocol
from action_queue.application.ports.clock import ClockProtocol
from action_queue.application.ports.deep_link import (
    DeepLinkInstruction,
    DeepLinkInstructionProtocol,
)
from action_queue.application.ports.navigator import (
    NavigationTarget,
    NavigatorProtocol,
)
from action_queue.application.ports.pending_item_source import (
    PendingItemSourceProtocol,
)
from action_queue.application.ports.snapshot_invalidator import (
    SnapshotInvalidatorProtocol,
)
from action_queue.application.ports.timer_scheduler import (
    TimerHandle,
    TimerSchedulerProtocol,
)
from action_queue.application.ports.viewport import ViewportProtocol

__all__: list[str] = [
    "ActionPerformerProtocol",
    "ClockProtocol",
    "DeepLinkInstruction",
    "DeepLinkInstructionProtocol",
    "NavigationTarget",
    "NavigatorProtocol",
    "PendingItemSourceProtocol",
    "SnapshotInvalidatorProtocol",
    "TimerHandle",
    "TimerSchedulerProtocol",
    "ViewportProtocol",
]
