"""Application services for the action queue."""

from action_queue.application.services.action_dispatcher_service import (
    ActionDispatcherService,
    ActionPhase,
    DispatchResult,
    DispatchStatus,
    ItemActionState,
)
from action_queue.application.services.deep_link_resolver import (
    DeepLinkResolution,
    DeepLinkResolver,
)
from action_queue.application.services.keyboard_bindings import (
    KEY_BINDINGS,
    KeyEvent,
    QueueCommand,
    resolve_command,
)
from action_queue.application.services.navigation import (
    DEFAULT_ROUTES,
    resolve_navigation_target,
)
from action_queue.application.services.queue_aggregator_service import (
    QueueAggregatorService,
)
from action_queue.application.services.queue_controller_service import (
    QueueController,
    QueueViewState,
    clamp_selection,
)

__all__: list[str] = [
    "DEFAULT_ROUTES",
    "KEY_BINDINGS",
    "ActionDispatcherService",
    "ActionPhase",
    "DeepLinkResolution",
    "DeepLinkResolver",
    "DispatchResult",
    "DispatchStatus",
    "ItemActionState",
    "KeyEvent",
    "QueueAggregatorService",
    "QueueCommand",
    "QueueController",
    "QueueViewState",
    "clamp_selection",
    "resolve_command",
    "resolve_navigation_target",
]
