"""Bootstrap wiring for action queue services.

Builds the aggregator over the source domains, one dispatcher per viewer
role, and queue controllers from an ActionQueueConfig.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

import httpx

from action_queue.application.ports.action_performer import ActionPerformerProtocol
from action_queue.application.ports.deep_link import DeepLinkInstructionProtocol
from action_queue.application.ports.navigator import NavigatorProtocol
from action_queue.application.ports.pending_item_source import (
    PendingItemSourceProtocol,
)
from action_queue.application.ports.timer_scheduler import TimerSchedulerProtocol
from action_queue.application.ports.viewport import ViewportProtocol
from action_queue.application.services.action_dispatcher_service import (
    ActionDispatcherService,
)
from action_queue.application.services.deep_link_resolver import DeepLinkResolver
from action_queue.application.services.queue_aggregator_service import (
    QueueAggregatorService,
)
from action_queue.application.services.queue_controller_service import QueueController
from action_queue.config.queue_config import ActionQueueConfig
from action_queue.domain.models.viewer_role import ViewerRole
from action_queue.infrastructure.adapters.http import (
    HttpActionPerformer,
    HttpPendingItemSource,
)
from action_queue.infrastructure.scheduling import AsyncioTimerScheduler, SystemClock

# Source domains in tie-break order for equal priorities
SOURCE_DOMAINS: tuple[str, ...] = (
    "faults",
    "approvals",
    "votes",
    "messages",
    "meter-readings",
    "person-months",
    "announcements",
)


@dataclass
class ActionQueueServices:
    """Wired services shared by all queue views.

    Attributes:
        config: Configuration the services were built from.
        aggregator: Shared snapshot cache over all source domains.
        dispatchers: One dispatcher per viewer role.
        client: Shared HTTP client, owned when built here.
    """

    config: ActionQueueConfig
    aggregator: QueueAggregatorService
    dispatchers: dict[ViewerRole, ActionDispatcherService]
    client: httpx.AsyncClient | None = None

    async def aclose(self) -> None:
        """Stop background refresh and close the HTTP client."""
        await self.aggregator.stop_background_refresh()
        if self.client is not None:
            await self.client.aclose()


def build_action_queue(
    config: ActionQueueConfig | None = None,
    sources: Sequence[PendingItemSourceProtocol] | None = None,
    performer: ActionPerformerProtocol | None = None,
    navigator: NavigatorProtocol | None = None,
) -> ActionQueueServices:
    """Build the action queue services.

    HTTP adapters against `config.api_base_url` are used for sources and
    the performer unless stubs are passed in.

    Args:
        config: Configuration (default: from environment).
        sources: Source domains, overriding the HTTP sources.
        performer: Mutation endpoint, overriding the HTTP performer.
        navigator: Receives `view` navigation targets.

    Returns:
        ActionQueueServices with aggregator and per-role dispatchers.
    """
    config = config or ActionQueueConfig.from_environment()
    client: httpx.AsyncClient | None = None
    if sources is None or performer is None:
        client = httpx.AsyncClient(timeout=config.source_timeout_seconds)

    if sources is None:
        sources = [
            HttpPendingItemSource(
                domain,
                config.api_base_url,
                client=client,
                timeout=config.source_timeout_seconds,
            )
            for domain in SOURCE_DOMAINS
        ]
    if performer is None:
        performer = HttpActionPerformer(
            config.api_base_url,
            client=client,
            timeout=config.source_timeout_seconds,
        )

    aggregator = QueueAggregatorService(
        sources=sources,
        clock=SystemClock(),
        stale_time_seconds=config.stale_time_seconds,
        refetch_interval_seconds=config.refetch_interval_seconds,
    )
    dispatchers = {
        role: ActionDispatcherService(
            role=role,
            performer=performer,
            invalidator=aggregator,
            navigator=navigator,
            confirm_actions=config.confirm_actions,
        )
        for role in ViewerRole
    }
    return ActionQueueServices(
        config=config,
        aggregator=aggregator,
        dispatchers=dispatchers,
        client=client,
    )


def build_queue_controller(
    services: ActionQueueServices,
    role: ViewerRole,
    scheduler: TimerSchedulerProtocol | None = None,
    viewport: ViewportProtocol | None = None,
    deep_link: DeepLinkInstructionProtocol | None = None,
    on_toggle_help: Callable[[], None] | None = None,
) -> QueueController:
    """Build a controller for one queue view (asyncio timers by default)."""
    resolver = DeepLinkResolver(
        scheduler=scheduler or AsyncioTimerScheduler(),
        viewport=viewport,
        highlight_duration_ms=services.config.highlight_duration_ms,
    )
    return QueueController(
        role=role,
        aggregator=services.aggregator,
        dispatcher=services.dispatchers[role],
        resolver=resolver,
        deep_link=deep_link,
        on_toggle_help=on_toggle_help,
    )


__all__ = [
    "SOURCE_DOMAINS",
    "ActionQueueServices",
    "build_action_queue",
    "build_queue_controller",
]
