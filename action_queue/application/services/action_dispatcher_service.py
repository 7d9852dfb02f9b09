"""Action dispatcher service.

Executes a chosen action against an item and reconciles with the
authoritative source.

Protocol for execute(item, action):
1. VALIDATE - the action must be in the item's advertised actions;
   otherwise InvalidActionError, and no network call is made
2. BUSY CHECK - an item already executing, or awaiting confirmation of
   another action, rejects the request (ActionInProgressError)
3. CONFIRMATION GATE - actions in the confirm set (default reject,
   escalate) only move the item to PENDING_CONFIRMATION; confirm()
   proceeds, cancel() returns to IDLE with no side effects
4. EXECUTE - mark the item EXECUTING (per item, not per queue) and call
   the domain endpoint
5. SUCCESS - invalidate the aggregator's snapshot for the role so the
   next read reflects server truth; back to IDLE
6. FAILURE - back to IDLE with the error recorded for a retry affordance

No local list mutation is applied ahead of server confirmation, so a
failure needs no rollback beyond clearing the executing flag. Dismiss and
complete go through exactly the same path as approve. `view` never
mutates: it resolves a navigation target and hands it to the navigator.

Lifecycle per item:
    IDLE --(confirmable)--> PENDING_CONFIRMATION --cancel--> IDLE
                                                 --confirm--> EXECUTING
    IDLE --(non-confirmable)--> EXECUTING --success--> IDLE (refreshed)
                                          --failure--> IDLE + error
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum

from structlog import get_logger

from action_queue.application.ports.action_performer import ActionPerformerProtocol
from action_queue.application.ports.navigator import (
    NavigationTarget,
    NavigatorProtocol,
)
from action_queue.application.ports.snapshot_invalidator import (
    SnapshotInvalidatorProtocol,
)
from action_queue.application.services.navigation import (
    DEFAULT_ROUTES,
    resolve_navigation_target,
)
from action_queue.domain.errors.queue import (
    ActionInProgressError,
    ConfirmationStateError,
    InvalidActionError,
    MutationError,
)
from action_queue.domain.models.action_item import ActionItem, ActionKind
from action_queue.domain.models.viewer_role import ViewerRole

logger = get_logger(__name__)

DEFAULT_CONFIRM_ACTIONS: frozenset[ActionKind] = frozenset(
    {ActionKind.REJECT, ActionKind.ESCALATE}
)


class ActionPhase(Enum):
    """Lifecycle phase of a single item's action."""

    IDLE = "idle"
    PENDING_CONFIRMATION = "pending_confirmation"
    EXECUTING = "executing"


@dataclass(frozen=True)
class ItemActionState:
    """Dispatcher-owned state of one item.

    Attributes:
        phase: Current lifecycle phase.
        action: Action awaiting confirmation or executing.
        error: Last mutation failure, kept until the next attempt.
    """

    phase: ActionPhase = ActionPhase.IDLE
    action: ActionKind | None = None
    error: MutationError | None = None

    @property
    def is_busy(self) -> bool:
        return self.phase is not ActionPhase.IDLE


IDLE_STATE = ItemActionState()


class DispatchStatus(Enum):
    """How a dispatch request ended."""

    COMPLETED = "completed"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CANCELLED = "cancelled"
    FAILED = "failed"
    NAVIGATED = "navigated"


@dataclass(frozen=True)
class DispatchResult:
    """Result of a dispatch request.

    Attributes:
        item_id: Addressed item.
        action: Requested action.
        status: Outcome.
        error: Mutation failure when status is FAILED.
        navigation: Target when status is NAVIGATED.
    """

    item_id: str
    action: ActionKind
    status: DispatchStatus
    error: MutationError | None = None
    navigation: NavigationTarget | None = None


class ActionDispatcherService:
    """Dispatches item actions for one viewer role.

    Example:
        >>> dispatcher = ActionDispatcherService(
        ...     role=ViewerRole.MANAGER,
        ...     performer=performer,
        ...     invalidator=aggregator,
        ... )
        >>> result = await dispatcher.execute(item, ActionKind.REJECT)
        >>> result.status
        <DispatchStatus.AWAITING_CONFIRMATION: 'awaiting_confirmation'>
        >>> result = await dispatcher.confirm(item.id)
        >>> result.status
        <DispatchStatus.COMPLETED: 'completed'>
    """

    def __init__(
        self,
        role: ViewerRole,
        performer: ActionPerformerProtocol,
        invalidator: SnapshotInvalidatorProtocol,
        navigator: NavigatorProtocol | None = None,
        confirm_actions: Iterable[ActionKind] = DEFAULT_CONFIRM_ACTIONS,
        routes: Mapping[str, str] = DEFAULT_ROUTES,
    ) -> None:
        """Initialize the dispatcher.

        Args:
            role: Viewer role whose snapshot is invalidated on success.
            performer: Domain mutation endpoint.
            invalidator: Snapshot cache to invalidate (the aggregator).
            navigator: Receives `view` targets; optional for headless use.
            confirm_actions: Actions gated by an explicit confirm step.
            routes: Entity type to route template table for `view`.
        """
        self._role = role
        self._performer = performer
        self._invalidator = invalidator
        self._navigator = navigator
        self._confirm_actions = frozenset(confirm_actions)
        self._routes = routes
        self._states: dict[str, ItemActionState] = {}
        self._log = logger.bind(role=role.value)

    @property
    def role(self) -> ViewerRole:
        return self._role

    def requires_confirmation(self, action: ActionKind) -> bool:
        return action in self._confirm_actions

    def state_for(self, item_id: str) -> ItemActionState:
        """Return the lifecycle state of an item (IDLE if untracked)."""
        return self._states.get(item_id, IDLE_STATE)

    def is_busy(self, item_id: str) -> bool:
        return self.state_for(item_id).is_busy

    def is_executing(self, item_id: str) -> bool:
        return self.state_for(item_id).phase is ActionPhase.EXECUTING

    def clear_error(self, item_id: str) -> None:
        state = self._states.get(item_id)
        if state is not None and state.phase is ActionPhase.IDLE:
            del self._states[item_id]

    def prune(self, live_ids: Iterable[str]) -> None:
        """Drop recorded failures of items that are no longer listed.

        Pending confirmations and executing actions are kept.
        """
        live = set(live_ids)
        stale = [
            item_id
            for item_id, state in self._states.items()
            if item_id not in live and state.phase is ActionPhase.IDLE
        ]
        for item_id in stale:
            del self._states[item_id]

    async def execute(self, item: ActionItem, action: ActionKind) -> DispatchResult:
        """Request an action on an item.

        Args:
            item: The addressed item, as currently displayed.
            action: Requested action kind.

        Returns:
            DispatchResult. FAILED carries the MutationError; it is
            never retried here.

        Raises:
            InvalidActionError: If the item does not advertise `action`.
            ActionInProgressError: If the item is executing or awaiting
                confirmation of a different action.
            NavigationRouteError: If `view` is requested for an entity
                type the route table has no entry for.
        """
        log = self._log.bind(item_id=item.id, action=action.value)

        if not item.has_action(action):
            log.warning("action_not_available", available=[a.value for a in item.action_kinds])
            raise InvalidActionError(item.id, action)

        if action is ActionKind.VIEW:
            return self._navigate(item)

        state = self.state_for(item.id)
        if state.phase is ActionPhase.PENDING_CONFIRMATION and state.action is action:
            return DispatchResult(item.id, action, DispatchStatus.AWAITING_CONFIRMATION)
        if state.is_busy:
            log.info("action_rejected_item_busy", phase=state.phase.value)
            raise ActionInProgressError(item.id, action)

        if action in self._confirm_actions:
            self._states[item.id] = ItemActionState(
                phase=ActionPhase.PENDING_CONFIRMATION, action=action
            )
            log.info("action_awaiting_confirmation")
            return DispatchResult(item.id, action, DispatchStatus.AWAITING_CONFIRMATION)

        return await self._perform(item.id, action)

    async def confirm(self, item_id: str) -> DispatchResult:
        """Confirm the pending action of an item and execute it.

        Raises:
            ConfirmationStateError: If nothing awaits confirmation.
        """
        state = self.state_for(item_id)
        if state.phase is not ActionPhase.PENDING_CONFIRMATION or state.action is None:
            raise ConfirmationStateError(item_id)
        self._log.info("action_confirmed", item_id=item_id, action=state.action.value)
        return await self._perform(item_id, state.action)

    def cancel(self, item_id: str) -> DispatchResult:
        """Abandon the pending action of an item. No side effects.

        Raises:
            ConfirmationStateError: If nothing awaits confirmation.
        """
        state = self.state_for(item_id)
        if state.phase is not ActionPhase.PENDING_CONFIRMATION or state.action is None:
            raise ConfirmationStateError(item_id)
        del self._states[item_id]
        self._log.info("action_cancelled", item_id=item_id, action=state.action.value)
        return DispatchResult(item_id, state.action, DispatchStatus.CANCELLED)

    def _navigate(self, item: ActionItem) -> DispatchResult:
        target = resolve_navigation_target(item, self._routes)
        if self._navigator is not None:
            self._navigator.open(target)
        self._log.debug("item_view_opened", item_id=item.id, path=target.path)
        return DispatchResult(
            item.id, ActionKind.VIEW, DispatchStatus.NAVIGATED, navigation=target
        )

    async def _perform(self, item_id: str, action: ActionKind) -> DispatchResult:
        log = self._log.bind(item_id=item_id, action=action.value)
        self._states[item_id] = ItemActionState(phase=ActionPhase.EXECUTING, action=action)
        log.info("action_executing")
        try:
            await self._performer.perform_action(item_id, action)
        except MutationError as e:
            return self._fail(item_id, action, e)
        except Exception as e:
            # Anything else from the transport is still a per-item mutation failure
            return self._fail(item_id, action, MutationError(item_id, action, str(e)))

        self._states.pop(item_id, None)
        self._invalidator.invalidate(self._role)
        log.info("action_completed")
        return DispatchResult(item_id, action, DispatchStatus.COMPLETED)

    def _fail(self, item_id: str, action: ActionKind, error: MutationError) -> DispatchResult:
        self._states[item_id] = ItemActionState(phase=ActionPhase.IDLE, action=action, error=error)
        self._log.warning(
            "action_failed",
            item_id=item_id,
            action=action.value,
            status_code=error.status_code,
            error=str(error),
        )
        return DispatchResult(item_id, action, DispatchStatus.FAILED, error=error)


__all__ = [
    "DEFAULT_CONFIRM_ACTIONS",
    "ActionDispatcherService",
    "ActionPhase",
    "DispatchResult",
    "DispatchStatus",
    "ItemActionState",
]
