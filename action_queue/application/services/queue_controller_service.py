"""Queue controller: selection, filters, highlight and keyboard state machine.

The controller owns the view state of one queue for one viewer role and
mediates between input events, filter changes and the underlying list.
The list itself is owned by the aggregator; per-item action state is
owned by the dispatcher. The three never write each other's state.

Invariants:
- selected_index is -1 exactly when the list is empty, otherwise a valid
  index into the current filtered, ranked list. It is re-clamped on every
  list replacement (filter change, refetch, item resolved by an action).
- approve/reject from the keyboard reach the dispatcher only if the
  selected item advertises that capability.
- Keyboard input is ignored while the queue region is not focused or the
  user is typing in a text field.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field, replace

from structlog import get_logger

from action_queue.application.ports.deep_link import DeepLinkInstructionProtocol
from action_queue.application.services.action_dispatcher_service import (
    ActionDispatcherService,
    ActionPhase,
    DispatchResult,
    DispatchStatus,
)
from action_queue.application.services.deep_link_resolver import DeepLinkResolver
from action_queue.application.services.keyboard_bindings import (
    KeyboardListenerHandle,
    KeyEvent,
    KeySubscriber,
    QueueCommand,
    resolve_command,
)
from action_queue.application.services.queue_aggregator_service import (
    QueueAggregatorService,
)
from action_queue.domain.errors.queue import AggregationError, NavigationRouteError
from action_queue.domain.models.action_item import ActionItem, ActionKind
from action_queue.domain.models.queue_filters import QueueFilters
from action_queue.domain.models.queue_snapshot import QueueSnapshot
from action_queue.domain.models.viewer_role import ViewerRole

logger = get_logger(__name__)


@dataclass
class QueueViewState:
    """Controller-owned view state.

    Attributes:
        selected_index: Selected row, or -1 when the list is empty.
        filters: Active filters.
        filters_panel_open: Whether the filters panel is shown.
        highlighted_id: Item highlighted by a deep link, until expiry.
        has_focus: Whether the queue region holds keyboard focus.
    """

    selected_index: int = -1
    filters: QueueFilters = field(default_factory=QueueFilters)
    filters_panel_open: bool = False
    highlighted_id: str | None = None
    has_focus: bool = False


def clamp_selection(index: int, length: int) -> int:
    """Clamp a selection index into [0, length-1], or -1 if empty."""
    if length <= 0:
        return -1
    return min(max(index, 0), length - 1)


class QueueController:
    """State machine behind a keyboard-operable action queue.

    Example:
        >>> controller = QueueController(
        ...     role=ViewerRole.MANAGER,
        ...     aggregator=aggregator,
        ...     dispatcher=dispatcher,
        ...     resolver=resolver,
        ... )
        >>> await controller.refresh()
        >>> controller.focus()
        >>> await controller.handle_key(KeyEvent("j"))
        True
    """

    def __init__(
        self,
        role: ViewerRole,
        aggregator: QueueAggregatorService,
        dispatcher: ActionDispatcherService,
        resolver: DeepLinkResolver | None = None,
        deep_link: DeepLinkInstructionProtocol | None = None,
        on_toggle_help: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the controller.

        Args:
            role: Viewer role of this queue.
            aggregator: Source of snapshots.
            dispatcher: Executes item actions for the same role.
            resolver: Resolves deep links after each list replacement.
            deep_link: External one-shot focus instruction.
            on_toggle_help: Called on "?"; the help overlay is owned by the caller.
        """
        if dispatcher.role is not role:
            raise ValueError(
                f"Dispatcher role {dispatcher.role.value} does not match {role.value}"
            )
        self._role = role
        self._aggregator = aggregator
        self._dispatcher = dispatcher
        self._resolver = resolver
        self._deep_link = deep_link
        self._on_toggle_help = on_toggle_help
        self._state = QueueViewState()
        self._snapshot: QueueSnapshot | None = None
        self._aggregation_error: AggregationError | None = None
        self._last_result: DispatchResult | None = None
        self._keyboard: KeyboardListenerHandle | None = None
        self._log = logger.bind(role=role.value)

    # ------------------------------------------------------------------
    # Read-only views for the presentation layer
    # ------------------------------------------------------------------

    @property
    def role(self) -> ViewerRole:
        return self._role

    @property
    def state(self) -> QueueViewState:
        """Copy of the current view state."""
        return replace(self._state)

    @property
    def snapshot(self) -> QueueSnapshot | None:
        return self._snapshot

    @property
    def items(self) -> tuple[ActionItem, ...]:
        return self._snapshot.items if self._snapshot is not None else ()

    @property
    def selected_item(self) -> ActionItem | None:
        index = self._state.selected_index
        return self.items[index] if index >= 0 else None

    @property
    def aggregation_error(self) -> AggregationError | None:
        """Error of the last failed refresh, cleared by the next success."""
        return self._aggregation_error

    @property
    def last_result(self) -> DispatchResult | None:
        return self._last_result

    @property
    def dispatcher(self) -> ActionDispatcherService:
        return self._dispatcher

    # ------------------------------------------------------------------
    # List and filters
    # ------------------------------------------------------------------

    async def refresh(self) -> QueueSnapshot:
        """Fetch the snapshot for the active filters and replace the list.

        On failure the previous list stays in place and the error is kept
        in `aggregation_error` for a retry affordance.

        Raises:
            AggregationError: If the aggregator fails.
        """
        try:
            snapshot = await self._aggregator.fetch_queue(self._role, self._state.filters)
        except AggregationError as e:
            self._aggregation_error = e
            self._log.warning("queue_refresh_failed", domain=e.domain, error=str(e))
            raise
        self._aggregation_error = None
        self.set_items(snapshot)
        return snapshot

    def set_items(self, snapshot: QueueSnapshot) -> None:
        """Replace the list, re-clamp the selection and resolve a pending deep link.

        Failures recorded for items that left the list are dropped.
        """
        self._snapshot = snapshot
        self._dispatcher.prune(item.id for item in snapshot.items)
        self._state.selected_index = clamp_selection(
            self._state.selected_index, len(snapshot.items)
        )
        self._resolve_deep_link()

    async def set_filters(self, filters: QueueFilters) -> QueueSnapshot:
        """Apply new filters and refresh the list."""
        self._state.filters = filters
        self._log.debug(
            "queue_filters_changed",
            types=sorted(t.value for t in filters.types or ()),
            priorities=sorted(p.value for p in filters.priorities or ()),
            search=filters.search,
        )
        return await self.refresh()

    def toggle_filters_panel(self) -> None:
        self._state.filters_panel_open = not self._state.filters_panel_open

    def select(self, index: int) -> None:
        """Select a row (pointer input); the index is clamped."""
        self._state.selected_index = clamp_selection(index, len(self.items))

    def focus(self) -> None:
        self._state.has_focus = True

    def blur(self) -> None:
        self._state.has_focus = False

    # ------------------------------------------------------------------
    # Deep links
    # ------------------------------------------------------------------

    def set_deep_link(self, instruction: DeepLinkInstructionProtocol) -> None:
        """Attach a new focus instruction and resolve it against the current list."""
        self._deep_link = instruction
        if self._snapshot is not None:
            self._resolve_deep_link()

    def _resolve_deep_link(self) -> None:
        if self._resolver is None or self._snapshot is None:
            return
        resolution = self._resolver.resolve(
            self._deep_link, self._snapshot, self._on_highlight_expired
        )
        if resolution is None:
            return
        self._state.selected_index = resolution.index
        self._state.highlighted_id = resolution.item_id

    def _on_highlight_expired(self, item_id: str) -> None:
        if self._state.highlighted_id == item_id:
            self._state.highlighted_id = None

    # ------------------------------------------------------------------
    # Keyboard
    # ------------------------------------------------------------------

    async def handle_key(self, event: KeyEvent) -> bool:
        """Apply a key press.

        Returns:
            True if the key was consumed, False if ignored.
        """
        if not self._state.has_focus:
            return False
        command = resolve_command(event)
        if command is None:
            return False

        length = len(self.items)
        if command is QueueCommand.SELECT_NEXT:
            if length == 0:
                return False
            self._state.selected_index = min(self._state.selected_index + 1, length - 1)
            return True
        if command is QueueCommand.SELECT_PREVIOUS:
            if length == 0:
                return False
            self._state.selected_index = max(self._state.selected_index - 1, 0)
            return True
        if command is QueueCommand.OPEN:
            return await self._dispatch_selected(ActionKind.VIEW)
        if command is QueueCommand.APPROVE:
            return await self._dispatch_selected(ActionKind.APPROVE)
        if command is QueueCommand.REJECT:
            return await self._dispatch_selected(ActionKind.REJECT)
        if command is QueueCommand.CLOSE_FILTERS:
            if not self._state.filters_panel_open:
                return False
            self._state.filters_panel_open = False
            return True
        if command is QueueCommand.TOGGLE_HELP:
            if self._on_toggle_help is None:
                return False
            self._on_toggle_help()
            return True
        return False

    def attach_keyboard(self, subscribe: KeySubscriber) -> KeyboardListenerHandle:
        """Register handle_key with the input layer.

        A previous registration is released first, so at most one listener
        is active per controller.
        """
        if self._keyboard is not None:
            self._keyboard.release()
        self._keyboard = KeyboardListenerHandle(subscribe(self.handle_key))
        return self._keyboard

    def teardown(self) -> None:
        """Release the key listener and cancel the highlight timer."""
        if self._keyboard is not None:
            self._keyboard.release()
            self._keyboard = None
        if self._resolver is not None:
            self._resolver.teardown()
        self._state.highlighted_id = None

    # ------------------------------------------------------------------
    # Actions
    # ------------------------------------------------------------------

    async def execute(self, item: ActionItem, action: ActionKind) -> DispatchResult:
        """Dispatch an action (pointer input) and refresh on success."""
        result = await self._dispatcher.execute(item, action)
        return await self._settle(result)

    async def confirm_pending(self, item_id: str | None = None) -> DispatchResult:
        """Confirm the pending action of an item (default: the selected one)."""
        target = item_id or self._selected_id()
        result = await self._dispatcher.confirm(target)
        return await self._settle(result)

    def cancel_pending(self, item_id: str | None = None) -> DispatchResult:
        """Cancel the pending action of an item (default: the selected one)."""
        result = self._dispatcher.cancel(item_id or self._selected_id())
        self._last_result = result
        return result

    def pending_confirmation(self, item_id: str | None = None) -> ActionKind | None:
        """Action awaiting confirmation on an item, if any."""
        target = item_id or (self.selected_item.id if self.selected_item else None)
        if target is None:
            return None
        state = self._dispatcher.state_for(target)
        if state.phase is ActionPhase.PENDING_CONFIRMATION:
            return state.action
        return None

    async def _dispatch_selected(self, action: ActionKind) -> bool:
        item = self.selected_item
        if item is None or not item.has_action(action):
            return False
        state = self._dispatcher.state_for(item.id)
        if action is not ActionKind.VIEW and state.is_busy:
            # Only re-requesting the action already awaiting confirmation is allowed
            if state.phase is ActionPhase.EXECUTING or state.action is not action:
                self._log.debug("key_ignored_item_busy", item_id=item.id, action=action.value)
                return False
        try:
            await self.execute(item, action)
        except NavigationRouteError as e:
            self._log.warning("key_open_no_route", item_id=item.id, entity_type=e.entity_type)
            return False
        return True

    async def _settle(self, result: DispatchResult) -> DispatchResult:
        self._last_result = result
        if result.status is DispatchStatus.COMPLETED:
            try:
                await self.refresh()
            except AggregationError:
                # Stale list stays; aggregation_error carries the retry state
                pass
        return result

    def _selected_id(self) -> str:
        item = self.selected_item
        if item is None:
            raise ValueError("No item is selected")
        return item.id


__all__ = ["QueueController", "QueueViewState", "clamp_selection"]
