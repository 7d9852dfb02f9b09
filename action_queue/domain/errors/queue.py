"""Action queue domain errors.

Error taxonomy:
- AggregationError: fetching the candidate set failed (retryable)
- InvalidActionError: action not advertised by the item (never reaches
  the network; logged, not shown to the user)
- MutationError: the domain endpoint rejected or failed the action
  (retryable, surfaced per item)
- ActionInProgressError / ConfirmationStateError: lifecycle misuse
- NavigationRouteError: `view` on an entity type the route table lacks

A deep link to an item that is not in the current list is not an error
and has no exception class.

No error is retried automatically. Retry is always an explicit
re-invocation of the same operation by the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from action_queue.domain.exceptions import ActionQueueError

if TYPE_CHECKING:
    from action_queue.domain.models.action_item import ActionKind
    from action_queue.domain.models.viewer_role import ViewerRole


class AggregationError(ActionQueueError):
    """Raised when the candidate set for a role cannot be fetched.

    Aggregation is atomic per role: if any source domain fails, the whole
    fetch fails and no partial list is produced.

    Attributes:
        role: Viewer role being aggregated.
        domain: Name of the failing source domain, if known.
        retryable: Always True; the caller decides whether to retry.
    """

    retryable = True

    def __init__(
        self,
        role: ViewerRole,
        domain: Optional[str] = None,
        message: Optional[str] = None,
    ) -> None:
        msg = message or (
            f"Failed to aggregate action queue for role {role.value}"
            + (f" (source: {domain})" if domain else "")
        )
        super().__init__(msg)
        self.role = role
        self.domain = domain


class InvalidActionError(ActionQueueError):
    """Raised when an action is requested that the item does not advertise.

    Attributes:
        item_id: Addressed item.
        action: Requested action kind.
    """

    def __init__(self, item_id: str, action: ActionKind) -> None:
        super().__init__(
            f"Action '{action.value}' is not available on item {item_id}"
        )
        self.item_id = item_id
        self.action = action


class MutationError(ActionQueueError):
    """Raised when a domain endpoint rejects or fails an action.

    Attributes:
        item_id: Addressed item.
        action: Action that failed.
        status_code: HTTP status returned by the endpoint, if any.
        retryable: Always True; the item returns to idle.
    """

    retryable = True

    def __init__(
        self,
        item_id: str,
        action: ActionKind,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(
            message or f"Action '{action.value}' failed for item {item_id}"
        )
        self.item_id = item_id
        self.action = action
        self.status_code = status_code


class ActionInProgressError(ActionQueueError):
    """Raised when an item already has an action executing or awaiting confirmation.

    Attributes:
        item_id: Addressed item.
        action: The action that was rejected.
    """

    def __init__(self, item_id: str, action: ActionKind) -> None:
        super().__init__(
            f"Item {item_id} is busy; cannot start '{action.value}'"
        )
        self.item_id = item_id
        self.action = action


class ConfirmationStateError(ActionQueueError):
    """Raised when confirm/cancel is invoked without a pending confirmation."""

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Item {item_id} has no action awaiting confirmation")
        self.item_id = item_id


class ItemNotFoundError(ActionQueueError):
    """Raised when an item id is not present in the current snapshot."""

    def __init__(self, item_id: str) -> None:
        super().__init__(f"Item {item_id} is not in the current queue")
        self.item_id = item_id


class NavigationRouteError(ActionQueueError, ValueError):
    """Raised when `view` is requested for an entity type with no route.

    Attributes:
        item_id: Addressed item.
        entity_type: Owning record type that has no route.
    """

    def __init__(self, item_id: str, entity_type: str) -> None:
        super().__init__(f"No route for entity type '{entity_type}' (item {item_id})")
        self.item_id = item_id
        self.entity_type = entity_type
