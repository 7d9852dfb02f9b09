"""Action queue API routes.

FastAPI router for the prioritized action queue:
- Listing the filtered, ranked queue of a viewer role
- Executing an advertised action against one item

Error mapping (RFC 7807 bodies):
- 404: item is not in the role's current queue
- 409: confirmation required, or another action is in flight
- 422: action not advertised by the item
- 502: the domain endpoint failed the mutation (retryable)
- 503: a source domain could not be aggregated (retryable)
"""

from collections.abc import Mapping

from fastapi import APIRouter, Body, Depends, Query
from fastapi.responses import JSONResponse
from structlog import get_logger

from action_queue.api.dependencies.action_queue import (
    get_action_dispatchers,
    get_queue_aggregator,
)
from action_queue.api.models.action_queue import (
    ActionButtonResponse,
    ActionExecutionRequest,
    ActionExecutionResponse,
    ActionItemResponse,
    ActionQueueErrorResponse,
    ActionQueueResponse,
    PriorityCountsResponse,
)
from action_queue.application.services.action_dispatcher_service import (
    ActionDispatcherService,
    DispatchStatus,
)
from action_queue.application.services.queue_aggregator_service import (
    QueueAggregatorService,
)
from action_queue.domain.errors.queue import (
    ActionInProgressError,
    AggregationError,
    InvalidActionError,
    ItemNotFoundError,
    NavigationRouteError,
)
from action_queue.domain.models.action_item import (
    ActionItem,
    ActionKind,
    ItemType,
    Priority,
)
from action_queue.domain.models.queue_filters import NO_FILTERS, QueueFilters
from action_queue.domain.models.queue_snapshot import QueueSnapshot
from action_queue.domain.models.viewer_role import ViewerRole

logger = get_logger(__name__)

router = APIRouter(prefix="/v1/action-queue", tags=["action-queue"])

ERROR_TYPE_BASE = "https://action-queue.example.com/errors"


# =============================================================================
# Response Mapping
# =============================================================================


def _problem(
    status: int,
    error_type: str,
    title: str,
    detail: str,
    instance: str,
    retryable: bool = False,
) -> JSONResponse:
    return JSONResponse(
        status_code=status,
        content={
            "type": f"{ERROR_TYPE_BASE}/{error_type}",
            "title": title,
            "status": status,
            "detail": detail,
            "instance": instance,
            "retryable": retryable,
        },
        media_type="application/problem+json",
    )


def _item_to_api(item: ActionItem, snapshot: QueueSnapshot) -> ActionItemResponse:
    """Convert a domain ActionItem to its API response model."""
    return ActionItemResponse(
        id=item.id,
        type=item.type,
        priority=item.priority,
        title=item.title,
        description=item.description,
        created_at=item.created_at,
        due_date=item.due_date,
        overdue=item.is_overdue(snapshot.fetched_at),
        entity_id=item.entity_id,
        entity_type=item.entity_type,
        actions=[
            ActionButtonResponse(action=b.action, variant=b.variant, label=b.label)
            for b in item.actions
        ],
    )


def _find_item(snapshot: QueueSnapshot, item_id: str) -> ActionItem:
    item = snapshot.get(item_id)
    if item is None:
        raise ItemNotFoundError(item_id)
    return item


def _snapshot_to_api(snapshot: QueueSnapshot) -> ActionQueueResponse:
    return ActionQueueResponse(
        role=snapshot.role.value,
        items=[_item_to_api(item, snapshot) for item in snapshot.items],
        counts=PriorityCountsResponse(**snapshot.counts.to_dict()),
        fetched_at=snapshot.fetched_at,
    )


# =============================================================================
# Queue Endpoints
# =============================================================================


@router.get(
    "/{role}",
    response_model=ActionQueueResponse,
    status_code=200,
    responses={
        503: {
            "model": ActionQueueErrorResponse,
            "description": "A source domain could not be aggregated",
        },
    },
)
async def get_action_queue(
    role: ViewerRole,
    item_type: list[ItemType] | None = Query(
        None, alias="type", description="Item types to include"
    ),
    priority: list[Priority] | None = Query(None, description="Priorities to include"),
    search: str | None = Query(None, description="Substring of title or description"),
    aggregator: QueueAggregatorService = Depends(get_queue_aggregator),
) -> ActionQueueResponse:
    """Get the filtered, ranked action queue of a viewer role.

    Counts always cover the unfiltered candidate set of the role.

    Args:
        role: Viewer role (manager or resident)
        item_type: Optional item type filter, query name `type` (repeatable)
        priority: Optional priority filter (repeatable)
        search: Optional case-insensitive text filter
        aggregator: Injected queue aggregator

    Returns:
        ActionQueueResponse with items, counts and fetched_at

    Raises:
        503: Aggregation failed
    """
    filters = QueueFilters(
        types=frozenset(item_type) if item_type else None,
        priorities=frozenset(priority) if priority else None,
        search=search,
    )
    try:
        snapshot = await aggregator.fetch_queue(role, filters)
    except AggregationError as e:
        return _problem(
            503,
            "aggregation-failed",
            "Action Queue Unavailable",
            str(e),
            f"/v1/action-queue/{role.value}",
            retryable=True,
        )
    return _snapshot_to_api(snapshot)


@router.post(
    "/{role}/items/{item_id}/actions/{action}",
    response_model=ActionExecutionResponse,
    status_code=200,
    responses={
        404: {"model": ActionQueueErrorResponse, "description": "Item not in queue"},
        409: {
            "model": ActionQueueErrorResponse,
            "description": "Confirmation required or action in progress",
        },
        422: {"model": ActionQueueErrorResponse, "description": "Action not available or no route"},
        502: {"model": ActionQueueErrorResponse, "description": "Mutation failed"},
        503: {"model": ActionQueueErrorResponse, "description": "Aggregation failed"},
    },
)
async def execute_action(
    role: ViewerRole,
    item_id: str,
    action: ActionKind,
    request: ActionExecutionRequest | None = Body(None),
    aggregator: QueueAggregatorService = Depends(get_queue_aggregator),
    dispatchers: Mapping[ViewerRole, ActionDispatcherService] = Depends(
        get_action_dispatchers
    ),
) -> ActionExecutionResponse:
    """Execute an advertised action against one item.

    Confirmable actions run only when the body carries `confirmed: true`;
    the confirmation gate of the dispatcher is passed in one request.

    Args:
        role: Viewer role owning the queue
        item_id: Addressed item
        action: Requested action
        request: Execution options
        aggregator: Injected queue aggregator
        dispatchers: Injected per-role dispatchers

    Returns:
        ActionExecutionResponse on success
    """
    instance = f"/v1/action-queue/{role.value}/items/{item_id}/actions/{action.value}"
    log = logger.bind(role=role.value, item_id=item_id, action=action.value)

    try:
        snapshot = await aggregator.fetch_queue(role, NO_FILTERS)
    except AggregationError as e:
        return _problem(
            503, "aggregation-failed", "Action Queue Unavailable", str(e), instance, True
        )

    try:
        item = _find_item(snapshot, item_id)
    except ItemNotFoundError as e:
        return _problem(404, "item-not-found", "Item Not Found", str(e), instance)

    dispatcher = dispatchers[role]
    if (
        item.has_action(action)
        and dispatcher.requires_confirmation(action)
        and not (request is not None and request.confirmed)
    ):
        log.info("action_confirmation_required")
        return _problem(
            409,
            "confirmation-required",
            "Confirmation Required",
            f"Action '{action.value}' must be confirmed",
            instance,
        )

    try:
        result = await dispatcher.execute(item, action)
        if result.status is DispatchStatus.AWAITING_CONFIRMATION:
            result = await dispatcher.confirm(item.id)
    except InvalidActionError as e:
        return _problem(422, "action-not-available", "Action Not Available", str(e), instance)
    except ActionInProgressError as e:
        return _problem(409, "action-in-progress", "Action In Progress", str(e), instance)
    except NavigationRouteError as e:
        log.warning("navigation_route_missing", entity_type=e.entity_type)
        return _problem(422, "route-not-found", "No Route For Item", str(e), instance)

    if result.status is DispatchStatus.FAILED:
        error = result.error
        dispatcher.clear_error(item.id)
        return _problem(
            502,
            "mutation-failed",
            "Action Failed",
            str(error) if error else "Action failed",
            instance,
            retryable=True,
        )

    return ActionExecutionResponse(
        item_id=item.id,
        action=action,
        status=result.status.value,
        navigation_path=result.navigation.path if result.navigation else None,
    )
