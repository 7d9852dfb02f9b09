"""API models for the action queue endpoints.

Pydantic models for request/response payloads:
- Queue listing for a viewer role (filtered, ranked, with counts)
- Action execution against a single item
"""

from datetime import datetime

from pydantic import BaseModel, Field

from action_queue.domain.models.action_item import (
    ActionKind,
    ButtonVariant,
    ItemType,
    Priority,
)


class ActionButtonResponse(BaseModel):
    """A capability advertised by an item.

    Attributes:
        action: Operation kind
        variant: Display hint
        label: Display text
    """

    action: ActionKind
    variant: ButtonVariant
    label: str = ""


class ActionItemResponse(BaseModel):
    """A single item in the queue response.

    Attributes:
        id: Item identifier
        type: Kind of pending work
        priority: Priority bucket
        title: Display title
        description: Display description
        created_at: Creation instant (ISO 8601)
        due_date: Optional deadline
        overdue: True if due_date lies before the response time
        entity_id: Owning record identifier
        entity_type: Owning record type
        actions: Advertised capabilities in display order
    """

    id: str
    type: ItemType
    priority: Priority
    title: str
    description: str
    created_at: datetime
    due_date: datetime | None = None
    overdue: bool = False
    entity_id: str
    entity_type: str
    actions: list[ActionButtonResponse] = Field(default_factory=list)


class PriorityCountsResponse(BaseModel):
    """Per-priority counts over the unfiltered candidate set."""

    urgent: int = Field(0, ge=0)
    high: int = Field(0, ge=0)
    medium: int = Field(0, ge=0)
    low: int = Field(0, ge=0)
    total: int = Field(0, ge=0)


class ActionQueueResponse(BaseModel):
    """Queue listing for a viewer role.

    Attributes:
        role: Viewer role
        items: Filtered items in ranking order
        counts: Badge counts, independent of the active filters
        fetched_at: When the candidate set was fetched
    """

    role: str
    items: list[ActionItemResponse]
    counts: PriorityCountsResponse
    fetched_at: datetime


class ActionExecutionRequest(BaseModel):
    """Body of an action execution request.

    Attributes:
        confirmed: Must be true for actions gated by confirmation
            (reject and escalate by default).
    """

    confirmed: bool = Field(
        False,
        description="Explicit confirmation for destructive actions",
    )


class ActionExecutionResponse(BaseModel):
    """Outcome of an action execution.

    Attributes:
        item_id: Addressed item
        action: Executed action
        status: completed, or navigated for `view`
        navigation_path: Route of the owning record for `view`
    """

    item_id: str
    action: ActionKind
    status: str
    navigation_path: str | None = None


class ActionQueueErrorResponse(BaseModel):
    """RFC 7807 error body for action queue endpoints."""

    type: str
    title: str
    status: int
    detail: str
    instance: str
    retryable: bool = False
