"""Builders for ActionItem test data."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timedelta, timezone

from action_queue.domain.models.action_item import (
    ActionButton,
    ActionItem,
    ActionKind,
    ButtonVariant,
    EntityType,
    ItemType,
    Priority,
)

BASE_TIME = datetime(2026, 1, 15, 9, 0, 0, tzinfo=timezone.utc)

_ENTITY_FOR_TYPE = {
    ItemType.FAULT_PENDING: EntityType.FAULT,
    ItemType.FAULT_ESCALATED: EntityType.FAULT,
    ItemType.APPROVAL_PENDING: EntityType.BUDGET_APPROVAL,
    ItemType.VOTE_ACTIVE: EntityType.VOTE,
    ItemType.MESSAGE_UNREAD: EntityType.MESSAGE,
    ItemType.METER_DUE: EntityType.METER_READING,
    ItemType.PERSON_MONTHS_DUE: EntityType.PERSON_MONTHS,
    ItemType.ANNOUNCEMENT_UNREAD: EntityType.ANNOUNCEMENT,
}

_VARIANT_FOR_ACTION = {
    ActionKind.APPROVE: ButtonVariant.PRIMARY,
    ActionKind.REJECT: ButtonVariant.DANGER,
    ActionKind.ESCALATE: ButtonVariant.DANGER,
}


def make_item(
    item_id: str,
    priority: Priority = Priority.MEDIUM,
    item_type: ItemType = ItemType.FAULT_PENDING,
    actions: Iterable[ActionKind] = (ActionKind.VIEW,),
    title: str | None = None,
    description: str = "",
    created_offset_minutes: int = 0,
    due_date: datetime | None = None,
    entity_type: str | None = None,
) -> ActionItem:
    """Build an item whose entity id mirrors its id."""
    return ActionItem(
        id=item_id,
        type=item_type,
        priority=priority,
        title=title if title is not None else f"Item {item_id}",
        description=description,
        created_at=BASE_TIME + timedelta(minutes=created_offset_minutes),
        entity_id=f"entity-{item_id}",
        entity_type=entity_type or _ENTITY_FOR_TYPE[item_type].value,
        actions=tuple(
            ActionButton(action, _VARIANT_FOR_ACTION.get(action, ButtonVariant.SECONDARY))
            for action in actions
        ),
        due_date=due_date,
    )
