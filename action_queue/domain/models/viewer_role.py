"""Viewer roles and their closed item-type enumerations."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

from action_queue.domain.models.action_item import ItemType


class ViewerRole(Enum):
    """Role of the operator viewing the queue."""

    MANAGER = "manager"
    RESIDENT = "resident"


ROLE_ITEM_TYPES: Mapping[ViewerRole, frozenset[ItemType]] = {
    ViewerRole.MANAGER: frozenset(
        {
            ItemType.FAULT_PENDING,
            ItemType.FAULT_ESCALATED,
            ItemType.APPROVAL_PENDING,
            ItemType.VOTE_ACTIVE,
            ItemType.MESSAGE_UNREAD,
            ItemType.ANNOUNCEMENT_UNREAD,
        }
    ),
    ViewerRole.RESIDENT: frozenset(
        {
            ItemType.FAULT_PENDING,
            ItemType.VOTE_ACTIVE,
            ItemType.MESSAGE_UNREAD,
            ItemType.METER_DUE,
            ItemType.PERSON_MONTHS_DUE,
            ItemType.ANNOUNCEMENT_UNREAD,
        }
    ),
}


def item_types_for(role: ViewerRole) -> frozenset[ItemType]:
    """Return the item types a role is allowed to see."""
    return ROLE_ITEM_TYPES[role]


__all__ = ["ROLE_ITEM_TYPES", "ViewerRole", "item_types_for"]
