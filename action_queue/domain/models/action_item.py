"""Action item model for the prioritized action queue.

An ActionItem is one unit of pending work surfaced in the queue. Items are
produced fresh on every aggregation fetch by the source domains (faults,
approvals, votes, messages, meter readings, person-months declarations,
announcements); the engine never creates or permanently deletes them.

Capabilities:
    Each item carries its own ordered list of ActionButton capabilities.
    The engine never switches on item type to decide which operations are
    legal; it only checks membership via ActionItem.has_action().

Priority vs. due date:
    `priority` and `due_date` are independent signals. An item whose due
    date has passed is overdue, but its priority bucket is never promoted.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class Priority(Enum):
    """Priority bucket of an action item, urgent highest."""

    URGENT = "urgent"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# Severity rank, lower sorts first
PRIORITY_RANK: Mapping[Priority, int] = {
    Priority.URGENT: 0,
    Priority.HIGH: 1,
    Priority.MEDIUM: 2,
    Priority.LOW: 3,
}


class ActionKind(Enum):
    """Operation an item may advertise as legal.

    Values:
        VIEW: Navigate to the owning record (non-mutating)
        APPROVE: Approve the pending request
        REJECT: Reject the pending request (destructive)
        DISMISS: Remove the item from the viewer's queue
        COMPLETE: Mark the underlying task done
        ESCALATE: Raise to a higher authority (destructive)
    """

    VIEW = "view"
    APPROVE = "approve"
    REJECT = "reject"
    DISMISS = "dismiss"
    COMPLETE = "complete"
    ESCALATE = "escalate"


class ButtonVariant(Enum):
    """Display hint for an action button. Never interpreted by the engine."""

    PRIMARY = "primary"
    SECONDARY = "secondary"
    DANGER = "danger"


class ItemType(Enum):
    """Kind of pending work, scoped per viewer role."""

    FAULT_PENDING = "fault_pending"
    FAULT_ESCALATED = "fault_escalated"
    APPROVAL_PENDING = "approval_pending"
    VOTE_ACTIVE = "vote_active"
    MESSAGE_UNREAD = "message_unread"
    METER_DUE = "meter_due"
    PERSON_MONTHS_DUE = "person_months_due"
    ANNOUNCEMENT_UNREAD = "announcement_unread"


class EntityType(Enum):
    """Known owning record types.

    ActionItem.entity_type is an opaque string; sources may send types not
    listed here. Only the navigation route table looks at it.
    """

    FAULT = "fault"
    BUDGET_APPROVAL = "budget_approval"
    VOTE = "vote"
    MESSAGE = "message"
    METER_READING = "meter_reading"
    PERSON_MONTHS = "person_months"
    ANNOUNCEMENT = "announcement"


@dataclass(frozen=True)
class ActionButton:
    """A capability advertised by an item.

    Attributes:
        action: The operation kind.
        variant: Display hint (primary/secondary/danger).
        label: Display text, opaque to the engine.
    """

    action: ActionKind
    variant: ButtonVariant = ButtonVariant.SECONDARY
    label: str = ""

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ActionButton:
        """Build a button from its wire representation.

        Raises:
            ValueError: If action or variant is not a known value.
        """
        return cls(
            action=ActionKind(data["action"]),
            variant=ButtonVariant(data.get("variant", ButtonVariant.SECONDARY.value)),
            label=data.get("label") or "",
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "action": self.action.value,
            "variant": self.variant.value,
            "label": self.label,
        }


def _parse_instant(value: str | datetime) -> datetime:
    if not isinstance(value, datetime):
        # Accept the trailing "Z" used by JSON producers
        if value.endswith("Z"):
            value = value[:-1] + "+00:00"
        value = datetime.fromisoformat(value)
    # Instants without an offset are taken as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class ActionItem:
    """One unit of pending work.

    Attributes:
        id: Opaque identifier, unique within a queue snapshot.
        type: Kind of pending work (closed enumeration per viewer role).
        priority: Priority bucket, the primary ranking key.
        title: Display text.
        description: Display text.
        created_at: Creation instant.
        entity_id: Identifier of the owning domain record.
        entity_type: Type of the owning domain record, opaque to the engine.
        actions: Ordered capabilities legal on this item.
        due_date: Optional deadline instant.
    """

    id: str
    type: ItemType
    priority: Priority
    title: str
    description: str
    created_at: datetime
    entity_id: str
    entity_type: str
    actions: tuple[ActionButton, ...] = field(default_factory=tuple)
    due_date: datetime | None = None

    def has_action(self, action: ActionKind) -> bool:
        """Check whether this item advertises the given capability."""
        return any(button.action is action for button in self.actions)

    @property
    def action_kinds(self) -> tuple[ActionKind, ...]:
        return tuple(button.action for button in self.actions)

    def is_overdue(self, now: datetime) -> bool:
        """Check whether the due date lies strictly before `now`.

        Overdue status never changes the priority bucket.
        """
        return self.due_date is not None and self.due_date < now

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ActionItem:
        """Build an item from its camelCase wire representation.

        Args:
            data: Mapping as returned by a source domain endpoint.

        Returns:
            The parsed ActionItem.

        Raises:
            KeyError: If a required field is missing.
            ValueError: If an enum value or timestamp is invalid.
        """
        due_date = data.get("dueDate")
        return cls(
            id=str(data["id"]),
            type=ItemType(data["type"]),
            priority=Priority(data["priority"]),
            title=data.get("title") or "",
            description=data.get("description") or "",
            created_at=_parse_instant(data["createdAt"]),
            due_date=_parse_instant(due_date) if due_date else None,
            entity_id=str(data["entityId"]),
            entity_type=str(data["entityType"]),
            actions=tuple(ActionButton.from_dict(a) for a in data.get("actions") or ()),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the camelCase wire representation."""
        return {
            "id": self.id,
            "type": self.type.value,
            "priority": self.priority.value,
            "title": self.title,
            "description": self.description,
            "createdAt": self.created_at.isoformat(),
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "entityId": self.entity_id,
            "entityType": self.entity_type,
            "actions": [button.to_dict() for button in self.actions],
        }


__all__ = [
    "PRIORITY_RANK",
    "ActionButton",
    "ActionItem",
    "ActionKind",
    "ButtonVariant",
    "EntityType",
    "ItemType",
    "Priority",
]
