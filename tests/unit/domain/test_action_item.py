"""Unit tests for the ActionItem model and its wire format."""

from datetime import datetime, timedelta, timezone

import pytest

from action_queue.domain.models.action_item import (
    ActionButton,
    ActionItem,
    ActionKind,
    ButtonVariant,
    EntityType,
    ItemType,
    Priority,
)
from tests.helpers.items import BASE_TIME, make_item


def _wire_item(**overrides: object) -> dict[str, object]:
    data: dict[str, object] = {
        "id": "f1",
        "type": "fault_pending",
        "priority": "urgent",
        "title": "Leaking pipe",
        "description": "Basement, building B",
        "createdAt": "2026-01-15T09:00:00Z",
        "entityId": "fault-17",
        "entityType": "fault",
        "actions": [
            {"action": "view", "variant": "secondary", "label": "Open"},
            {"action": "approve", "variant": "primary", "label": "Approve"},
        ],
    }
    data.update(overrides)
    return data


class TestActionItemFromDict:
    """Tests for parsing the camelCase wire representation."""

    def test_parses_all_fields(self) -> None:
        item = ActionItem.from_dict(_wire_item(dueDate="2026-01-20T12:00:00+00:00"))

        assert item.id == "f1"
        assert item.type is ItemType.FAULT_PENDING
        assert item.priority is Priority.URGENT
        assert item.created_at == datetime(2026, 1, 15, 9, 0, tzinfo=timezone.utc)
        assert item.due_date == datetime(2026, 1, 20, 12, 0, tzinfo=timezone.utc)
        assert item.entity_type == EntityType.FAULT.value
        assert item.action_kinds == (ActionKind.VIEW, ActionKind.APPROVE)
        assert item.actions[1].variant is ButtonVariant.PRIMARY

    def test_missing_due_date_is_none(self) -> None:
        item = ActionItem.from_dict(_wire_item())

        assert item.due_date is None

    def test_missing_actions_gives_empty_tuple(self) -> None:
        data = _wire_item()
        del data["actions"]

        assert ActionItem.from_dict(data).actions == ()

    def test_date_without_offset_is_utc(self) -> None:
        item = ActionItem.from_dict(_wire_item(dueDate="2026-01-31"))

        assert item.due_date == datetime(2026, 1, 31, tzinfo=timezone.utc)
        assert item.is_overdue(datetime(2026, 2, 1, tzinfo=timezone.utc))

    def test_local_timestamp_without_offset_is_utc(self) -> None:
        item = ActionItem.from_dict(_wire_item(createdAt="2026-01-15T09:00:00"))

        assert item.created_at == datetime(2026, 1, 15, 9, 0, tzinfo=timezone.utc)

    def test_unknown_entity_type_is_kept(self) -> None:
        item = ActionItem.from_dict(_wire_item(entityType="work_order"))

        assert item.entity_type == "work_order"
        assert item.to_dict()["entityType"] == "work_order"

    def test_unknown_priority_raises(self) -> None:
        with pytest.raises(ValueError):
            ActionItem.from_dict(_wire_item(priority="critical"))

    def test_missing_required_field_raises(self) -> None:
        data = _wire_item()
        del data["entityId"]

        with pytest.raises(KeyError):
            ActionItem.from_dict(data)

    def test_to_dict_uses_wire_names(self) -> None:
        data = ActionItem.from_dict(_wire_item()).to_dict()

        assert data["createdAt"] == "2026-01-15T09:00:00+00:00"
        assert data["entityId"] == "fault-17"
        assert data["dueDate"] is None
        assert data["actions"][0] == {"action": "view", "variant": "secondary", "label": "Open"}


class TestActionItemCapabilities:
    """Tests for capability queries."""

    def test_has_action_only_for_advertised_actions(self) -> None:
        item = make_item("a1", actions=(ActionKind.VIEW, ActionKind.REJECT))

        assert item.has_action(ActionKind.REJECT)
        assert not item.has_action(ActionKind.APPROVE)

    def test_button_defaults_to_secondary(self) -> None:
        button = ActionButton.from_dict({"action": "dismiss"})

        assert button.variant is ButtonVariant.SECONDARY
        assert button.label == ""


class TestIsOverdue:
    """Overdue is informational and never changes priority."""

    def test_overdue_when_due_date_passed(self) -> None:
        item = make_item("m1", priority=Priority.LOW, due_date=BASE_TIME)

        assert item.is_overdue(BASE_TIME + timedelta(seconds=1))
        assert item.priority is Priority.LOW

    def test_not_overdue_at_due_instant(self) -> None:
        item = make_item("m1", due_date=BASE_TIME)

        assert not item.is_overdue(BASE_TIME)

    def test_no_due_date_never_overdue(self) -> None:
        assert not make_item("m1").is_overdue(BASE_TIME + timedelta(days=365))
