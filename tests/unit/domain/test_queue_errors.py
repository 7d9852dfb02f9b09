"""Unit tests for action queue domain errors."""

from action_queue.domain.errors import (
    ActionInProgressError,
    AggregationError,
    ConfirmationStateError,
    InvalidActionError,
    MutationError,
)
from action_queue.domain.exceptions import ActionQueueError
from action_queue.domain.models.action_item import ActionKind, ItemType
from action_queue.domain.models.viewer_role import ViewerRole, item_types_for


class TestQueueErrors:
    """Tests for error messages and attributes."""

    def test_all_errors_inherit_from_base(self) -> None:
        errors = [
            AggregationError(ViewerRole.MANAGER),
            InvalidActionError("a1", ActionKind.APPROVE),
            MutationError("a1", ActionKind.APPROVE),
            ActionInProgressError("a1", ActionKind.REJECT),
            ConfirmationStateError("a1"),
        ]

        assert all(isinstance(e, ActionQueueError) for e in errors)

    def test_aggregation_error_names_domain(self) -> None:
        error = AggregationError(ViewerRole.RESIDENT, domain="votes")

        assert error.retryable is True
        assert error.domain == "votes"
        assert "resident" in str(error)
        assert "votes" in str(error)

    def test_mutation_error_keeps_status_code(self) -> None:
        error = MutationError("a1", ActionKind.REJECT, "Already decided", status_code=409)

        assert error.retryable is True
        assert error.status_code == 409
        assert str(error) == "Already decided"

    def test_invalid_action_message(self) -> None:
        error = InvalidActionError("f1", ActionKind.REJECT)

        assert str(error) == "Action 'reject' is not available on item f1"


class TestRoleItemTypes:
    """Tests for the per-role closed type sets."""

    def test_manager_sees_approvals_not_meters(self) -> None:
        types = item_types_for(ViewerRole.MANAGER)

        assert ItemType.APPROVAL_PENDING in types
        assert ItemType.METER_DUE not in types

    def test_resident_sees_meters_not_escalations(self) -> None:
        types = item_types_for(ViewerRole.RESIDENT)

        assert ItemType.PERSON_MONTHS_DUE in types
        assert ItemType.FAULT_ESCALATED not in types
