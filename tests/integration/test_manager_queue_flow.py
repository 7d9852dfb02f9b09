"""Integration tests for a manager working through the action queue.

Wires aggregator, dispatcher, resolver and controller over the in-memory
stubs, the way an embedding application wires them over HTTP adapters.
"""

from __future__ import annotations

import pytest

from action_queue.application.ports.deep_link import DeepLinkInstruction
from action_queue.application.services.action_dispatcher_service import DispatchStatus
from action_queue.application.services.keyboard_bindings import KeyEvent
from action_queue.application.services.queue_controller_service import QueueController
from action_queue.bootstrap.action_queue import (
    ActionQueueServices,
    build_action_queue,
    build_queue_controller,
)
from action_queue.config.queue_config import DEFAULT_ACTION_QUEUE_CONFIG
from action_queue.domain.models.action_item import ActionKind, ItemType, Priority
from action_queue.domain.models.queue_filters import QueueFilters
from action_queue.domain.models.viewer_role import ViewerRole
from action_queue.infrastructure.stubs import (
    ActionPerformerStub,
    ManualTimerScheduler,
    PendingItemSourceStub,
    PerformedAction,
    ViewportStub,
)
from tests.helpers.items import make_item

pytestmark = pytest.mark.integration

MANAGER = ViewerRole.MANAGER


@pytest.fixture
def faults() -> PendingItemSourceStub:
    source = PendingItemSourceStub("faults")
    source.set_items(
        MANAGER,
        [
            make_item(
                "f1",
                Priority.URGENT,
                ItemType.FAULT_PENDING,
                actions=(ActionKind.VIEW, ActionKind.APPROVE, ActionKind.ESCALATE),
            )
        ],
    )
    return source


@pytest.fixture
def approvals() -> PendingItemSourceStub:
    source = PendingItemSourceStub("approvals")
    source.set_items(
        MANAGER,
        [
            make_item(
                "a1",
                Priority.HIGH,
                ItemType.APPROVAL_PENDING,
                actions=(ActionKind.VIEW, ActionKind.APPROVE, ActionKind.REJECT),
            )
        ],
    )
    return source


@pytest.fixture
def performer(
    faults: PendingItemSourceStub, approvals: PendingItemSourceStub
) -> ActionPerformerStub:
    return ActionPerformerStub(sources=[faults, approvals])


@pytest.fixture
def services(
    faults: PendingItemSourceStub,
    approvals: PendingItemSourceStub,
    performer: ActionPerformerStub,
) -> ActionQueueServices:
    # Approvals listed first: ranking alone must put f1 ahead of a1
    return build_action_queue(
        DEFAULT_ACTION_QUEUE_CONFIG, sources=[approvals, faults], performer=performer
    )


@pytest.fixture
def controller(
    services: ActionQueueServices,
    timer_scheduler: ManualTimerScheduler,
    viewport_stub: ViewportStub,
) -> QueueController:
    controller = build_queue_controller(
        services, MANAGER, scheduler=timer_scheduler, viewport=viewport_stub
    )
    controller.focus()
    return controller


def _ids(controller: QueueController) -> list[str]:
    return [item.id for item in controller.items]


class TestManagerRejectsApproval:
    """Rank, filter, reject with confirmation, and reconcile."""

    @pytest.mark.asyncio
    async def test_end_to_end(
        self,
        controller: QueueController,
        services: ActionQueueServices,
        performer: ActionPerformerStub,
        approvals: PendingItemSourceStub,
    ) -> None:
        await controller.refresh()
        assert _ids(controller) == ["f1", "a1"]

        await controller.set_filters(QueueFilters(priorities=frozenset({Priority.HIGH})))
        assert _ids(controller) == ["a1"]
        assert controller.state.selected_index == 0

        assert await controller.handle_key(KeyEvent("r")) is True
        assert controller.pending_confirmation() is ActionKind.REJECT
        assert performer.call_count == 0

        result = await controller.confirm_pending()

        assert result.status is DispatchStatus.COMPLETED
        assert performer.calls == [PerformedAction("a1", ActionKind.REJECT)]
        assert _ids(controller) == []
        assert controller.state.selected_index == -1

        snapshot = await services.aggregator.fetch_queue(MANAGER)
        assert [item.id for item in snapshot.items] == ["f1"]
        assert approvals.query_count == 2

    @pytest.mark.asyncio
    async def test_cancel_leaves_queue_untouched(
        self, controller: QueueController, performer: ActionPerformerStub
    ) -> None:
        await controller.refresh()
        controller.select(1)
        await controller.handle_key(KeyEvent("r"))

        controller.cancel_pending()

        assert performer.call_count == 0
        assert _ids(controller) == ["f1", "a1"]
        assert controller.pending_confirmation() is None


class TestSelectionClampOnFilter:
    """A five-item list narrowed to two keeps a valid selection."""

    @pytest.mark.asyncio
    async def test_selection_moves_to_last_valid_row(
        self,
        controller: QueueController,
        faults: PendingItemSourceStub,
        approvals: PendingItemSourceStub,
    ) -> None:
        approvals.set_items(MANAGER, [])
        faults.set_items(
            MANAGER,
            [
                make_item("f1", Priority.URGENT),
                make_item("f2", Priority.HIGH),
                make_item("f3", Priority.MEDIUM),
                make_item("f4", Priority.LOW),
                make_item("f5", Priority.URGENT),
            ],
        )
        await controller.refresh()
        controller.select(4)
        assert controller.state.selected_index == 4

        await controller.set_filters(QueueFilters(priorities=frozenset({Priority.URGENT})))

        assert _ids(controller) == ["f1", "f5"]
        assert controller.state.selected_index == 1


class TestNotificationDeepLink:
    """A notification click focuses its item once, then the highlight fades."""

    @pytest.mark.asyncio
    async def test_deep_link_highlight_lifecycle(
        self,
        controller: QueueController,
        timer_scheduler: ManualTimerScheduler,
        viewport_stub: ViewportStub,
    ) -> None:
        await controller.refresh()
        instruction = DeepLinkInstruction("a1")

        controller.set_deep_link(instruction)

        assert controller.state.selected_index == 1
        assert controller.state.highlighted_id == "a1"
        assert viewport_stub.focused == ["a1"]

        await controller.handle_key(KeyEvent("k"))
        await controller.refresh()
        assert controller.state.selected_index == 0

        timer_scheduler.advance(2.0)
        assert controller.state.highlighted_id is None
