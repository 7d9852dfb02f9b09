"""Unit tests for the action queue dependency providers."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from action_queue.api.dependencies.action_queue import (
    get_action_dispatchers,
    get_queue_aggregator,
    reset_action_queue_dependencies,
    set_action_dispatchers,
    set_queue_aggregator,
)
from action_queue.bootstrap.action_queue import build_action_queue
from action_queue.config.queue_config import DEFAULT_ACTION_QUEUE_CONFIG
from action_queue.domain.models.viewer_role import ViewerRole
from action_queue.infrastructure.stubs import ActionPerformerStub, PendingItemSourceStub


@pytest.fixture(autouse=True)
def reset_dependencies() -> Iterator[None]:
    reset_action_queue_dependencies()
    yield
    reset_action_queue_dependencies()


class TestDependencies:
    """Tests for get/set singletons."""

    def test_uninitialized_raises(self) -> None:
        with pytest.raises(RuntimeError):
            get_queue_aggregator()
        with pytest.raises(RuntimeError):
            get_action_dispatchers()

    def test_set_and_get(self) -> None:
        services = build_action_queue(
            DEFAULT_ACTION_QUEUE_CONFIG,
            sources=[PendingItemSourceStub()],
            performer=ActionPerformerStub(),
        )

        set_queue_aggregator(services.aggregator)
        set_action_dispatchers(services.dispatchers)

        assert get_queue_aggregator() is services.aggregator
        assert set(get_action_dispatchers()) == set(ViewerRole)

    def test_mismatched_role_rejected(self) -> None:
        services = build_action_queue(
            DEFAULT_ACTION_QUEUE_CONFIG,
            sources=[PendingItemSourceStub()],
            performer=ActionPerformerStub(),
        )

        with pytest.raises(ValueError):
            set_action_dispatchers(
                {ViewerRole.MANAGER: services.dispatchers[ViewerRole.RESIDENT]}
            )
