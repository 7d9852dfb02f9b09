"""
Pytest configuration and shared fixtures for action queue tests.

Testing Standards:
- Async tests are marked with @pytest.mark.asyncio (pytest-asyncio)
- Use AsyncMock for async function mocking
- Unit tests go in tests/unit/
- Integration tests go in tests/integration/
"""

import pytest

from action_queue.infrastructure.stubs import (
    ActionPerformerStub,
    ManualTimerScheduler,
    NavigatorStub,
    PendingItemSourceStub,
    ViewportStub,
)
from tests.helpers.fake_clock import FakeClock


@pytest.fixture
def anyio_backend() -> str:
    """Use asyncio as the async backend."""
    return "asyncio"


@pytest.fixture
def project_version() -> str:
    """Provide the current project version for tests."""
    from action_queue import __version__

    return __version__


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def source_stub() -> PendingItemSourceStub:
    return PendingItemSourceStub("faults")


@pytest.fixture
def performer_stub(source_stub: PendingItemSourceStub) -> ActionPerformerStub:
    return ActionPerformerStub(sources=[source_stub])


@pytest.fixture
def timer_scheduler() -> ManualTimerScheduler:
    return ManualTimerScheduler()


@pytest.fixture
def viewport_stub() -> ViewportStub:
    return ViewportStub()


@pytest.fixture
def navigator_stub() -> NavigatorStub:
    return NavigatorStub()
