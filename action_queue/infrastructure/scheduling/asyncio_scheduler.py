"""Timer scheduler backed by the running asyncio event loop."""

from __future__ import annotations

import asyncio
from collections.abc import Callable

from action_queue.application.ports.timer_scheduler import TimerHandle


class AsyncioTimerScheduler:
    """Schedules one-shot callbacks with loop.call_later.

    The returned asyncio.TimerHandle satisfies TimerHandle: cancel() is
    idempotent and a no-op after the callback ran.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        self._loop = loop

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_seconds, callback)
