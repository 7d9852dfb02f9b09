"""Timer scheduler port.

Timers are scoped resources: every scheduled callback yields a handle
that the owner must cancel on teardown or when a newer activation
supersedes it.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Protocol


class TimerHandle(Protocol):
    """Handle to a scheduled callback."""

    def cancel(self) -> None:
        """Cancel the callback. Idempotent; no-op once fired."""
        ...


class TimerSchedulerProtocol(Protocol):
    """Protocol for scheduling one-shot callbacks on the event loop."""

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> TimerHandle:
        """Schedule `callback` to run once after `delay_seconds`.

        Returns:
            Handle that cancels the callback.
        """
        ...


__all__ = ["TimerHandle", "TimerSchedulerProtocol"]
