"""Manually driven timer scheduler for deterministic tests."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

# Absorbs float error when advancing in fractional steps
_EPSILON = 1e-9


@dataclass(order=True)
class ManualTimerHandle:
    """Timer scheduled on a ManualTimerScheduler."""

    due_at: float
    sequence: int
    callback: Callable[[], None] = field(compare=False)
    cancelled: bool = field(default=False, compare=False)
    fired: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualTimerScheduler:
    """TimerSchedulerProtocol whose time only moves via advance().

    Example:
        >>> scheduler = ManualTimerScheduler()
        >>> fired = []
        >>> _ = scheduler.call_later(2.0, lambda: fired.append(True))
        >>> scheduler.advance(1.999)
        >>> fired
        []
        >>> scheduler.advance(0.001)
        >>> fired
        [True]
    """

    def __init__(self) -> None:
        self._now = 0.0
        self._sequence = 0
        self._timers: list[ManualTimerHandle] = []

    @property
    def now(self) -> float:
        return self._now

    def call_later(self, delay_seconds: float, callback: Callable[[], None]) -> ManualTimerHandle:
        self._sequence += 1
        handle = ManualTimerHandle(self._now + delay_seconds, self._sequence, callback)
        self._timers.append(handle)
        return handle

    def advance(self, seconds: float) -> None:
        """Move time forward and fire every due, uncancelled timer in order."""
        self._now += seconds
        due = sorted(
            t
            for t in self._timers
            if t.due_at <= self._now + _EPSILON and not t.cancelled and not t.fired
        )
        for timer in due:
            if timer.cancelled:
                continue
            timer.fired = True
            timer.callback()
        self._timers = [t for t in self._timers if not t.fired and not t.cancelled]

    @property
    def pending_count(self) -> int:
        return sum(1 for t in self._timers if not t.cancelled and not t.fired)
