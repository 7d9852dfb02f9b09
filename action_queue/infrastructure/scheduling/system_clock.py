"""System clock adapter."""

from __future__ import annotations

import time
from datetime import datetime, timezone

from action_queue.application.ports.clock import ClockProtocol


class SystemClock(ClockProtocol):
    """ClockProtocol backed by the wall clock and time.monotonic()."""

    def utcnow(self) -> datetime:
        return datetime.now(timezone.utc)

    def monotonic(self) -> float:
        return time.monotonic()
