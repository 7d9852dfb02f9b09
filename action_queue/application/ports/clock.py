"""Clock port.

Services needing the current time inject a ClockProtocol implementation
instead of calling datetime.now() or time.monotonic() directly, so tests
can control time.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime


class ClockProtocol(ABC):
    """Abstract interface for time."""

    @abstractmethod
    def utcnow(self) -> datetime:
        """Return the current time as a timezone-aware UTC datetime."""
        ...

    @abstractmethod
    def monotonic(self) -> float:
        """Return a monotonic clock value in seconds.

        Use this for measuring elapsed time (cache freshness), not for
        timestamps. Only differences are meaningful.
        """
        ...


__all__ = ["ClockProtocol"]
