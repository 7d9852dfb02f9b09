"""Event-loop timer and clock adapters."""

from action_queue.infrastructure.scheduling.asyncio_scheduler import AsyncioTimerScheduler
from action_queue.infrastructure.scheduling.system_clock import SystemClock

__all__: list[str] = ["AsyncioTimerScheduler", "SystemClock"]
