"""Action queue configuration.

This module defines configuration for snapshot freshness, background
refresh, deep-link highlighting and confirmation gating, with environment
variable overrides for deployment tuning.

Environment Variables:
- ACTION_QUEUE_STALE_TIME: Seconds a fetched snapshot stays fresh (default: 30)
- ACTION_QUEUE_REFETCH_INTERVAL: Background refresh period in seconds (default: 60)
- ACTION_QUEUE_HIGHLIGHT_MS: Deep-link highlight lifetime in ms (default: 2000)
- ACTION_QUEUE_CONFIRM_ACTIONS: Comma list of actions requiring confirmation
  (default: "reject,escalate")
- ACTION_QUEUE_SOURCE_TIMEOUT: HTTP timeout for source/mutation calls (default: 10)
- ACTION_QUEUE_API_BASE_URL: Base URL of the domain endpoints
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from action_queue.application.services.action_dispatcher_service import (
    DEFAULT_CONFIRM_ACTIONS,
)
from action_queue.domain.models.action_item import ActionKind


def _get_int_env(key: str, default: int) -> int:
    """Get integer environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed integer value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


def _get_float_env(key: str, default: float) -> float:
    """Get float environment variable with default.

    Args:
        key: Environment variable name.
        default: Default value if not set or invalid.

    Returns:
        Parsed float value or default.
    """
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError:
        return default


def _get_actions_env(key: str, default: frozenset[ActionKind]) -> frozenset[ActionKind]:
    """Get a comma-separated action list, falling back on any unknown name."""
    value = os.environ.get(key)
    if value is None:
        return default
    try:
        return frozenset(
            ActionKind(name.strip().lower()) for name in value.split(",") if name.strip()
        )
    except ValueError:
        return default


@dataclass(frozen=True)
class ActionQueueConfig:
    """Configuration for the prioritized action queue.

    Attributes:
        stale_time_seconds: How long a fetched candidate set is reused
                            before the next read refetches. Default: 30s.
        refetch_interval_seconds: Background refresh period, so the queue
                                  self-heals if an invalidation is missed.
                                  Default: 60s. Must be >= stale time.
        highlight_duration_ms: Lifetime of a deep-link highlight.
                               Default: 2000 ms.
        confirm_actions: Actions gated by an explicit confirm step.
                         Default: reject, escalate.
        source_timeout_seconds: HTTP timeout for adapters. Default: 10s.
        api_base_url: Base URL of the domain endpoints.
    """

    stale_time_seconds: float = 30.0
    refetch_interval_seconds: float = 60.0
    highlight_duration_ms: int = 2000
    confirm_actions: frozenset[ActionKind] = field(
        default_factory=lambda: DEFAULT_CONFIRM_ACTIONS
    )
    source_timeout_seconds: float = 10.0
    api_base_url: str = "http://localhost:8080/api/v1"

    def __post_init__(self) -> None:
        """Validate configuration values."""
        if self.stale_time_seconds < 0:
            raise ValueError(
                f"stale_time_seconds must be non-negative, got {self.stale_time_seconds}"
            )
        if self.refetch_interval_seconds <= 0:
            raise ValueError(
                "refetch_interval_seconds must be positive, "
                f"got {self.refetch_interval_seconds}"
            )
        if self.refetch_interval_seconds < self.stale_time_seconds:
            raise ValueError(
                f"refetch_interval_seconds ({self.refetch_interval_seconds}) must be "
                f"at least stale_time_seconds ({self.stale_time_seconds})"
            )
        if self.highlight_duration_ms < 1:
            raise ValueError(
                f"highlight_duration_ms must be positive, got {self.highlight_duration_ms}"
            )
        if ActionKind.VIEW in self.confirm_actions:
            raise ValueError("view cannot require confirmation")
        if self.source_timeout_seconds <= 0:
            raise ValueError(
                "source_timeout_seconds must be positive, "
                f"got {self.source_timeout_seconds}"
            )

    @property
    def highlight_duration_seconds(self) -> float:
        return self.highlight_duration_ms / 1000

    @classmethod
    def from_environment(cls) -> ActionQueueConfig:
        """Create config from environment variables with defaults.

        Returns:
            ActionQueueConfig with values from environment or defaults.
        """
        return cls(
            stale_time_seconds=_get_float_env("ACTION_QUEUE_STALE_TIME", 30.0),
            refetch_interval_seconds=_get_float_env(
                "ACTION_QUEUE_REFETCH_INTERVAL", 60.0
            ),
            highlight_duration_ms=_get_int_env("ACTION_QUEUE_HIGHLIGHT_MS", 2000),
            confirm_actions=_get_actions_env(
                "ACTION_QUEUE_CONFIRM_ACTIONS", DEFAULT_CONFIRM_ACTIONS
            ),
            source_timeout_seconds=_get_float_env("ACTION_QUEUE_SOURCE_TIMEOUT", 10.0),
            api_base_url=os.environ.get(
                "ACTION_QUEUE_API_BASE_URL", "http://localhost:8080/api/v1"
            ),
        )


# Pre-defined configurations for common use cases

# Default production config
DEFAULT_ACTION_QUEUE_CONFIG = ActionQueueConfig()

# Testing config with short windows for unit tests
TEST_ACTION_QUEUE_CONFIG = ActionQueueConfig(
    stale_time_seconds=0.1,
    refetch_interval_seconds=0.2,
    highlight_duration_ms=50,
    source_timeout_seconds=1.0,
)
