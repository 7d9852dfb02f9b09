"""Configuration module for the action queue.

Available Configurations:
- ActionQueueConfig: freshness, refresh, highlight and confirmation policy
"""

from action_queue.config.queue_config import (
    DEFAULT_ACTION_QUEUE_CONFIG,
    DEFAULT_CONFIRM_ACTIONS,
    TEST_ACTION_QUEUE_CONFIG,
    ActionQueueConfig,
)

__all__ = [
    "ActionQueueConfig",
    "DEFAULT_ACTION_QUEUE_CONFIG",
    "DEFAULT_CONFIRM_ACTIONS",
    "TEST_ACTION_QUEUE_CONFIG",
]
