"""HTTP adapters for the source domains and their mutation endpoints."""

from action_queue.infrastructure.adapters.http.action_performer import (
    HttpActionPerformer,
)
from action_queue.infrastructure.adapters.http.pending_item_source import (
    HttpPendingItemSource,
)

__all__: list[str] = ["HttpActionPerformer", "HttpPendingItemSource"]
