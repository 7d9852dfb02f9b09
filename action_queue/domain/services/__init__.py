"""Pure domain services: ranking and filtering."""

from action_queue.domain.services.filter_engine import apply_filters, matches_filters
from action_queue.domain.services.ranking import count_by_priority, rank_items

__all__: list[str] = [
    "apply_filters",
    "count_by_priority",
    "matches_filters",
    "rank_items",
]
