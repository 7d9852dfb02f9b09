"""
Action Queue - Prioritized worklist engine

Aggregates pending work items (faults, approvals, votes, meter readings,
messages, announcements) from independent source domains into one ranked,
filterable, keyboard-operable queue, and resolves items through inline
actions with confirmation gating.

Operating rules:
- Priority bucket is the only ranking key; ties keep aggregation order
- An item's advertised actions are the sole source of legal operations
- Mutations confirm-then-apply; the next aggregation reconciles the list
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
