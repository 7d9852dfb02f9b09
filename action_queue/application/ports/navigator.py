"""Navigation port.

Resolving a `view` action ends in a route owned by the embedding
application. The engine only hands over a NavigationTarget.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class NavigationTarget:
    """Destination of a `view` action.

    Attributes:
        path: Route path in the embedding application.
        entity_type: Owning record type (e.g. "fault").
        entity_id: Owning record identifier.
    """

    path: str
    entity_type: str
    entity_id: str


class NavigatorProtocol(Protocol):
    """Protocol for the collaborator that performs navigation."""

    def open(self, target: NavigationTarget) -> None:
        ...


__all__ = ["NavigationTarget", "NavigatorProtocol"]
