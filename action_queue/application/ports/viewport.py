"""Viewport port: the presentation layer's scroll/focus affordances."""

from __future__ import annotations

from typing import Protocol


class ViewportProtocol(Protocol):
    """Protocol for scrolling to and focusing a queue row."""

    def scroll_into_view(self, item_id: str) -> None:
        """Scroll the row for `item_id` into the visible area."""
        ...

    def focus_row(self, item_id: str) -> None:
        """Move input focus to the row for `item_id`."""
        ...


__all__ = ["ViewportProtocol"]
