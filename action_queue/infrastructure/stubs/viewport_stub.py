"""Viewport and navigator stubs recording presentation requests."""

from __future__ import annotations

from action_queue.application.ports.navigator import NavigationTarget


class ViewportStub:
    """ViewportProtocol that records scroll and focus requests."""

    def __init__(self) -> None:
        self.scrolled_to: list[str] = []
        self.focused: list[str] = []

    def scroll_into_view(self, item_id: str) -> None:
        self.scrolled_to.append(item_id)

    def focus_row(self, item_id: str) -> None:
        self.focused.append(item_id)


class NavigatorStub:
    """NavigatorProtocol that records opened targets."""

    def __init__(self) -> None:
        self.opened: list[NavigationTarget] = []

    def open(self, target: NavigationTarget) -> None:
        self.opened.append(target)

    @property
    def last_path(self) -> str | None:
        return self.opened[-1].path if self.opened else None
