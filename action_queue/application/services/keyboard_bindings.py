"""Keyboard bindings for the queue region.

Keys map to queue commands only while the queue region holds focus, and
never while the user is typing in a text field or holding a modifier
(so browser/OS shortcuts such as Ctrl+R pass through untouched).

    j / ArrowDown   select next
    k / ArrowUp     select previous
    Enter           open (view) the selected item
    a               approve the selected item
    r               reject the selected item
    Escape          close the filters panel
    ?               toggle the help overlay (owned by the caller)
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from enum import Enum


class QueueCommand(Enum):
    """Command a key press resolves to."""

    SELECT_NEXT = "select_next"
    SELECT_PREVIOUS = "select_previous"
    OPEN = "open"
    APPROVE = "approve"
    REJECT = "reject"
    CLOSE_FILTERS = "close_filters"
    TOGGLE_HELP = "toggle_help"


KEY_BINDINGS: Mapping[str, QueueCommand] = {
    "j": QueueCommand.SELECT_NEXT,
    "ArrowDown": QueueCommand.SELECT_NEXT,
    "k": QueueCommand.SELECT_PREVIOUS,
    "ArrowUp": QueueCommand.SELECT_PREVIOUS,
    "Enter": QueueCommand.OPEN,
    "a": QueueCommand.APPROVE,
    "r": QueueCommand.REJECT,
    "Escape": QueueCommand.CLOSE_FILTERS,
    "?": QueueCommand.TOGGLE_HELP,
}


@dataclass(frozen=True)
class KeyEvent:
    """A key press delivered to the queue region.

    Attributes:
        key: Key name as reported by the input layer ("j", "Enter", ...).
        target_is_text_input: True if focus is inside a text field.
        has_modifier: True if Ctrl, Alt or Meta is held.
    """

    key: str
    target_is_text_input: bool = False
    has_modifier: bool = False


def resolve_command(event: KeyEvent) -> QueueCommand | None:
    """Map a key event to a queue command, or None if it must be ignored."""
    if event.target_is_text_input or event.has_modifier:
        return None
    return KEY_BINDINGS.get(event.key)


KeyHandler = Callable[[KeyEvent], Awaitable[bool]]
# Registers a handler with the input layer and returns its unsubscribe function
KeySubscriber = Callable[[KeyHandler], Callable[[], None]]


class KeyboardListenerHandle:
    """Handle to a registered key listener. Release is idempotent."""

    def __init__(self, unsubscribe: Callable[[], None]) -> None:
        self._unsubscribe: Callable[[], None] | None = unsubscribe

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    def release(self) -> None:
        if self._unsubscribe is not None:
            unsubscribe, self._unsubscribe = self._unsubscribe, None
            unsubscribe()


__all__ = [
    "KEY_BINDINGS",
    "KeyEvent",
    "KeyHandler",
    "KeySubscriber",
    "KeyboardListenerHandle",
    "QueueCommand",
    "resolve_command",
]
