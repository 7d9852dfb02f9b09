"""Deep-link instruction port.

A navigation or notification collaborator supplies a single "target item
id". The instruction is one-shot: the resolver clears it as soon as it is
consumed so later renders cannot re-trigger the jump.
"""

from __future__ import annotations

from typing import Protocol


class DeepLinkInstructionProtocol(Protocol):
    """Protocol for an external one-shot focus instruction."""

    def peek(self) -> str | None:
        """Return the pending target item id without consuming it."""
        ...

    def clear(self) -> None:
        """Consume the instruction."""
        ...


class DeepLinkInstruction:
    """In-process holder for a pending deep-link target.

    Example:
        >>> instruction = DeepLinkInstruction("a1")
        >>> instruction.peek()
        'a1'
        >>> instruction.clear()
        >>> instruction.peek() is None
        True
    """

    def __init__(self, target_item_id: str | None = None) -> None:
        self._target_item_id = target_item_id

    def set(self, target_item_id: str) -> None:
        self._target_item_id = target_item_id

    def peek(self) -> str | None:
        return self._target_item_id

    def clear(self) -> None:
        self._target_item_id = None


__all__ = ["DeepLinkInstruction", "DeepLinkInstructionProtocol"]
