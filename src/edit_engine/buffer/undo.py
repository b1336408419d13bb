"""Bounded undo/redo history of whole-buffer snapshots."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Optional

MAX_STACK_SIZE = 256


@dataclass(frozen=True, slots=True)
class UndoEntry:
    label: str
    text: str


class History:
    """Two bounded stacks; the oldest snapshot is evicted at capacity.

    Any new push invalidates the redo stack, so history never branches.
    """

    def __init__(self, max_size: int = MAX_STACK_SIZE) -> None:
        if max_size < 1:
            raise ValueError("History needs room for at least one snapshot")
        self.max_size = max_size
        self.undo_stack: Deque[UndoEntry] = deque(maxlen=max_size)
        self.redo_stack: Deque[UndoEntry] = deque(maxlen=max_size)

    def push(self, text: str, *, label: str = "edit") -> None:
        self.undo_stack.append(UndoEntry(label=label, text=text))
        self.redo_stack.clear()

    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def undo(self, current: str) -> Optional[UndoEntry]:
        """Pop the latest snapshot, parking ``current`` on the redo stack."""

        if not self.undo_stack:
            return None
        entry = self.undo_stack.pop()
        self.redo_stack.append(UndoEntry(label=entry.label, text=current))
        return entry

    def redo(self, current: str) -> Optional[UndoEntry]:
        if not self.redo_stack:
            return None
        entry = self.redo_stack.pop()
        self.undo_stack.append(UndoEntry(label=entry.label, text=current))
        return entry

    def clear(self) -> None:
        self.undo_stack.clear()
        self.redo_stack.clear()

    def __len__(self) -> int:
        return len(self.undo_stack)


__all__ = ["History", "UndoEntry", "MAX_STACK_SIZE"]
