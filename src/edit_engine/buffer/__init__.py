"""Buffer abstractions: text, selection, history, and their invariants."""

from .buffer import Buffer, BufferDelta, ChangeListener, Transaction
from .clipboard import Clipboard, InMemoryClipboard
from .document import TextDocument
from .state import Selection
from .sync import BufferMirror
from .undo import MAX_STACK_SIZE, History, UndoEntry
from .validation import clamp_offset, clamp_selection, hard_line_bounds

__all__ = [
    "Buffer",
    "BufferDelta",
    "BufferMirror",
    "ChangeListener",
    "Clipboard",
    "History",
    "InMemoryClipboard",
    "MAX_STACK_SIZE",
    "Selection",
    "TextDocument",
    "Transaction",
    "UndoEntry",
    "clamp_offset",
    "clamp_selection",
    "hard_line_bounds",
]
