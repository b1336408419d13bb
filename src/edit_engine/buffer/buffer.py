"""Buffer façade combining document, selection, and history."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Callable, ContextManager, List, Optional

from edit_engine.runtime import telemetry

from .document import TextDocument
from .state import Selection
from .undo import History, MAX_STACK_SIZE
from .validation import clamp_offset, clamp_selection


@dataclass(frozen=True, slots=True)
class BufferDelta:
    """Notification published after the buffer text changed."""

    version: int
    label: str
    text: str
    selection: Selection


ChangeListener = Callable[[BufferDelta], None]


class Buffer:
    """Sole owner of the text, the selection, and the undo history.

    Every content change goes through a :class:`Transaction` so the text and
    the selection are updated together, history receives exactly one
    pre-mutation snapshot, and change listeners fire once.
    """

    def __init__(
        self,
        *,
        name: str = "default",
        document: Optional[TextDocument] = None,
        history: Optional[History] = None,
        max_history: int = MAX_STACK_SIZE,
    ) -> None:
        self.name = name
        self.document = document if document is not None else TextDocument()
        self.history = history if history is not None else History(max_history)
        self._selection = Selection()
        self._listeners: List[ChangeListener] = []
        self._transaction: Optional[Transaction] = None

    @classmethod
    def from_text(cls, text: str, *, name: str = "default") -> "Buffer":
        return cls(name=name, document=TextDocument.from_text(text))

    @property
    def text(self) -> str:
        return self.document.text

    @property
    def version(self) -> int:
        return self.document.version

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def cursor(self) -> int:
        return self._selection.active

    def __len__(self) -> int:
        return len(self.document)

    def add_listener(self, listener: ChangeListener) -> None:
        self._listeners.append(listener)

    def set_selection(self, selection: Selection) -> Selection:
        self._selection = clamp_selection(self.document, selection)
        return self._selection

    def set_cursor(self, offset: int) -> Selection:
        return self.set_selection(Selection.caret(offset))

    def clamp(self, offset: int) -> int:
        return clamp_offset(self.document, offset)

    def selected_text(self) -> str:
        selection = self._selection
        return self.document.slice(selection.start, selection.end)

    def transaction(self, label: str) -> "Transaction":
        return Transaction(self, label)

    def replace_range(
        self,
        start: int,
        end: int,
        text: str,
        *,
        label: str,
        cursor: Optional[int] = None,
    ) -> Selection:
        """Replace ``[start:end]`` and collapse the selection.

        The cursor lands after the inserted text unless ``cursor`` is given.
        """

        with self.transaction(label) as tx:
            start, end = tx.replace(start, end, text)
            target = start + len(text) if cursor is None else cursor
            return tx.select(Selection.caret(target))

    def undo(self) -> bool:
        entry = self.history.undo(self.text)
        if entry is None:
            return False
        self._restore(entry.text, label="undo")
        return True

    def redo(self) -> bool:
        entry = self.history.redo(self.text)
        if entry is None:
            return False
        self._restore(entry.text, label="redo")
        return True

    def reset(self, text: str, *, label: str = "load") -> None:
        """Replace the whole content, dropping history and selection."""

        self.document.reset(text, modified=False)
        self.history.clear()
        self._selection = Selection()
        self._notify(label)

    def mark_saved(self) -> None:
        self.document.modified = False

    def _restore(self, text: str, *, label: str) -> None:
        with telemetry.span(
            f"buffer::{label}", component="buffer", metadata={"buffer": self.name}
        ):
            self.document.reset(text, modified=True)
            self._selection = Selection.caret(clamp_offset(self.document, self.cursor))
            self._notify(label)

    def _notify(self, label: str) -> None:
        delta = BufferDelta(
            version=self.document.version,
            label=label,
            text=self.document.text,
            selection=self._selection,
        )
        for listener in list(self._listeners):
            listener(delta)


class Transaction(AbstractContextManager["Transaction"]):
    """Groups text and selection changes into one undoable step.

    Nested transactions join the outermost one. On an exception the text and
    the selection are rolled back and nothing is pushed to history.
    """

    def __init__(self, buffer: Buffer, label: str) -> None:
        self.buffer = buffer
        self.label = label
        self._span_cm: Optional[ContextManager[object]] = None
        self._owner = False
        self._before_text = ""
        self._before_selection = Selection()

    def __enter__(self) -> "Transaction":
        if self.buffer._transaction is not None:
            return self
        self._owner = True
        self.buffer._transaction = self
        self._before_text = self.buffer.text
        self._before_selection = self.buffer.selection
        self._span_cm = telemetry.span(
            name=f"buffer::{self.label}",
            component="buffer",
            metadata={"buffer": self.buffer.name},
        )
        self._span_cm.__enter__()
        return self

    @property
    def changed(self) -> bool:
        return self.buffer.text != self._before_text

    def replace(self, start: int, end: int, text: str) -> tuple[int, int]:
        """Apply a raw replacement; returns the clamped ``(start, end)``."""

        document = self.buffer.document
        start = clamp_offset(document, start)
        end = clamp_offset(document, end)
        if start > end:
            start, end = end, start
        if start != end or text:
            document.replace(start, end, text)
        return start, end

    def insert(self, offset: int, text: str) -> int:
        start, _ = self.replace(offset, offset, text)
        return start

    def select(self, selection: Selection) -> Selection:
        return self.buffer.set_selection(selection)

    def __exit__(self, exc_type, exc, tb) -> bool:
        if not self._owner:
            return False
        buffer = self.buffer
        buffer._transaction = None
        try:
            if exc_type is not None:
                self._rollback()
            elif self.changed:
                buffer.history.push(self._before_text, label=self.label)
                buffer._notify(self.label)
        finally:
            if self._span_cm is not None:
                self._span_cm.__exit__(exc_type, exc, tb)
        return False

    def _rollback(self) -> None:
        document = self.buffer.document
        if document.text != self._before_text:
            document.reset(self._before_text, modified=document.modified)
        self.buffer._selection = self._before_selection


__all__ = ["Buffer", "BufferDelta", "ChangeListener", "Transaction"]
