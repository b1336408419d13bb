"""Read-only snapshot handed to hosts and renderers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .state import Selection


@dataclass(slots=True)
class BufferMirror:
    """Host-friendly snapshot describing the current buffer state."""

    text: str
    cursor: int
    selection: Selection
    version: int
    modified: bool = False
    path: Optional[str] = None

    @property
    def has_selection(self) -> bool:
        return not self.selection.empty


__all__ = ["BufferMirror"]
