"""Offset validation helpers shared across buffer services."""

from __future__ import annotations

from .document import TextDocument
from .state import Selection


def clamp_offset(document: TextDocument, offset: int) -> int:
    return max(0, min(offset, len(document)))


def clamp_selection(document: TextDocument, selection: Selection) -> Selection:
    return Selection(
        anchor=clamp_offset(document, selection.anchor),
        active=clamp_offset(document, selection.active),
    )


def hard_line_bounds(text: str, offset: int) -> tuple[int, int]:
    """Return ``(start, end)`` of the newline-delimited line holding ``offset``.

    ``end`` points at the terminating newline, or ``len(text)`` for the last
    line.
    """

    offset = max(0, min(offset, len(text)))
    start = text.rfind("\n", 0, offset) + 1
    end = text.find("\n", offset)
    if end < 0:
        end = len(text)
    return start, end


__all__ = ["clamp_offset", "clamp_selection", "hard_line_bounds"]
