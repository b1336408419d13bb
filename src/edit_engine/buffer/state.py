"""Cursor and selection state expressed as buffer offsets."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Selection:
    """An ``(anchor, active)`` offset pair.

    ``active`` is the moving end and doubles as the cursor. ``start`` and
    ``end`` are the ordered bounds used by every editing verb.
    """

    anchor: int = 0
    active: int = 0

    @classmethod
    def caret(cls, offset: int) -> "Selection":
        return cls(anchor=offset, active=offset)

    @property
    def cursor(self) -> int:
        return self.active

    @property
    def start(self) -> int:
        return min(self.anchor, self.active)

    @property
    def end(self) -> int:
        return max(self.anchor, self.active)

    @property
    def empty(self) -> bool:
        return self.anchor == self.active

    @property
    def reversed(self) -> bool:
        return self.active < self.anchor

    def collapse(self) -> "Selection":
        return Selection.caret(self.active)

    def extend_to(self, offset: int) -> "Selection":
        return Selection(anchor=self.anchor, active=offset)

    def with_bounds(self, start: int, end: int) -> "Selection":
        """Return a selection over ``[start, end]`` keeping this direction."""

        if self.reversed:
            return Selection(anchor=end, active=start)
        return Selection(anchor=start, active=end)


__all__ = ["Selection"]
