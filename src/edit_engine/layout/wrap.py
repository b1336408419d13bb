"""Soft-wrap layout: split the buffer into visual lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Hashable, Optional, Sequence, Tuple

from edit_engine.runtime import telemetry

WidthFn = Callable[[str], float]


@dataclass(frozen=True, slots=True)
class WrappedLine:
    """One visual line.

    ``logical_index`` and ``logical_start`` identify the hard (newline
    delimited) line the segment belongs to.
    """

    start: int
    text: str
    logical_index: int
    logical_start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)

    def __len__(self) -> int:
        return len(self.text)

    def contains(self, offset: int) -> bool:
        return self.start <= offset <= self.end


def wrap_text(
    text: str, available_width: float, width_of: WidthFn
) -> Tuple[WrappedLine, ...]:
    """Greedy character wrap of ``text`` within ``available_width``.

    No word-boundary awareness: a line is cut at the first character that
    would overflow, provided the line already holds one character. A
    character wider than the budget is placed alone on its own line.
    Concatenating the line texts with the consumed newlines reproduces
    ``text`` exactly.
    """

    lines: list[WrappedLine] = []
    length = len(text)
    pos = 0
    logical_index = 0
    logical_start = 0

    while pos < length:
        if text[pos] == "\n":
            lines.append(WrappedLine(pos, "", logical_index, logical_start))
            pos += 1
            logical_index += 1
            logical_start = pos
            continue

        line_start = pos
        width = 0.0
        while pos < length and text[pos] != "\n":
            char_width = width_of(text[pos])
            if width + char_width > available_width and pos > line_start:
                break
            width += char_width
            pos += 1

        lines.append(
            WrappedLine(line_start, text[line_start:pos], logical_index, logical_start)
        )

        if pos < length and text[pos] == "\n":
            pos += 1
            logical_index += 1
            logical_start = pos

    if not text or text.endswith("\n"):
        lines.append(WrappedLine(length, "", logical_index, logical_start))

    return tuple(lines)


def content_height(lines: Sequence[WrappedLine], line_height: float) -> float:
    return len(lines) * line_height


class WrapCache:
    """Single-slot cache of the last layout.

    Mutators call :meth:`invalidate`; :meth:`get` recomputes only when the
    cache is dirty or the key (buffer version, width, metrics) moved.
    """

    def __init__(self) -> None:
        self.dirty = True
        self._key: Optional[Hashable] = None
        self._lines: Tuple[WrappedLine, ...] = ()
        self.computations = 0

    def invalidate(self, _payload: object | None = None) -> None:
        self.dirty = True

    def get(
        self,
        text: str,
        version: int,
        available_width: float,
        width_of: WidthFn,
        *,
        metrics_key: Hashable = None,
    ) -> Tuple[WrappedLine, ...]:
        key = (version, available_width, metrics_key)
        if self.dirty or key != self._key:
            with telemetry.span("layout::wrap", component="layout"):
                self._lines = wrap_text(text, available_width, width_of)
            self._key = key
            self.dirty = False
            self.computations += 1
        return self._lines


__all__ = ["WrapCache", "WrappedLine", "WidthFn", "content_height", "wrap_text"]
