"""Translate between buffer offsets and visual (row, column) positions."""

from __future__ import annotations

from typing import Sequence, Tuple

from .wrap import WrappedLine

VisualPosition = Tuple[int, int]  # (row, column)


def line_index_at(offset: int, lines: Sequence[WrappedLine]) -> int:
    """Return the first visual line whose inclusive range holds ``offset``.

    Offsets past every line resolve to the last line; the result is never
    out of range.
    """

    for index, line in enumerate(lines):
        if line.start <= offset <= line.end:
            return index
    return max(0, len(lines) - 1)


def line_start(index: int, lines: Sequence[WrappedLine]) -> int:
    if not lines:
        return 0
    index = max(0, min(index, len(lines) - 1))
    return lines[index].start


def line_end(index: int, lines: Sequence[WrappedLine]) -> int:
    if not lines:
        return 0
    index = max(0, min(index, len(lines) - 1))
    return lines[index].end


def column_in_line(offset: int, index: int, lines: Sequence[WrappedLine]) -> int:
    return max(0, offset - line_start(index, lines))


def visual_position(offset: int, lines: Sequence[WrappedLine]) -> VisualPosition:
    row = line_index_at(offset, lines)
    return row, column_in_line(offset, row, lines)


def offset_at(row: int, column: int, lines: Sequence[WrappedLine]) -> int:
    """Inverse of :func:`visual_position`; the column clamps to the line."""

    if not lines:
        return 0
    row = max(0, min(row, len(lines) - 1))
    line = lines[row]
    return line.start + max(0, min(column, len(line.text)))


def vertical_target(
    offset: int, delta: int, lines: Sequence[WrappedLine]
) -> int | None:
    """Offset reached by moving ``delta`` visual lines, keeping the column.

    Returns ``None`` when the move would leave the first or last line, so
    callers can treat it as a no-op. Moving into a shorter line clamps to its
    end.
    """

    if not lines:
        return None
    row = line_index_at(offset, lines)
    target = row + delta
    if target < 0 or target >= len(lines):
        return None
    return offset_at(target, column_in_line(offset, row, lines), lines)


__all__ = [
    "VisualPosition",
    "column_in_line",
    "line_end",
    "line_index_at",
    "line_start",
    "offset_at",
    "vertical_target",
    "visual_position",
]
