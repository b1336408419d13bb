"""Viewport geometry: gutter, scrolling, cursor and selection placement."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence, Tuple

from edit_engine.buffer.state import Selection

from .metrics import WidthMetrics
from .position import line_index_at
from .wrap import WrappedLine, content_height


@dataclass(frozen=True, slots=True)
class CursorTarget:
    row: int
    column: int
    x: float
    y: float


@dataclass(frozen=True, slots=True)
class SelectionRange:
    """Selected part of one visual line, in columns and layout units."""

    row: int
    start_column: int
    end_column: int
    x_start: float
    x_end: float


@dataclass(slots=True)
class Viewport:
    """Rectangle the editor draws into, plus its vertical scroll state.

    ``scroll_offset`` is kept within ``[0, max_scroll]`` where
    ``max_scroll`` follows the height of the last layout.
    """

    width: float
    height: float
    origin_x: float = 0.0
    origin_y: float = 0.0
    text_padding: float = 20.0
    gutter_padding: float = 20.0
    gutter_sample: str = "000"
    scroll_offset: float = 0.0
    max_scroll: float = 0.0

    def gutter_width(self, metrics: WidthMetrics) -> float:
        return metrics.measure(self.gutter_sample) + self.gutter_padding

    def available_width(self, metrics: WidthMetrics) -> float:
        return self.width - self.gutter_width(metrics) - self.text_padding

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height
        self._clamp_scroll()

    def update_extent(self, lines: Sequence[WrappedLine], line_height: float) -> None:
        self.max_scroll = max(0.0, content_height(lines, line_height) - self.height)
        self._clamp_scroll()

    def scroll_by(self, delta: float) -> float:
        self.scroll_offset += delta
        self._clamp_scroll()
        return self.scroll_offset

    def scroll_to_row(self, row: int, line_height: float) -> float:
        self.scroll_offset = row * line_height
        self._clamp_scroll()
        return self.scroll_offset

    def ensure_visible(self, y: float, line_height: float) -> float:
        """Scroll so content-space ``y`` keeps a one-line margin on screen."""

        top = self.scroll_offset
        bottom = self.scroll_offset + self.height
        margin = line_height
        if y < top + margin:
            self.scroll_offset = y - margin
        elif y + line_height > bottom - margin:
            self.scroll_offset = y + line_height - self.height + margin
        self._clamp_scroll()
        return self.scroll_offset

    def visible_rows(
        self, lines: Sequence[WrappedLine], line_height: float
    ) -> Tuple[int, int]:
        """Half-open ``(first, stop)`` row range intersecting the viewport."""

        if not lines or line_height <= 0:
            return 0, 0
        first = max(0, int(self.scroll_offset // line_height))
        stop = int((self.scroll_offset + self.height) // line_height) + 1
        return min(first, len(lines)), min(stop, len(lines))

    def _clamp_scroll(self) -> None:
        self.scroll_offset = max(0.0, min(self.scroll_offset, self.max_scroll))


def cursor_target(
    offset: int,
    lines: Sequence[WrappedLine],
    metrics: WidthMetrics,
    viewport: Viewport,
) -> CursorTarget:
    """Content-space position of the caret (scroll is not applied)."""

    text_x = viewport.origin_x + viewport.gutter_width(metrics)
    baseline_shift = metrics.line_height - metrics.baseline
    if not lines:
        return CursorTarget(0, 0, text_x, viewport.origin_y + baseline_shift)
    row = line_index_at(offset, lines)
    line = lines[row]
    column = max(0, min(offset - line.start, len(line.text)))
    x = text_x + metrics.measure(line.text[:column])
    y = viewport.origin_y + row * metrics.line_height + baseline_shift
    return CursorTarget(row, column, x, y)


def selection_ranges(
    selection: Selection,
    lines: Sequence[WrappedLine],
    metrics: WidthMetrics,
    viewport: Viewport,
) -> List[SelectionRange]:
    if selection.empty or not lines:
        return []
    text_x = viewport.origin_x + viewport.gutter_width(metrics)
    ranges: List[SelectionRange] = []
    for row in range(line_index_at(selection.start, lines), len(lines)):
        line = lines[row]
        if line.start >= selection.end:
            break
        if selection.end > line.start and selection.start < line.end:
            start_col = max(selection.start, line.start) - line.start
            end_col = min(selection.end, line.end) - line.start
            ranges.append(
                SelectionRange(
                    row=row,
                    start_column=start_col,
                    end_column=end_col,
                    x_start=text_x + metrics.measure(line.text[:start_col]),
                    x_end=text_x + metrics.measure(line.text[:end_col]),
                )
            )
    return ranges


__all__ = [
    "CursorTarget",
    "SelectionRange",
    "Viewport",
    "cursor_target",
    "selection_ranges",
]
