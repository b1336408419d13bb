"""Layout: soft wrap, offset/row mapping, and viewport geometry."""

from .metrics import CellMetrics, FixedMetrics, WidthMetrics
from .position import (
    column_in_line,
    line_end,
    line_index_at,
    line_start,
    offset_at,
    vertical_target,
    visual_position,
)
from .viewport import (
    CursorTarget,
    SelectionRange,
    Viewport,
    cursor_target,
    selection_ranges,
)
from .wrap import WrapCache, WrappedLine, content_height, wrap_text

__all__ = [
    "CellMetrics",
    "CursorTarget",
    "FixedMetrics",
    "SelectionRange",
    "Viewport",
    "WidthMetrics",
    "WrapCache",
    "WrappedLine",
    "column_in_line",
    "content_height",
    "cursor_target",
    "line_end",
    "line_index_at",
    "line_start",
    "offset_at",
    "selection_ranges",
    "vertical_target",
    "visual_position",
    "wrap_text",
]
