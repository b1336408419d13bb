"""Cursor and selection movement; none of these touch the text."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from edit_engine.buffer import Selection
from edit_engine.layout.position import (
    line_end,
    line_index_at,
    line_start,
    vertical_target,
)

if TYPE_CHECKING:
    from edit_engine.editor import Editor


def _apply(editor: "Editor", target: int, *, extend: bool) -> bool:
    buffer = editor.buffer
    before = buffer.selection
    target = buffer.clamp(target)
    if extend:
        selection = before.extend_to(target)
    else:
        selection = Selection.caret(target)
    after = buffer.set_selection(selection)
    if after != before:
        editor.bus.emit("cursor.moved", after)
    return after != before


def move_left(editor: "Editor", *, extend: bool = False) -> bool:
    return _apply(editor, editor.cursor - 1, extend=extend)


def move_right(editor: "Editor", *, extend: bool = False) -> bool:
    return _apply(editor, editor.cursor + 1, extend=extend)


def _move_vertical(editor: "Editor", delta: int, *, extend: bool) -> bool:
    target: Optional[int] = vertical_target(editor.cursor, delta, editor.lines())
    if target is None:
        return False
    return _apply(editor, target, extend=extend)


def move_up(editor: "Editor", *, extend: bool = False) -> bool:
    return _move_vertical(editor, -1, extend=extend)


def move_down(editor: "Editor", *, extend: bool = False) -> bool:
    return _move_vertical(editor, 1, extend=extend)


def move_home(editor: "Editor", *, extend: bool = False) -> bool:
    lines = editor.lines()
    index = line_index_at(editor.cursor, lines)
    return _apply(editor, line_start(index, lines), extend=extend)


def move_end(editor: "Editor", *, extend: bool = False) -> bool:
    lines = editor.lines()
    index = line_index_at(editor.cursor, lines)
    return _apply(editor, line_end(index, lines), extend=extend)


def jump_to_middle_of_line(editor: "Editor") -> bool:
    """Place the caret halfway along the current visual line."""

    lines = editor.lines()
    line = lines[line_index_at(editor.cursor, lines)]
    return _apply(editor, line.start + len(line.text) // 2, extend=False)


def jump_to_top(editor: "Editor", *, extend: bool = False) -> bool:
    return _apply(editor, 0, extend=extend)


def jump_to_bottom(editor: "Editor", *, extend: bool = False) -> bool:
    return _apply(editor, len(editor.buffer), extend=extend)


def select_all(editor: "Editor") -> bool:
    buffer = editor.buffer
    before = buffer.selection
    after = buffer.set_selection(Selection(anchor=0, active=len(buffer)))
    if after != before:
        editor.bus.emit("cursor.moved", after)
    return after != before


def goto(editor: "Editor", offset: int) -> bool:
    """Jump to ``offset`` and scroll its line to the top of the viewport."""

    moved = _apply(editor, offset, extend=False)
    lines = editor.lines()
    editor.viewport.scroll_to_row(
        line_index_at(editor.cursor, lines), editor.metrics.line_height
    )
    return moved


__all__ = [
    "goto",
    "jump_to_bottom",
    "jump_to_middle_of_line",
    "jump_to_top",
    "move_down",
    "move_end",
    "move_home",
    "move_left",
    "move_right",
    "move_up",
    "select_all",
]
