from __future__ import annotations

from edit_engine import Editor, FixedMetrics, Viewport
from edit_engine.layout import (
    line_end,
    line_start,
    offset_at,
    visual_position,
    wrap_text,
)


def make_editor(text: str = "", width: int = 80, height: int = 24) -> Editor:
    viewport = Viewport(
        width=float(width),
        height=float(height),
        text_padding=0.0,
        gutter_padding=0.0,
        gutter_sample="",
    )
    return Editor(text, metrics=FixedMetrics(), viewport=viewport)


def test_move_down_keeps_column() -> None:
    editor = make_editor("ab\ncd")
    editor.set_cursor(1)

    assert editor.move_down() is True
    assert editor.cursor == 4


def test_vertical_moves_at_edges_are_noops() -> None:
    editor = make_editor("ab\ncd")

    assert editor.move_up() is False
    assert editor.cursor == 0

    editor.set_cursor(4)
    assert editor.move_down() is False
    assert editor.cursor == 4


def test_move_down_clamps_to_shorter_line() -> None:
    editor = make_editor("abcd\nx")
    editor.set_cursor(3)

    editor.move_down()

    assert editor.cursor == 6


def test_vertical_moves_follow_visual_lines() -> None:
    editor = make_editor("abcdefgh", width=4)
    editor.set_cursor(1)

    editor.move_down()

    assert editor.cursor == 5


def test_home_and_end_use_the_visual_line() -> None:
    editor = make_editor("abcdef", width=4)
    editor.set_cursor(5)

    editor.move_home()
    assert editor.cursor == 4

    editor.move_end()
    assert editor.cursor == 6


def test_jump_to_middle_of_line() -> None:
    editor = make_editor("abcdef\nxy")

    editor.jump_to_middle_of_line()

    assert editor.cursor == 3


def test_horizontal_moves_clamp_and_extend() -> None:
    editor = make_editor("abc")

    assert editor.move_left() is False

    editor.move_right(extend=True)
    editor.move_right(extend=True)
    assert (editor.selection.anchor, editor.selection.active) == (0, 2)
    assert editor.has_selection

    editor.move_right()
    assert editor.cursor == 3
    assert not editor.has_selection
    assert editor.move_right() is False


def test_top_bottom_and_select_all() -> None:
    editor = make_editor("one\ntwo")
    editor.set_cursor(2)

    editor.jump_to_bottom()
    assert editor.cursor == 7

    editor.jump_to_top(extend=True)
    assert (editor.selection.start, editor.selection.end) == (0, 7)

    editor.set_cursor(1)
    editor.select_all()
    assert editor.selection.anchor == 0
    assert editor.selection.active == 7


def test_cursor_moves_publish_events() -> None:
    editor = make_editor("abc")
    moves = []
    editor.bus.subscribe("cursor.moved", moves.append)

    editor.move_right()
    editor.move_left()
    editor.move_left()

    assert len(moves) == 2


def test_goto_scrolls_line_to_top() -> None:
    text = "\n".join(str(n) for n in range(10))
    editor = make_editor(text, height=2)

    editor.goto(text.index("5"))

    assert editor.cursor == 10
    assert editor.viewport.scroll_offset == 5.0


def test_visual_position_and_offset_are_inverse() -> None:
    lines = wrap_text("abcdef\nxy", 4, lambda _c: 1.0)

    assert visual_position(5, lines) == (1, 1)
    assert offset_at(1, 1, lines) == 5
    assert visual_position(8, lines) == (2, 1)
    assert offset_at(2, 99, lines) == 9


def test_first_matching_line_wins_at_wrap_boundary() -> None:
    lines = wrap_text("abcdef", 4, lambda _c: 1.0)

    # Offset 4 ends the first line and starts the second.
    assert visual_position(4, lines) == (0, 4)


def test_line_bounds_clamp_the_row_index() -> None:
    lines = wrap_text("abcdef\nxy", 4, lambda _c: 1.0)

    assert (line_start(1, lines), line_end(1, lines)) == (4, 6)
    assert line_end(99, lines) == 9
    assert line_start(-3, lines) == 0
    assert line_end(0, []) == 0
