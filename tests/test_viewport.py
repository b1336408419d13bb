from __future__ import annotations

from edit_engine import Editor, FixedMetrics, Viewport
from edit_engine.layout import CellMetrics


def make_editor(text: str = "", width: int = 80, height: int = 24) -> Editor:
    viewport = Viewport(
        width=float(width),
        height=float(height),
        text_padding=0.0,
        gutter_padding=0.0,
        gutter_sample="",
    )
    return Editor(text, metrics=FixedMetrics(), viewport=viewport)


def test_available_width_subtracts_gutter_and_padding() -> None:
    viewport = Viewport(width=100.0, height=10.0)
    metrics = FixedMetrics(char_width=2.0)

    assert viewport.gutter_width(metrics) == 26.0
    assert viewport.available_width(metrics) == 54.0


def test_cursor_target_reports_row_column_and_coordinates() -> None:
    editor = make_editor("abcdef\nxy", width=4)
    editor.set_cursor(5)

    target = editor.cursor_target()

    assert (target.row, target.column) == (1, 1)
    assert target.x == 1.0
    assert target.y == 1.0


def test_cursor_target_measures_wide_cells() -> None:
    viewport = Viewport(width=20.0, height=5.0, text_padding=0.0, gutter_padding=0.0)
    editor = Editor("中a", metrics=CellMetrics(), viewport=viewport)
    editor.set_cursor(1)

    target = editor.cursor_target()

    assert target.x == viewport.gutter_width(editor.metrics) + 2.0


def test_selection_ranges_cover_each_visual_line() -> None:
    editor = make_editor("abcdef\nxy", width=4)
    editor.set_selection(2, 8)

    ranges = editor.selection_ranges()

    assert [(r.row, r.start_column, r.end_column) for r in ranges] == [
        (0, 2, 4),
        (1, 0, 2),
        (2, 0, 1),
    ]
    assert ranges[0].x_start == 2.0
    assert ranges[0].x_end == 4.0


def test_empty_selection_has_no_ranges() -> None:
    editor = make_editor("abc")

    assert editor.selection_ranges() == []


def test_scroll_is_clamped_to_content() -> None:
    editor = make_editor("\n".join("x" * 3 for _ in range(10)), height=4)

    assert editor.scroll_lines(100) == 6.0
    assert editor.scroll_lines(-100) == 0.0


def test_typing_past_the_bottom_follows_cursor() -> None:
    editor = make_editor("", height=4)

    for _ in range(8):
        editor.insert_newline()

    target = editor.cursor_target()
    top = editor.viewport.scroll_offset
    assert top <= target.y
    assert target.y + 1.0 <= top + editor.viewport.height


def test_visible_lines_follow_scroll_and_carry_numbers() -> None:
    editor = make_editor("abcdef\nxy\nz", width=4, height=2)

    rows = editor.visible_lines()
    assert [row.row for row in rows] == [0, 1, 2]
    assert [row.number for row in rows] == [1, 1, 2]
    assert [row.continuation for row in rows] == [False, True, False]

    editor.scroll_lines(2)
    rows = editor.visible_lines()
    assert [row.line.text for row in rows] == ["xy", "z"]


def test_resize_rewraps() -> None:
    editor = make_editor("abcdef", width=10)
    assert len(editor.lines()) == 1

    editor.resize(3.0, 10.0)

    assert [line.text for line in editor.lines()] == ["abc", "def"]
