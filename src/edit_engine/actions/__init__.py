"""Editing and navigation verbs that operate on an :class:`Editor`."""

from .editing import (
    copy_selection,
    cut_selection,
    delete_backward,
    delete_forward,
    delete_selection,
    duplicate,
    indent,
    insert_newline,
    insert_text,
    outdent,
    paste,
    replace_all,
    toggle_line_comment,
)
from .navigation import (
    goto,
    jump_to_bottom,
    jump_to_middle_of_line,
    jump_to_top,
    move_down,
    move_end,
    move_home,
    move_left,
    move_right,
    move_up,
    select_all,
)

__all__ = [
    "copy_selection",
    "cut_selection",
    "delete_backward",
    "delete_forward",
    "delete_selection",
    "duplicate",
    "goto",
    "indent",
    "insert_newline",
    "insert_text",
    "jump_to_bottom",
    "jump_to_middle_of_line",
    "jump_to_top",
    "move_down",
    "move_end",
    "move_home",
    "move_left",
    "move_right",
    "move_up",
    "outdent",
    "paste",
    "replace_all",
    "select_all",
    "toggle_line_comment",
]
