"""Text-changing verbs.

Each verb runs inside one buffer transaction: the text and the selection
change together, history gets a single pre-edit snapshot, and nothing is
recorded when the text ends up unchanged. Verbs return ``True`` when the
text changed.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, List, Sequence, Tuple

from edit_engine.buffer import Selection, hard_line_bounds

if TYPE_CHECKING:
    from edit_engine.editor import Editor

# (position, removed length, inserted text), positions in pre-edit coordinates.
Edit = Tuple[int, int, str]


def _changed_since(editor: "Editor", version: int) -> bool:
    return editor.buffer.version != version


def insert_text(editor: "Editor", text: str, *, label: str = "insert_text") -> bool:
    """Replace the selection (if any) with ``text`` as one undo step."""

    buffer = editor.buffer
    selection = buffer.selection
    if not text and selection.empty:
        return False
    version = buffer.version
    buffer.replace_range(selection.start, selection.end, text, label=label)
    return _changed_since(editor, version)


def insert_newline(editor: "Editor") -> bool:
    return insert_text(editor, "\n", label="insert_newline")


def delete_backward(editor: "Editor") -> bool:
    buffer = editor.buffer
    selection = buffer.selection
    if not selection.empty:
        return delete_selection(editor, label="delete_backward")
    if selection.active <= 0:
        return False
    cursor = selection.active
    buffer.replace_range(cursor - 1, cursor, "", label="delete_backward")
    return True


def delete_forward(editor: "Editor") -> bool:
    buffer = editor.buffer
    selection = buffer.selection
    if not selection.empty:
        return delete_selection(editor, label="delete_forward")
    if selection.active >= len(buffer):
        return False
    cursor = selection.active
    buffer.replace_range(cursor, cursor + 1, "", label="delete_forward")
    return True


def delete_selection(editor: "Editor", *, label: str = "delete_selection") -> bool:
    selection = editor.buffer.selection
    if selection.empty:
        return False
    editor.buffer.replace_range(selection.start, selection.end, "", label=label)
    return True


def covered_line_starts(text: str, start: int, end: int) -> List[int]:
    """Start offsets of every hard line touched by ``[start, end]``."""

    first, _ = hard_line_bounds(text, start)
    starts = [first]
    newline = text.find("\n", first)
    while 0 <= newline < end:
        starts.append(newline + 1)
        newline = text.find("\n", newline + 1)
    return starts


def map_offset(offset: int, edits: Sequence[Edit], *, sticky: bool) -> int:
    """Follow ``offset`` through non-overlapping ``edits``.

    An offset sitting exactly at an insertion point only moves when
    ``sticky`` is set; an offset inside a removed range snaps to its start.
    """

    shift = 0
    for at, removed, inserted in edits:
        if removed:
            if offset >= at + removed:
                shift -= removed
            elif offset > at:
                shift -= offset - at
        if inserted and (offset > at or (offset == at and sticky)):
            shift += len(inserted)
    return offset + shift


def _apply_line_edits(editor: "Editor", edits: Sequence[Edit], *, label: str) -> bool:
    buffer = editor.buffer
    selection = buffer.selection
    if not edits:
        return False
    version = buffer.version
    with buffer.transaction(label) as tx:
        # Right to left so earlier positions stay valid while editing.
        for at, removed, inserted in sorted(edits, reverse=True):
            tx.replace(at, at + removed, inserted)
        start = map_offset(selection.start, edits, sticky=False)
        end = map_offset(selection.end, edits, sticky=True)
        tx.select(selection.with_bounds(start, end))
    return _changed_since(editor, version)


def indent(editor: "Editor") -> bool:
    """Insert one indent at the caret, or at every selected line start."""

    buffer = editor.buffer
    selection = buffer.selection
    pad = editor.settings.indent
    if selection.empty:
        return insert_text(editor, pad, label="indent")
    starts = covered_line_starts(buffer.text, selection.start, selection.end)
    return _apply_line_edits(editor, [(s, 0, pad) for s in starts], label="indent")


def _leading_spaces(text: str, at: int, limit: int) -> int:
    count = 0
    while count < limit and at + count < len(text) and text[at + count] == " ":
        count += 1
    return count


def outdent(editor: "Editor") -> bool:
    """Remove up to one indent of spaces; never deletes anything else."""

    buffer = editor.buffer
    text = buffer.text
    selection = buffer.selection
    width = editor.settings.indent_width
    if not text:
        return False
    if selection.empty:
        cursor = selection.active
        line_start, _ = hard_line_bounds(text, cursor)
        count = _leading_spaces(text, line_start, min(width, cursor - line_start))
        if not count:
            return False
        buffer.replace_range(
            line_start, line_start + count, "", label="outdent", cursor=cursor - count
        )
        return True
    edits: List[Edit] = []
    for start in covered_line_starts(text, selection.start, selection.end):
        count = _leading_spaces(text, start, width)
        if count:
            edits.append((start, count, ""))
    return _apply_line_edits(editor, edits, label="outdent")


def toggle_line_comment(editor: "Editor") -> bool:
    """Toggle a line comment on the caret's line, or a block comment
    around the selection.

    The block case only unwraps when the selection starts with the opening
    marker and ends with the closing one; anything else gets wrapped.
    """

    buffer = editor.buffer
    text = buffer.text
    selection = buffer.selection
    if not text:
        return False
    version = buffer.version

    if selection.empty:
        prefix = editor.settings.line_comment
        cursor = selection.active
        line_start, _ = hard_line_bounds(text, cursor)
        if text.startswith(prefix, line_start):
            target = max(cursor - len(prefix), line_start)
            buffer.replace_range(
                line_start,
                line_start + len(prefix),
                "",
                label="toggle_comment",
                cursor=target,
            )
        else:
            buffer.replace_range(
                line_start,
                line_start,
                prefix,
                label="toggle_comment",
                cursor=cursor + len(prefix),
            )
        return _changed_since(editor, version)

    opening, closing = editor.settings.block_comment
    start, end = selection.start, selection.end
    selected = text[start:end]
    wrapped = (
        len(selected) >= len(opening) + len(closing)
        and selected.startswith(opening)
        and selected.endswith(closing)
    )
    with buffer.transaction("toggle_comment") as tx:
        if wrapped:
            tx.replace(end - len(closing), end, "")
            tx.replace(start, start + len(opening), "")
            new_end = end - len(opening) - len(closing)
        else:
            tx.insert(end, closing)
            tx.insert(start, opening)
            new_end = end + len(opening) + len(closing)
        tx.select(selection.with_bounds(start, new_end))
    return _changed_since(editor, version)


def duplicate(editor: "Editor") -> bool:
    """Duplicate the caret's hard line, or every line the selection covers.

    With a selection the inserted copy becomes the new selection.
    """

    buffer = editor.buffer
    text = buffer.text
    selection = buffer.selection
    if not text:
        return False

    span_start, _ = hard_line_bounds(text, selection.start)
    _, span_end = hard_line_bounds(text, selection.end)
    if span_end < len(text):
        chunk = text[span_start : span_end + 1]
        insert_at = span_end + 1
        copy_start = insert_at
    else:
        # Last line has no newline to copy, so the copy brings its own.
        chunk = "\n" + text[span_start:span_end]
        insert_at = span_end
        copy_start = insert_at + 1

    with buffer.transaction("duplicate") as tx:
        tx.insert(insert_at, chunk)
        if selection.empty:
            tx.select(Selection.caret(selection.active + len(chunk)))
        else:
            copy_end = copy_start + (span_end - span_start)
            if span_end < len(text):
                copy_end += 1
            tx.select(selection.with_bounds(copy_start, copy_end))
    return True


def copy_selection(editor: "Editor") -> bool:
    selection = editor.buffer.selection
    if selection.empty:
        return False
    editor.clipboard.set_text(editor.buffer.selected_text())
    return True


def cut_selection(editor: "Editor") -> bool:
    if not copy_selection(editor):
        return False
    return delete_selection(editor, label="cut")


def paste(editor: "Editor") -> bool:
    value = editor.clipboard.get_text()
    if not value:
        return False
    return insert_text(editor, value, label="paste")


def replace_all(editor: "Editor", text: str, *, label: str) -> bool:
    """Swap the whole buffer for ``text`` as one undoable edit."""

    buffer = editor.buffer
    if text == buffer.text:
        return False
    cursor = buffer.cursor
    with buffer.transaction(label) as tx:
        tx.replace(0, len(buffer), text)
        tx.select(Selection.caret(min(cursor, len(text))))
    return True


__all__ = [
    "copy_selection",
    "covered_line_starts",
    "cut_selection",
    "delete_backward",
    "delete_forward",
    "delete_selection",
    "duplicate",
    "indent",
    "insert_newline",
    "insert_text",
    "map_offset",
    "outdent",
    "paste",
    "replace_all",
    "toggle_line_comment",
]
