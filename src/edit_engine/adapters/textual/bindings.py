"""Default key bindings mapping Textual key names to editor commands."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping

from edit_engine.editor import Editor

CommandHandler = Callable[[Editor], Any]


@dataclass(frozen=True, slots=True)
class EditorCommand:
    """Named editor operation a key can be bound to."""

    id: str
    handler: CommandHandler
    description: str = ""

    def __call__(self, editor: Editor) -> Any:
        return self.handler(editor)


def _moves(name: str, method: str) -> tuple[EditorCommand, EditorCommand]:
    return (
        EditorCommand(
            id=f"cursor.{name}",
            handler=lambda editor: getattr(editor, method)(),
            description=f"Move cursor {name.replace('_', ' ')}",
        ),
        EditorCommand(
            id=f"select.{name}",
            handler=lambda editor: getattr(editor, method)(extend=True),
            description=f"Extend selection {name.replace('_', ' ')}",
        ),
    )


DEFAULT_COMMANDS: tuple[EditorCommand, ...] = (
    *_moves("left", "move_left"),
    *_moves("right", "move_right"),
    *_moves("up", "move_up"),
    *_moves("down", "move_down"),
    *_moves("home", "move_home"),
    *_moves("end", "move_end"),
    *_moves("top", "jump_to_top"),
    *_moves("bottom", "jump_to_bottom"),
    EditorCommand("cursor.middle", Editor.jump_to_middle_of_line, "Jump mid-line"),
    EditorCommand("select.all", Editor.select_all, "Select everything"),
    EditorCommand("view.scroll_up", lambda e: e.scroll_lines(-1), "Scroll up"),
    EditorCommand("view.scroll_down", lambda e: e.scroll_lines(1), "Scroll down"),
    EditorCommand("edit.newline", Editor.insert_newline, "Insert newline"),
    EditorCommand("edit.delete_backward", Editor.delete_backward, "Backspace"),
    EditorCommand("edit.delete_forward", Editor.delete_forward, "Delete"),
    EditorCommand("edit.indent", Editor.indent, "Indent"),
    EditorCommand("edit.outdent", Editor.outdent, "Outdent"),
    EditorCommand("edit.duplicate", Editor.duplicate, "Duplicate line"),
    EditorCommand("edit.toggle_comment", Editor.toggle_line_comment, "Comment"),
    EditorCommand("edit.copy", Editor.copy, "Copy selection"),
    EditorCommand("edit.cut", Editor.cut, "Cut selection"),
    EditorCommand("edit.paste", Editor.paste, "Paste"),
    EditorCommand("history.undo", Editor.undo, "Undo"),
    EditorCommand("history.redo", Editor.redo, "Redo"),
    EditorCommand("file.save", Editor.save_file, "Save"),
    EditorCommand("file.reload", Editor.reload, "Reload from disk"),
    EditorCommand("project.build", Editor.run_build, "Run build command"),
    EditorCommand("project.format", Editor.format_buffer, "Format buffer"),
)

DEFAULT_BINDINGS: Mapping[str, str] = MappingProxyType(
    {
        "left": "cursor.left",
        "shift+left": "select.left",
        "ctrl+left": "cursor.left",
        "right": "cursor.right",
        "shift+right": "select.right",
        "ctrl+right": "cursor.right",
        "up": "cursor.up",
        "shift+up": "select.up",
        "down": "cursor.down",
        "shift+down": "select.down",
        "home": "cursor.home",
        "shift+home": "select.home",
        "end": "cursor.end",
        "shift+end": "select.end",
        "ctrl+home": "cursor.top",
        "ctrl+end": "cursor.bottom",
        "ctrl+up": "view.scroll_up",
        "ctrl+down": "view.scroll_down",
        "alt+m": "cursor.middle",
        "ctrl+a": "select.all",
        "enter": "edit.newline",
        "backspace": "edit.delete_backward",
        "delete": "edit.delete_forward",
        "tab": "edit.indent",
        "shift+tab": "edit.outdent",
        "ctrl+d": "edit.duplicate",
        "ctrl+slash": "edit.toggle_comment",
        "ctrl+underscore": "edit.toggle_comment",
        "ctrl+c": "edit.copy",
        "ctrl+x": "edit.cut",
        "ctrl+v": "edit.paste",
        "ctrl+z": "history.undo",
        "ctrl+shift+z": "history.redo",
        "ctrl+y": "history.redo",
        "ctrl+s": "file.save",
        "ctrl+o": "file.reload",
        "ctrl+b": "project.build",
    }
)


class CommandTable:
    """Registry of commands plus the key bindings that trigger them."""

    def __init__(
        self,
        commands: Iterable[EditorCommand] = DEFAULT_COMMANDS,
        bindings: Mapping[str, str] = DEFAULT_BINDINGS,
    ) -> None:
        self._commands: Dict[str, EditorCommand] = {}
        self._bindings: Dict[str, str] = {}
        for command in commands:
            self.register(command)
        for key, command_id in bindings.items():
            self.bind(key, command_id)

    def register(self, command: EditorCommand, *, replace: bool = False) -> None:
        if not replace and command.id in self._commands:
            raise ValueError(f"Command '{command.id}' already registered")
        self._commands[command.id] = command

    def bind(self, key: str, command_id: str) -> None:
        if command_id not in self._commands:
            raise KeyError(f"Command '{command_id}' is not registered")
        self._bindings[normalize_key(key)] = command_id

    def unbind(self, key: str) -> None:
        self._bindings.pop(normalize_key(key), None)

    def lookup(self, key: str) -> EditorCommand | None:
        command_id = self._bindings.get(normalize_key(key))
        if command_id is None:
            return None
        return self._commands[command_id]

    def get(self, command_id: str) -> EditorCommand:
        try:
            return self._commands[command_id]
        except KeyError as exc:
            raise KeyError(f"Command '{command_id}' is not registered") from exc

    @property
    def bindings(self) -> Mapping[str, str]:
        return MappingProxyType(self._bindings)


def normalize_key(key: str) -> str:
    """Lower-case ``key`` and order its modifiers as ctrl, alt, shift."""

    parts = [part for part in key.strip().lower().split("+") if part]
    if not parts:
        return ""
    *modifiers, name = parts
    order = {"ctrl": 0, "alt": 1, "meta": 2, "shift": 3}
    modifiers = sorted(dict.fromkeys(modifiers), key=lambda m: order.get(m, 9))
    return "+".join([*modifiers, name])


__all__ = [
    "CommandTable",
    "DEFAULT_BINDINGS",
    "DEFAULT_COMMANDS",
    "EditorCommand",
    "normalize_key",
]
