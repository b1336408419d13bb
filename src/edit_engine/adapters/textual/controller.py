"""Minimal Textual adapter that wires Editor commands and events into UI callbacks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Optional

from edit_engine.buffer import BufferMirror
from edit_engine.editor import Editor

from .bindings import CommandTable, normalize_key


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks invoked by the adapter to update Textual widgets."""

    update_view: Callable[[BufferMirror], None]
    update_status: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    # Optional realtime log callback a host may use to surface debug lines
    log: Callable[[str], None] = _noop


@dataclass(frozen=True, slots=True)
class KeyOutcome:
    """What happened to one key press."""

    key: str
    command: Optional[str]
    consumed: bool
    result: object | None = None


_EVENTS = (
    "file.loaded",
    "file.saved",
    "file.error",
    "config.loaded",
    "config.error",
    "format.applied",
    "format.skipped",
    "format.error",
    "build.started",
    "build.error",
    "history.undo",
    "history.redo",
)


class TextualEditorAdapter:
    """Bridges an Editor and its bus events to a Textual-friendly surface."""

    def __init__(
        self,
        editor: Editor,
        hooks: TextualUIHooks,
        *,
        commands: Optional[CommandTable] = None,
    ) -> None:
        self.editor = editor
        self.hooks = hooks
        self.commands = commands or CommandTable()
        self._subscribe_events()
        self._refresh_view()

    def handle_textual_key(
        self, key: str, *, character: Optional[str] = None
    ) -> KeyOutcome:
        """Run the command bound to ``key`` or insert a printable character."""

        normalized = normalize_key(key)
        self._log_state("key ->", key=normalized, character=character)
        command = self.commands.lookup(normalized)
        if command is not None:
            result = command(self.editor)
            outcome = KeyOutcome(
                key=normalized, command=command.id, consumed=True, result=result
            )
        elif character and character.isprintable():
            result = self.editor.insert_text(character)
            outcome = KeyOutcome(
                key=normalized, command="edit.insert", consumed=True, result=result
            )
        else:
            outcome = KeyOutcome(key=normalized, command=None, consumed=False)
        if outcome.consumed:
            self._refresh_view()
        self._log_state(
            "result <-", command=outcome.command, consumed=outcome.consumed
        )
        return outcome

    def handle_paste(self, text: str) -> bool:
        """Insert bracketed-paste text as a single edit."""

        changed = self.editor.insert_text(text)
        self._refresh_view()
        return changed

    def resize(self, width: float, height: float) -> None:
        self.editor.resize(width, height)
        self._refresh_view()

    def _subscribe_events(self) -> None:
        bus = self.editor.bus
        for event in _EVENTS:
            bus.subscribe(
                event, lambda payload, name=event: self._handle_event(name, payload)
            )

    def _handle_event(self, name: str, payload: object | None) -> None:
        self._log_state("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)
        if name.endswith(".error"):
            self.hooks.update_status(f"{name}: {payload}")
        elif name == "file.saved":
            self.hooks.update_status(f"saved {payload}")
        elif name == "file.loaded":
            self.hooks.update_status(f"opened {payload}")
        elif name == "build.started":
            self.hooks.update_status(f"build started (pid {payload})")

    def _refresh_view(self) -> None:
        self.hooks.update_view(self.editor.mirror())

    def _log_state(self, prefix: str, **fields: object) -> None:
        snapshot = self._state_metadata()
        snapshot.update({k: v for k, v in fields.items() if v is not None})
        parts = [prefix]
        for key, value in snapshot.items():
            parts.append(f"{key}={value!r}")
        self.hooks.log(" ".join(parts))

    def _state_metadata(self) -> Dict[str, object]:
        buffer = self.editor.buffer
        return {
            "cursor": buffer.cursor,
            "selection": (buffer.selection.anchor, buffer.selection.active),
            "buffer": buffer.name,
            "buffer_version": buffer.version,
            "modified": self.editor.modified,
        }


__all__ = ["KeyOutcome", "TextualEditorAdapter", "TextualUIHooks"]
