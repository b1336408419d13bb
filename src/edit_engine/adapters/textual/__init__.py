"""Textual host integration for the editing engine."""

from .bindings import CommandTable, EditorCommand
from .controller import KeyOutcome, TextualEditorAdapter, TextualUIHooks

__all__ = [
    "CommandTable",
    "EditorCommand",
    "KeyOutcome",
    "TextualEditorAdapter",
    "TextualUIHooks",
]
