"""Single-buffer plain-text editing engine with soft wrap and undo."""

from .buffer import Buffer, History, Selection
from .editor import Editor, RenderLine
from .errors import ConfigError, EditorError, PersistenceError, ToolError
from .events import EditorBus
from .layout import CellMetrics, FixedMetrics, Viewport, WrappedLine, wrap_text
from .settings import EditorSettings

__all__ = [
    "Buffer",
    "CellMetrics",
    "ConfigError",
    "Editor",
    "EditorBus",
    "EditorError",
    "EditorSettings",
    "FixedMetrics",
    "History",
    "PersistenceError",
    "RenderLine",
    "Selection",
    "ToolError",
    "Viewport",
    "WrappedLine",
    "wrap_text",
]

__version__ = "0.1.0"
