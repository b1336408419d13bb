"""Editor façade wiring buffer, layout, highlighting, I/O, and tools."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, List, Optional, Tuple

from edit_engine import actions
from edit_engine.buffer import (
    Buffer,
    BufferDelta,
    BufferMirror,
    Clipboard,
    InMemoryClipboard,
    Selection,
    TextDocument,
)
from edit_engine.errors import ConfigError, EditorError, PersistenceError, ToolError
from edit_engine.events import EditorBus
from edit_engine.highlight import (
    HighlightOverlay,
    PygmentsTokenizer,
    StyledSpan,
    StyleTable,
    Token,
    Tokenizer,
    merge_spans,
)
from edit_engine.io import (
    BuildRunner,
    Formatter,
    ProjectConfig,
    file_extension,
    load_text,
    save_text,
)
from edit_engine.layout import (
    CellMetrics,
    CursorTarget,
    SelectionRange,
    Viewport,
    WidthMetrics,
    WrapCache,
    WrappedLine,
    cursor_target,
    selection_ranges,
)
from edit_engine.runtime import telemetry
from edit_engine.settings import EditorSettings


@dataclass(frozen=True, slots=True)
class RenderLine:
    """Everything a renderer needs to draw one visual line."""

    row: int
    line: WrappedLine
    spans: Tuple[StyledSpan, ...]

    @property
    def number(self) -> int:
        return self.line.logical_index + 1

    @property
    def continuation(self) -> bool:
        return self.line.start != self.line.logical_start


class Editor:
    """Single-buffer editor.

    Every editing verb flows through the buffer's transactions; the buffer
    publishes ``buffer.changed`` and the wrap cache and highlight overlay
    mark themselves dirty in response. Renderers only read from the
    accessor methods.
    """

    def __init__(
        self,
        text: str = "",
        *,
        name: str = "default",
        settings: Optional[EditorSettings] = None,
        metrics: Optional[WidthMetrics] = None,
        viewport: Optional[Viewport] = None,
        tokenizer: Optional[Tokenizer] = None,
        styles: Optional[StyleTable] = None,
        clipboard: Optional[Clipboard] = None,
        project: Optional[ProjectConfig] = None,
        bus: Optional[EditorBus] = None,
    ) -> None:
        self.settings = settings or EditorSettings()
        self.buffer = Buffer(
            name=name,
            document=TextDocument.from_text(text),
            max_history=self.settings.max_history,
        )
        self.metrics: WidthMetrics = metrics or CellMetrics()
        self.viewport = viewport or Viewport(
            width=120.0, height=40.0, text_padding=0.0, gutter_padding=1.0
        )
        self.bus = bus or EditorBus()
        self.clipboard: Clipboard = clipboard or InMemoryClipboard()
        self.project = project or ProjectConfig()
        self.formatter = Formatter(self.project.formatter)
        self.overlay = HighlightOverlay(tokenizer or PygmentsTokenizer(), styles)
        self._auto_tokenizer = tokenizer is None
        self._wrap_cache = WrapCache()
        self.path: Optional[Path] = None
        self.last_error: Optional[str] = None

        self.bus.subscribe("buffer.changed", self._wrap_cache.invalidate)
        self.bus.subscribe("buffer.changed", self.overlay.invalidate)
        self.buffer.add_listener(self._on_buffer_change)

    # ------------------------------------------------------------------
    # State accessors
    # ------------------------------------------------------------------

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def cursor(self) -> int:
        return self.buffer.cursor

    @property
    def selection(self) -> Selection:
        return self.buffer.selection

    @property
    def has_selection(self) -> bool:
        return not self.buffer.selection.empty

    @property
    def modified(self) -> bool:
        return self.buffer.document.modified

    @property
    def extension(self) -> str:
        return file_extension(self.path) if self.path else ""

    def set_cursor(self, offset: int) -> Selection:
        return self.buffer.set_cursor(offset)

    def set_selection(self, anchor: int, active: int) -> Selection:
        return self.buffer.set_selection(Selection(anchor=anchor, active=active))

    def mirror(self) -> BufferMirror:
        return BufferMirror(
            text=self.text,
            cursor=self.cursor,
            selection=self.selection,
            version=self.buffer.version,
            modified=self.modified,
            path=str(self.path) if self.path else None,
        )

    # ------------------------------------------------------------------
    # Layout and rendering data
    # ------------------------------------------------------------------

    def lines(self) -> Tuple[WrappedLine, ...]:
        lines = self._wrap_cache.get(
            self.text,
            self.buffer.version,
            self.viewport.available_width(self.metrics),
            self.metrics.width_of,
            metrics_key=id(self.metrics),
        )
        self.viewport.update_extent(lines, self.metrics.line_height)
        return lines

    def cursor_target(self) -> CursorTarget:
        return cursor_target(self.cursor, self.lines(), self.metrics, self.viewport)

    def selection_ranges(self) -> List[SelectionRange]:
        return selection_ranges(
            self.selection, self.lines(), self.metrics, self.viewport
        )

    def tokens(self) -> Tuple[Token, ...]:
        return self.overlay.tokens(self.text, self.buffer.version)

    def highlighted_lines(self) -> List[List[StyledSpan]]:
        return self.overlay.spans_for_lines(
            self.text, self.buffer.version, self.lines()
        )

    def visible_lines(self) -> List[RenderLine]:
        lines = self.lines()
        first, stop = self.viewport.visible_rows(lines, self.metrics.line_height)
        spans = merge_spans(self.tokens(), lines[first:stop])
        return [
            RenderLine(row=row, line=lines[row], spans=tuple(line_spans))
            for row, line_spans in zip(range(first, stop), spans)
        ]

    def set_metrics(self, metrics: WidthMetrics) -> None:
        self.metrics = metrics
        self._wrap_cache.invalidate()
        self.follow_cursor()

    def resize(self, width: float, height: float) -> None:
        self.viewport.resize(width, height)
        self._wrap_cache.invalidate()
        self.follow_cursor()

    def scroll_lines(self, count: int) -> float:
        self.lines()
        return self.viewport.scroll_by(count * self.metrics.line_height)

    def follow_cursor(self) -> float:
        target = self.cursor_target()
        row_top = target.row * self.metrics.line_height
        return self.viewport.ensure_visible(row_top, self.metrics.line_height)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def move_left(self, *, extend: bool = False) -> bool:
        return self._run(actions.move_left, extend=extend)

    def move_right(self, *, extend: bool = False) -> bool:
        return self._run(actions.move_right, extend=extend)

    def move_up(self, *, extend: bool = False) -> bool:
        return self._run(actions.move_up, extend=extend)

    def move_down(self, *, extend: bool = False) -> bool:
        return self._run(actions.move_down, extend=extend)

    def move_home(self, *, extend: bool = False) -> bool:
        return self._run(actions.move_home, extend=extend)

    def move_end(self, *, extend: bool = False) -> bool:
        return self._run(actions.move_end, extend=extend)

    def jump_to_top(self, *, extend: bool = False) -> bool:
        return self._run(actions.jump_to_top, extend=extend)

    def jump_to_bottom(self, *, extend: bool = False) -> bool:
        return self._run(actions.jump_to_bottom, extend=extend)

    def jump_to_middle_of_line(self) -> bool:
        return self._run(actions.jump_to_middle_of_line)

    def select_all(self) -> bool:
        return self._run(actions.select_all)

    def goto(self, offset: int) -> bool:
        return actions.goto(self, offset)

    # ------------------------------------------------------------------
    # Editing
    # ------------------------------------------------------------------

    def insert_text(self, text: str) -> bool:
        return self._run(actions.insert_text, text)

    def insert_newline(self) -> bool:
        return self._run(actions.insert_newline)

    def delete_backward(self) -> bool:
        return self._run(actions.delete_backward)

    def delete_forward(self) -> bool:
        return self._run(actions.delete_forward)

    def indent(self) -> bool:
        return self._run(actions.indent)

    def outdent(self) -> bool:
        return self._run(actions.outdent)

    def toggle_line_comment(self) -> bool:
        return self._run(actions.toggle_line_comment)

    def duplicate(self) -> bool:
        return self._run(actions.duplicate)

    def copy(self) -> bool:
        return actions.copy_selection(self)

    def cut(self) -> bool:
        return self._run(actions.cut_selection)

    def paste(self) -> bool:
        return self._run(actions.paste)

    def undo(self) -> bool:
        if not self.buffer.undo():
            return False
        self.bus.emit("history.undo", self.selection)
        self.follow_cursor()
        return True

    def redo(self) -> bool:
        if not self.buffer.redo():
            return False
        self.bus.emit("history.redo", self.selection)
        self.follow_cursor()
        return True

    # ------------------------------------------------------------------
    # Files, project, and external tools
    # ------------------------------------------------------------------

    def load_file(self, path: str | Path) -> bool:
        """Replace the buffer with the file's content.

        On failure the buffer, cursor, and history are left untouched.
        """

        target = Path(path)
        try:
            text = load_text(target)
        except PersistenceError as exc:
            self._report("file.error", exc, path=str(target))
            return False
        self.buffer.reset(text)
        self.path = target
        if self._auto_tokenizer:
            self.overlay.set_tokenizer(PygmentsTokenizer.for_filename(target, text))
        self.viewport.scroll_offset = 0.0
        telemetry.record_event(
            "file.loaded", data={"path": str(target), "length": len(text)}
        )
        self.bus.emit("file.loaded", target)
        return True

    def reload(self) -> bool:
        if self.path is None:
            return False
        return self.load_file(self.path)

    def save_file(self, path: str | Path | None = None) -> bool:
        """Write the buffer, formatting first when the project asks for it.

        A failed save keeps the unsaved-changes flag set.
        """

        target = Path(path) if path is not None else self.path
        if target is None:
            self._report("file.error", PersistenceError("No file name to save to"))
            return False
        if self.project.format_on_save:
            self.format_buffer(extension=file_extension(target))
        try:
            save_text(target, self.text)
        except PersistenceError as exc:
            self._report("file.error", exc, path=str(target))
            return False
        self.path = target
        self.buffer.mark_saved()
        telemetry.record_event("file.saved", data={"path": str(target)})
        self.bus.emit("file.saved", target)
        return True

    def load_project(self, path: str | Path) -> bool:
        """Adopt a project file; on errors defaults stay in effect."""

        try:
            project = ProjectConfig.read(path)
        except ConfigError as exc:
            self._report("config.error", exc, path=str(path))
            self.project = ProjectConfig(path=Path(path))
            self.formatter = Formatter(self.project.formatter)
            return False
        self.project = project
        self.formatter = Formatter(project.formatter)
        self.bus.emit("config.loaded", project)
        return True

    def format_buffer(self, *, extension: Optional[str] = None) -> bool:
        """Run the formatter and apply its output as one undoable edit."""

        ext = self.extension if extension is None else extension
        if not self.formatter.supports(ext):
            telemetry.record_event("format.skipped", data={"extension": ext})
            self.bus.emit("format.skipped", ext)
            return False
        try:
            formatted = self.formatter.format(self.text, cwd=self.project.root)
        except ToolError as exc:
            self._report("format.error", exc, stderr=exc.stderr)
            return False
        changed = actions.replace_all(self, formatted, label="format")
        self.follow_cursor()
        self.bus.emit("format.applied", changed)
        return True

    def run_build(self) -> Optional[int]:
        """Start the build command in the background; returns its PID."""

        try:
            process = BuildRunner(self.project).start()
        except (ConfigError, ToolError) as exc:
            self._report("build.error", exc)
            return None
        self.bus.emit("build.started", process.pid)
        return process.pid

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(self, action: Callable[..., bool], *args, **kwargs) -> bool:
        changed = action(self, *args, **kwargs)
        if changed:
            self.follow_cursor()
        return changed

    def _on_buffer_change(self, delta: BufferDelta) -> None:
        self.bus.emit("buffer.changed", delta)

    def _report(self, event: str, exc: EditorError, **data: object) -> None:
        self.last_error = str(exc)
        telemetry.record_event(
            event, level="error", data={"error": str(exc), **data}
        )
        self.bus.emit(event, exc)


__all__ = ["Editor", "RenderLine"]
