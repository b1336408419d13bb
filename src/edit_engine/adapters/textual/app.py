"""Executable Textual app that hosts the editing engine."""

from __future__ import annotations

import argparse
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

try:  # pragma: no cover - imported only when demo is run
    from rich.style import Style as RichStyle
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.containers import Vertical
    from textual.widgets import Footer, Header, Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use edit_engine.adapters.textual.app"
    ) from exc

from edit_engine.buffer import BufferMirror
from edit_engine.editor import Editor
from edit_engine.highlight import StyleTable
from edit_engine.io import DEFAULT_CONFIG_NAME

from .controller import TextualEditorAdapter, TextualUIHooks

_GUTTER_GAP = 1


@dataclass
class UIState:
    status_text: str = ""
    title: str = ""


def render_view(editor: Editor, styles: StyleTable) -> Text:
    """Draw the visible rows with line numbers, syntax colors, selection
    and caret."""

    output = Text(no_wrap=True, overflow="crop")
    rows = editor.visible_lines()
    if not rows:
        return output
    digits = max(len(editor.viewport.gutter_sample), len(str(rows[-1].number)))
    selected: Dict[int, tuple[int, int]] = {
        item.row: (item.start_column, item.end_column)
        for item in editor.selection_ranges()
    }
    caret = editor.cursor_target()
    for render in rows:
        label = "" if render.continuation else str(render.number)
        output.append(label.rjust(digits) + " " * _GUTTER_GAP, style="dim")
        line_text = Text(no_wrap=True)
        for span in render.spans:
            style = styles.style_for(span.category)
            rich_style = RichStyle(
                color=style.color, bold=style.bold, italic=style.italic
            )
            line_text.append(span.text, style=rich_style)
        if render.row in selected:
            start, end = selected[render.row]
            line_text.stylize("on #264f78", start, max(end, start))
        if render.row == caret.row:
            if caret.column >= len(line_text):
                line_text.append(" ")
            line_text.stylize("reverse", caret.column, caret.column + 1)
        output.append_text(line_text)
        output.append("\n")
    output.rstrip()
    return output


class EditEngineApp(App[None]):
    """Minimal Textual UI embedding the editing engine."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#buffer-view {
		height: 1fr;
		border: round $accent;
		padding: 0 1;
		content-align: left top;
	}

	#status-line {
		height: 1;
		background: $surface-darken-1;
		padding: 0 1;
	}
	"""

    BINDINGS = [
        ("ctrl+q", "quit", "Quit"),
    ]

    def __init__(
        self,
        *,
        path: Optional[str] = None,
        project: Optional[str] = None,
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._path = path
        self._project = project
        self.editor: Editor | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._buffer_widget: Static | None = None
        self._status_widget: Static | None = None

    def compose(self) -> ComposeResult:
        yield Header(show_clock=True)
        with Vertical(id="buffer-area"):
            self._buffer_widget = Static("", id="buffer-view")
            yield self._buffer_widget
        self._status_widget = Static("", id="status-line")
        yield self._status_widget
        yield Footer()

    async def on_mount(self) -> None:
        self.editor = Editor()
        if self._project:
            self.editor.load_project(self._project)
        elif os.path.exists(DEFAULT_CONFIG_NAME):
            self.editor.load_project(DEFAULT_CONFIG_NAME)
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_status,
            handle_event=self._handle_event,
        )
        self.adapter = TextualEditorAdapter(self.editor, hooks)
        if self._path:
            self.editor.load_file(self._path)
        self._sync_size()

    async def on_resize(self, _event: events.Resize) -> None:
        self._sync_size()

    async def on_key(self, event: events.Key) -> None:
        if not self.adapter or event.key == "ctrl+q":
            return
        outcome = self.adapter.handle_textual_key(
            event.key, character=event.character
        )
        if outcome.consumed:
            event.stop()
            event.prevent_default()

    async def on_paste(self, event: events.Paste) -> None:
        if self.adapter:
            self.adapter.handle_paste(event.text)
            event.stop()

    def _sync_size(self) -> None:
        if not (self.adapter and self._buffer_widget):
            return
        region = self._buffer_widget.content_region
        if region.width and region.height:
            self.adapter.resize(float(region.width), float(region.height))

    def _update_view(self, mirror: BufferMirror) -> None:
        if not (self.editor and self._buffer_widget):
            return
        self._buffer_widget.update(render_view(self.editor, self.editor.overlay.styles))
        marker = "*" if mirror.modified else ""
        self.title = f"{mirror.path or '[scratch]'}{marker}"

    def _update_status(self, status: str) -> None:
        self._state.status_text = status
        if self._status_widget:
            self._status_widget.update(status)

    def _handle_event(self, name: str, payload: Any | None) -> None:
        if name.startswith("format") and name != "format.error":
            self._update_status(name)


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the edit engine Textual demo.")
    parser.add_argument("path", nargs="?", help="File to open")
    parser.add_argument(
        "--project",
        default=os.environ.get("EDIT_ENGINE_PROJECT"),
        help=f"Project config file (default: ./{DEFAULT_CONFIG_NAME} when present)",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    app = EditEngineApp(path=args.path, project=args.project)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual demo
    main()
