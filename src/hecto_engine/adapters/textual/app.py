"""Executable Textual app that hosts the editing engine."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Any, Optional, Sequence, Tuple

import grapheme

try:  # pragma: no cover - imported only when the app is run
    from rich.text import Text
    from textual import events
    from textual.app import App, ComposeResult
    from textual.binding import Binding
    from textual.widgets import Static
except ModuleNotFoundError as exc:  # pragma: no cover - friendly error for missing dep
    raise RuntimeError(
        "Install the 'textual' package to use hecto_engine.adapters.textual.app"
    ) from exc

from hecto_engine.buffer import DocumentMirror
from hecto_engine.config import EditorConfig
from hecto_engine.editor import Editor
from hecto_engine.modes.base_mode import (
    BACKSPACE,
    DELETE,
    DOWN,
    ENTER,
    ESC,
    LEFT,
    RIGHT,
    TAB,
    UP,
)
from hecto_engine.runtime import telemetry

from .controller import TextualEditorAdapter, TextualUIHooks

NAMED_KEYS = {
    "escape": ESC,
    "enter": ENTER,
    "return": ENTER,
    "backspace": BACKSPACE,
    "delete": DELETE,
    "tab": TAB,
    "left": LEFT,
    "right": RIGHT,
    "up": UP,
    "down": DOWN,
}
MODIFIER_NAMES = {"ctrl", "alt", "meta", "shift"}

# Rows taken by the status bar and the message line.
CHROME_HEIGHT = 2


def render_rows(mirror: DocumentMirror) -> Text:
    """Join the visible rows and highlight the cell under the cursor."""

    text = Text()
    cursor = mirror.screen_cursor
    rows = list(mirror.rows) or [""]
    for index, row in enumerate(rows):
        if index:
            text.append("\n")
        if index != cursor.y:
            text.append(row)
            continue
        before = grapheme.slice(row, 0, cursor.x)
        under = grapheme.slice(row, cursor.x, cursor.x + 1) or " "
        after = grapheme.slice(row, cursor.x + 1)
        text.append(before)
        text.append(under, style="reverse")
        text.append(after)
    return text


@dataclass
class UIState:
    status_bar: str = ""
    message: str = ""
    command_text: str = ""


class HectoApp(App[None]):
    """Minimal Textual UI embedding the editor."""

    CSS = """
	Screen {
		layout: vertical;
	}

	#document-view {
		height: 1fr;
		content-align: left top;
	}

	#status-bar {
		height: 1;
		background: $surface-darken-1;
	}

	#message-line {
		height: 1;
		background: $surface-darken-2;
	}
	"""

    BINDINGS = [
        ("ctrl+c", "quit", "Quit"),
        Binding("ctrl+q", "editor_quit", "Quit", show=False, priority=True),
    ]

    def __init__(
        self, *, path: Optional[str] = None, config: Optional[EditorConfig] = None
    ) -> None:
        super().__init__()
        self._state = UIState()
        self._path = path
        self._config = config or EditorConfig.from_env()
        self.editor: Editor | None = None
        self.adapter: TextualEditorAdapter | None = None
        self._view_widget: Static | None = None
        self._status_widget: Static | None = None
        self._message_widget: Static | None = None

    def compose(self) -> ComposeResult:
        self._view_widget = Static("", id="document-view")
        self._status_widget = Static("", id="status-bar")
        self._message_widget = Static("", id="message-line")
        yield self._view_widget
        yield self._status_widget
        yield self._message_widget

    def on_mount(self) -> None:
        self.editor = Editor(config=self._config)
        self.editor.open(self._path)
        self.editor.resize(self.size.width, max(1, self.size.height - CHROME_HEIGHT))
        hooks = TextualUIHooks(
            update_view=self._update_view,
            update_status=self._update_message,
            show_command=self._show_command,
            request_exit=self.exit,
            log=self._log_line,
        )
        self.adapter = TextualEditorAdapter(self.editor, hooks)
        self.set_interval(0.05, self._process_timeouts)

    def on_resize(self, event: events.Resize) -> None:
        if self.adapter:
            self.adapter.resize(
                event.size.width, max(1, event.size.height - CHROME_HEIGHT)
            )

    def _process_timeouts(self) -> None:
        if self.adapter:
            self.adapter.process_timeouts()

    def action_editor_quit(self) -> None:
        if self.adapter:
            self.adapter.handle_textual_key("q", modifiers=("ctrl",))

    def on_key(self, event: events.Key) -> None:
        if not self.adapter:
            return
        normalized = self._normalize_key(event)
        if normalized is None:
            return
        key, text, modifiers = normalized
        self.adapter.handle_textual_key(key, text=text, modifiers=modifiers)
        event.stop()

    def _update_view(self, mirror: DocumentMirror) -> None:
        self._state.status_bar = mirror.status_bar
        if self._view_widget:
            self._view_widget.update(render_rows(mirror))
        if self._status_widget:
            self._status_widget.update(Text(mirror.status_bar, style="reverse"))

    def _update_message(self, message: str) -> None:
        self._state.message = message
        self._refresh_message_line()

    def _show_command(self, command: str) -> None:
        self._state.command_text = command
        self._refresh_message_line()

    def _refresh_message_line(self) -> None:
        if not self._message_widget:
            return
        if self.editor and self.editor.mode.value == "command":
            self._message_widget.update(Text(f":{self._state.command_text}"))
        else:
            self._message_widget.update(Text(self._state.message))

    def _log_line(self, line: str) -> None:
        telemetry.get_logger("hecto_engine.adapters.textual").debug(line)

    @staticmethod
    def _normalize_key(
        event: Any,
    ) -> Optional[Tuple[str, Optional[str], Tuple[str, ...]]]:
        *prefix, base = event.key.split("+") if event.key != "+" else ["+"]
        modifiers = tuple(
            "alt" if mod == "meta" else mod for mod in prefix if mod in MODIFIER_NAMES
        )
        if base in NAMED_KEYS:
            return (NAMED_KEYS[base], None, modifiers)
        if any(mod != "shift" for mod in modifiers):
            return (base, None, modifiers)
        character = event.character
        if character and event.is_printable:
            return (character, character, ())
        return None


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run the hecto text editor.")
    parser.add_argument("path", nargs="?", help="File to open")
    parser.add_argument(
        "--log-preset",
        choices=("development", "production"),
        default=None,
        help="Use a named telelog preset instead of the HECTO_LOG_* settings",
    )
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = _parse_args(argv)
    if args.log_preset:
        telemetry.configure(preset=args.log_preset)
    app = HectoApp(path=args.path)
    app.run()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
