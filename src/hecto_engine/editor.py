"""High-level editor façade combining document, cursor, modes and status."""

from __future__ import annotations

import time
from typing import Callable, Dict, Optional

from hecto_engine.buffer import (
    CursorState,
    Document,
    DocumentMirror,
    FileUnreadableError,
    Position,
)
from hecto_engine.buffer.io import LineReader, read_lines
from hecto_engine.config import EditorConfig
from hecto_engine.modes import (
    CommandMode,
    EditorMode,
    InsertMode,
    KeyInput,
    ModeBus,
    ModeContext,
    ModeResult,
    NormalMode,
)
from hecto_engine.modes.keymap_helpers import command_state
from hecto_engine.modes.mode_manager import ModeManager
from hecto_engine.runtime import telemetry
from hecto_engine.runtime.status import StatusKind, StatusLine, StatusMessage

NO_FILE_LABEL = "[NO FILE OPENED]"
UNREADABLE_FILE_LABEL = "[ERROR COULD NOT OPEN FILE]"
HELP_MESSAGE = "HELP: :save file | :quit | Ctrl-Q quit | Alt-W save"


def create_default_manager(
    context: ModeContext, *, clock: Callable[[], float] = time.monotonic
) -> ModeManager:
    """Build a ModeManager with the standard mode set + default keymaps."""

    manager = ModeManager(context, clock=clock)
    manager.register_mode(NormalMode)
    manager.register_mode(InsertMode)
    manager.register_mode(CommandMode)
    return manager


class Editor:
    """Entry point for hosts: feed keys in, read the mirror back out."""

    def __init__(
        self,
        *,
        document: Optional[Document] = None,
        config: Optional[EditorConfig] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config or EditorConfig()
        self.logger = telemetry.get_logger("hecto_engine.editor")
        self.context = ModeContext(
            document=document if document is not None else Document(),
            cursor=CursorState(
                viewport_width=self.config.viewport_width,
                viewport_height=self.config.viewport_height,
            ),
            bus=ModeBus(),
            status=StatusLine(timeout_s=self.config.status_timeout_s, clock=clock),
            config=self.config,
        )
        self.manager = create_default_manager(self.context, clock=clock)
        self.file_label = self.context.document.filename or NO_FILE_LABEL

    @property
    def document(self) -> Document:
        return self.context.document

    @property
    def mode(self) -> EditorMode:
        return self.manager.current

    @property
    def cursor(self) -> Position:
        return self.context.cursor.position

    @property
    def quit_requested(self) -> bool:
        return self.context.quit_requested

    @property
    def status(self) -> Optional[StatusMessage]:
        return self.context.status.message

    @property
    def command_text(self) -> str:
        return str(command_state(self.context).get("text", ""))

    def open(self, path: Optional[str], *, reader: LineReader = read_lines) -> bool:
        """Load ``path`` into a fresh document; failures become a status message."""

        self._reset_document(Document())
        if not path:
            self.file_label = NO_FILE_LABEL
            self.context.status.post(HELP_MESSAGE)
            return False
        try:
            document = Document.load(path, reader=reader)
        except FileUnreadableError as exc:
            self.file_label = UNREADABLE_FILE_LABEL
            self.context.status.post(f"ERR: {exc}", StatusKind.FILE_UNREADABLE)
            telemetry.record_event(
                "editor.open_failed", level="warning", data={"path": path}
            )
            return False
        self._reset_document(document)
        self.file_label = path
        self.context.status.post(HELP_MESSAGE)
        return True

    def feed(self, key: KeyInput) -> ModeResult:
        result = self.manager.handle_key(key)
        self.context.cursor.scroll()
        return result

    def expire_pending(self) -> Dict[str, ModeResult]:
        """Run any buffered key sequence as if its lookahead had elapsed."""

        results = self.manager.force_timeout()
        self.context.cursor.scroll()
        return results

    def process_timeouts(self) -> Dict[str, ModeResult]:
        results = self.manager.process_timeouts()
        if results:
            self.context.cursor.scroll()
        return results

    def pending_timeout_s(self) -> Optional[float]:
        return self.manager.pending_timeout_s()

    def resize(self, width: int, height: int) -> None:
        self.context.cursor.resize(width, height)
        self.context.cursor.scroll()

    def status_bar(self) -> str:
        document = self.document
        total = document.line_count
        current = self.cursor.y + 1 if total else 0
        percent = current * 100 // total if total else 100
        name = document.filename or self.file_label
        modified = " (modified)" if document.dirty else ""
        return (
            f"{self.mode.label} | {name}{modified} | "
            f"{current}/{total}: {percent}%"
        )

    def mirror(self, *, attributes: Optional[dict[str, str]] = None) -> DocumentMirror:
        cursor = self.context.cursor
        document = self.document
        offset = cursor.offset
        last = min(offset.y + cursor.viewport_height, document.line_count)
        rows = tuple(
            document.render(y, offset.x, offset.x + cursor.viewport_width)
            for y in range(offset.y, last)
        )
        return DocumentMirror(
            rows=rows,
            cursor=cursor.position,
            offset=offset,
            mode=self.mode.value,
            line_count=document.line_count,
            filename=document.filename,
            status=self.context.status.visible_text(),
            status_bar=self.status_bar(),
            command_text=self.command_text,
            attributes=dict(attributes or {}),
        )

    def _reset_document(self, document: Document) -> None:
        self.context.document = document
        cursor = self.context.cursor
        cursor.position = Position()
        cursor.sticky_column = 0
        cursor.offset = Position()
        cursor.saved_position = None


__all__ = ["Editor", "create_default_manager", "NO_FILE_LABEL", "UNREADABLE_FILE_LABEL"]
