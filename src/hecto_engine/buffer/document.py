"""Ordered collection of lines bound to an optional file name."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional, Sequence

from hecto_engine.runtime.telemetry import record_event, span

from .errors import FileUnreadableError, NoFilenameError, SaveFailedError
from .io import LineReader, LineWriter, read_lines, strip_terminator, write_lines
from .line import Line
from .state import Position


class DeleteOutcome(str, Enum):
    NOOP = "noop"
    DELETED = "deleted"
    JOINED_PREVIOUS = "joined_previous"
    JOINED_NEXT = "joined_next"


@dataclass(frozen=True, slots=True)
class DeleteResult:
    """What ``Document.delete`` did and where the cursor belongs afterwards."""

    outcome: DeleteOutcome
    cursor: Position


@dataclass(slots=True)
class Document:
    """List-of-lines text model.

    Every mutation bumps ``version`` and marks the document dirty. Lookups
    past either end return ``None``/``0``/``""`` instead of raising, and
    mutations aimed at a missing line are no-ops.
    """

    lines: List[Line] = field(default_factory=list)
    filename: Optional[str] = None
    version: int = 0
    dirty: bool = False

    @classmethod
    def open(
        cls, lines: Iterable[str], *, filename: Optional[str] = None
    ) -> "Document":
        return cls(
            lines=[Line(strip_terminator(text)) for text in lines],
            filename=filename,
        )

    @classmethod
    def load(cls, path: str, *, reader: LineReader = read_lines) -> "Document":
        with span("document::load", component="document", metadata={"path": path}):
            try:
                lines = reader(path)
            except (OSError, UnicodeDecodeError) as exc:
                raise FileUnreadableError(
                    f"Could not open file: {path}", path=path
                ) from exc
            document = cls.open(lines, filename=path)
        record_event(
            "document.open", data={"path": path, "lines": document.line_count}
        )
        return document

    @property
    def line_count(self) -> int:
        return len(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def line(self, y: int) -> Optional[Line]:
        if 0 <= y < len(self.lines):
            return self.lines[y]
        return None

    def width(self, y: int) -> int:
        line = self.line(y)
        return line.width() if line is not None else 0

    def render(self, y: int, start: int, end: int) -> str:
        line = self.line(y)
        return line.render(start, end) if line is not None else ""

    def snapshot(self) -> Sequence[str]:
        return tuple(line.text for line in self.lines)

    def insert(self, text: str, pos: Position) -> bool:
        if not text or pos.y < 0:
            return False
        with span("document::insert", component="document", metadata={"y": pos.y}):
            if not self.lines and pos.y == 0:
                self.lines.append(Line(text))
            elif pos.y < len(self.lines):
                self.lines[pos.y].insert(pos.x, text)
            else:
                return False
            self._touch()
            return True

    def enter(self, pos: Position) -> bool:
        with span("document::enter", component="document", metadata={"y": pos.y}):
            if not self.lines and pos.y == 0:
                self.lines.append(Line())
            line = self.line(pos.y)
            if line is None:
                return False
            self.lines.insert(pos.y + 1, line.split(pos.x))
            self._touch()
            return True

    def delete(self, pos: Position, *, forward: bool = False) -> DeleteResult:
        """Backspace (default) or forward-delete at ``pos``.

        Backspace at column 0 joins the line onto the previous one; forward
        delete at the end of a line pulls the next line up. Otherwise a
        single grapheme goes: the one left of ``pos.x`` for backspace, the
        one under it for forward delete.
        """

        with span(
            "document::delete",
            component="document",
            metadata={"y": pos.y, "forward": forward},
        ) as handle:
            line = self.line(pos.y)
            if line is None:
                handle.add_metadata("outcome", DeleteOutcome.NOOP.value)
                return DeleteResult(DeleteOutcome.NOOP, pos)
            x = max(0, min(pos.x, line.width()))

            if forward:
                result = self._delete_forward(line, x, pos.y)
            else:
                result = self._delete_backward(line, x, pos.y)
            handle.add_metadata("outcome", result.outcome.value)
            if result.outcome is not DeleteOutcome.NOOP:
                self._touch()
            return result

    def _delete_backward(self, line: Line, x: int, y: int) -> DeleteResult:
        if x == 0:
            if y == 0:
                return DeleteResult(DeleteOutcome.NOOP, Position(0, 0))
            previous = self.lines[y - 1]
            previous_width = previous.width()
            previous.append(line)
            del self.lines[y]
            return DeleteResult(
                DeleteOutcome.JOINED_PREVIOUS, Position(previous_width, y - 1)
            )
        line.delete(x - 1)
        return DeleteResult(DeleteOutcome.DELETED, Position(x - 1, y))

    def _delete_forward(self, line: Line, x: int, y: int) -> DeleteResult:
        if x >= line.width():
            if y >= len(self.lines) - 1:
                return DeleteResult(DeleteOutcome.NOOP, Position(x, y))
            line.append(self.lines[y + 1])
            del self.lines[y + 1]
            return DeleteResult(DeleteOutcome.JOINED_NEXT, Position(x, y))
        line.delete(x)
        return DeleteResult(DeleteOutcome.DELETED, Position(x, y))

    def indent_column(self, y: int) -> int:
        """Indentation a new line below ``y`` should inherit.

        A line starting with whitespace answers with its own indentation.
        Empty lines and lines starting with a visible character defer to
        the line below, down to the last line of the document.
        """

        while 0 <= y < len(self.lines):
            indent = self.lines[y].leading_whitespace()
            if indent:
                return indent
            y += 1
        return 0

    def save(self, *, writer: LineWriter = write_lines) -> int:
        if not self.filename:
            raise NoFilenameError()
        path = self.filename
        with span("document::save", component="document", metadata={"path": path}):
            try:
                writer(path, self.snapshot())
            except OSError as exc:
                raise SaveFailedError(
                    f"Could not save file: {path} ({exc})", path=path
                ) from exc
        self.dirty = False
        record_event("document.save", data={"path": path, "lines": len(self.lines)})
        return len(self.lines)

    def _touch(self) -> None:
        self.version += 1
        self.dirty = True


__all__ = ["Document", "DeleteOutcome", "DeleteResult"]
