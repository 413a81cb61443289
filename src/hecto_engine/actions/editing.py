"""Text-editing actions used by Insert mode."""

from __future__ import annotations

from hecto_engine.buffer import DeleteOutcome, Position
from hecto_engine.modes.base_mode import ModeContext, ModeResult


def insert_text(context: ModeContext, text: str) -> ModeResult:
    """Insert ``text`` at the cursor and advance by the columns it added."""

    document = context.document
    cursor = context.cursor
    x, y = cursor.position.as_tuple()
    if y >= document.line_count:
        x = 0
    before = document.width(y)
    if not document.insert(text, Position(x, y)):
        return ModeResult(consumed=False, status="noop")
    grown = document.width(y) - before
    cursor.move_to(x + grown, y)
    context.bus.emit("document.changed", {"action": "insert", "text": text})
    return ModeResult(consumed=True, status="edit", message="insert")


def insert_newline(context: ModeContext, match) -> ModeResult:
    del match
    document = context.document
    cursor = context.cursor
    x, y = cursor.position.as_tuple()
    if not document.enter(Position(x, y)):
        return ModeResult(consumed=True, status="noop")

    indent = document.indent_column(y)
    new_line = document.lines[y + 1]
    missing = indent - new_line.leading_whitespace()
    if missing > 0:
        new_line.insert(0, " " * missing)
    cursor.move_to(indent, y + 1)
    context.bus.emit("document.changed", {"action": "enter", "line": y})
    return ModeResult(consumed=True, status="edit", message="enter")


def insert_tab(context: ModeContext, match) -> ModeResult:
    del match
    return insert_text(context, " " * context.config.tab_width)


def delete_backward(context: ModeContext, match) -> ModeResult:
    del match
    return _delete(context, forward=False)


def delete_forward(context: ModeContext, match) -> ModeResult:
    del match
    return _delete(context, forward=True)


def _delete(context: ModeContext, *, forward: bool) -> ModeResult:
    result = context.document.delete(context.cursor.position, forward=forward)
    if result.outcome is DeleteOutcome.NOOP:
        return ModeResult(consumed=True, status="noop")
    context.cursor.move_to(result.cursor.x, result.cursor.y)
    context.bus.emit(
        "document.changed", {"action": "delete", "outcome": result.outcome.value}
    )
    return ModeResult(consumed=True, status="edit", message=result.outcome.value)


__all__ = [
    "insert_text",
    "insert_newline",
    "insert_tab",
    "delete_backward",
    "delete_forward",
]
