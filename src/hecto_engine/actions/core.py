"""Mode-transition actions shared across modes."""

from __future__ import annotations

from hecto_engine.modes.base_mode import EditorMode, ModeContext, ModeResult


def enter_insert_mode(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(
        consumed=True, switch_to=EditorMode.INSERT, message="enter_insert"
    )


def append_after_cursor(context: ModeContext, match) -> ModeResult:
    del match
    cursor = context.cursor
    width = context.document.width(cursor.y)
    cursor.move_to(min(cursor.x + 1, width), cursor.y)
    return ModeResult(
        consumed=True, switch_to=EditorMode.INSERT, message="enter_insert"
    )


def append_at_line_end(context: ModeContext, match) -> ModeResult:
    del match
    cursor = context.cursor
    cursor.move_to(context.document.width(cursor.y), cursor.y)
    return ModeResult(
        consumed=True, switch_to=EditorMode.INSERT, message="enter_insert"
    )


def exit_insert_mode(context: ModeContext, match) -> ModeResult:
    del match
    cursor = context.cursor
    cursor.move_to(max(cursor.x - 1, 0), cursor.y)
    return ModeResult(consumed=True, switch_to=EditorMode.NORMAL, message="exit_insert")


def enter_command_mode(context: ModeContext, match) -> ModeResult:
    del match
    context.cursor.save_position()
    return ModeResult(
        consumed=True, switch_to=EditorMode.COMMAND, message="enter_command"
    )


def request_quit(context: ModeContext, match) -> ModeResult:
    del match
    context.quit_requested = True
    context.bus.emit("editor.quit", None)
    return ModeResult(consumed=True, status="quit", message="quit")


def noop_action(context: ModeContext, match) -> ModeResult:
    del context, match
    return ModeResult(consumed=True, status="noop")


__all__ = [
    "enter_insert_mode",
    "append_after_cursor",
    "append_at_line_end",
    "exit_insert_mode",
    "enter_command_mode",
    "request_quit",
    "noop_action",
]
