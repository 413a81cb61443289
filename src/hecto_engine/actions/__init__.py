"""Editing verbs, motions and commands bound by the default keymaps."""

from .command import cancel_command_line, save_document, submit_command_line
from .core import (
    append_after_cursor,
    append_at_line_end,
    enter_command_mode,
    enter_insert_mode,
    exit_insert_mode,
    noop_action,
    request_quit,
)
from .editing import (
    delete_backward,
    delete_forward,
    insert_newline,
    insert_tab,
    insert_text,
)

__all__ = [
    "enter_insert_mode",
    "append_after_cursor",
    "append_at_line_end",
    "exit_insert_mode",
    "enter_command_mode",
    "request_quit",
    "noop_action",
    "insert_text",
    "insert_newline",
    "insert_tab",
    "delete_backward",
    "delete_forward",
    "submit_command_line",
    "cancel_command_line",
    "save_document",
]
