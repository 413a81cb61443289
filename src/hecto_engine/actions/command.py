"""Actions that evaluate the command line and its fixed vocabulary."""

from __future__ import annotations

from typing import Callable, Dict

from hecto_engine.buffer import DocumentError, NoFilenameError, SaveFailedError
from hecto_engine.modes.base_mode import EditorMode, ModeContext, ModeResult
from hecto_engine.modes.keymap_helpers import command_state
from hecto_engine.runtime.status import StatusKind
from hecto_engine.runtime.telemetry import record_event

CommandHandler = Callable[[ModeContext], ModeResult]


def submit_command_line(context: ModeContext, match) -> ModeResult:
    del match
    state = command_state(context)
    text = str(state.get("text", ""))
    command = text.upper()
    state["text"] = ""
    context.bus.emit("command.submit", text)

    handler = COMMANDS.get(command)
    if handler is None:
        return _invalid_command(context, text)

    state["status"] = None
    result = handler(context)
    context.cursor.restore_position()
    record_event("command.execute", data={"command": command, "status": result.status})
    return result


def cancel_command_line(context: ModeContext, match) -> ModeResult:
    del match
    state = command_state(context)
    state["text"] = ""
    state["status"] = None
    context.cursor.restore_position()
    context.bus.emit("command.cancel", None)
    return ModeResult(
        consumed=True, switch_to=EditorMode.NORMAL, message="command_cancel"
    )


def save_document(context: ModeContext, match=None) -> ModeResult:
    """Write the document out, reporting every outcome on the status line."""

    del match
    document = context.document
    try:
        count = document.save()
    except NoFilenameError:
        context.status.post("ERR: No file name bound.", StatusKind.NO_FILENAME)
        return ModeResult(consumed=True, status="save_no_filename")
    except SaveFailedError as exc:
        context.status.post(f"ERR: {exc}", StatusKind.SAVE_FAILED)
        record_event("document.save_failed", level="error", data={"path": exc.path})
        return ModeResult(consumed=True, status="save_failed", message=str(exc))
    except DocumentError as exc:
        context.status.post(f"ERR: {exc}", StatusKind.SAVE_FAILED)
        return ModeResult(consumed=True, status="save_failed", message=str(exc))

    context.status.post(f"File written: {document.filename} ({count} lines)")
    context.bus.emit("command.write", {"filename": document.filename, "lines": count})
    return ModeResult(consumed=True, status="saved", message=document.filename)


def _handle_save(context: ModeContext) -> ModeResult:
    outcome = save_document(context)
    return ModeResult(
        consumed=True,
        switch_to=EditorMode.NORMAL,
        status=outcome.status,
        message=outcome.message,
    )


def _handle_quit(context: ModeContext) -> ModeResult:
    context.quit_requested = True
    context.bus.emit("command.quit", None)
    return ModeResult(
        consumed=True, switch_to=EditorMode.NORMAL, status="quit", message="quit"
    )


def _invalid_command(context: ModeContext, text: str) -> ModeResult:
    state = command_state(context)
    state["status"] = StatusKind.INVALID_COMMAND
    context.status.post(f"Invalid command: {text}", StatusKind.INVALID_COMMAND)
    context.bus.emit("command.error", text)
    return ModeResult(consumed=True, status="invalid_command", message=text)


COMMANDS: Dict[str, CommandHandler] = {
    "SAVE FILE": _handle_save,
    "QUIT": _handle_quit,
}


__all__ = [
    "COMMANDS",
    "submit_command_line",
    "cancel_command_line",
    "save_document",
]
