"""Command-line mode with inline editing and keymap integration."""

from __future__ import annotations

from typing import Optional

from hecto_engine.runtime.status import StatusKind

from .base_mode import BACKSPACE, KeyInput, ModeResult
from .keymap_helpers import command_state, keymap_flags
from .keymap_mode import KeymapMode


class CommandMode(KeymapMode):
    """Collects the command text; Enter and Esc are resolved through keymaps.

    The text lives in ``context.extras["command_state"]`` so the submit and
    cancel actions can read and clear it.
    """

    name = "command"

    def on_enter(self, previous: str | None) -> None:
        del previous
        state = command_state(self.context)
        state["text"] = ""
        state["status"] = None
        keymap_flags(self.context)["command_active"] = True
        self.context.bus.emit("command.start", None)

    def on_exit(self, next_mode: str | None) -> None:
        super().on_exit(next_mode)
        keymap_flags(self.context)["command_active"] = False
        self.context.bus.emit("command.end", self.current_command)
        command_state(self.context)["text"] = ""

    @property
    def current_command(self) -> str:
        return str(command_state(self.context).get("text", ""))

    @property
    def status(self) -> Optional[StatusKind]:
        value = command_state(self.context).get("status")
        return value if isinstance(value, StatusKind) else None

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        state = command_state(self.context)
        if key.key == BACKSPACE:
            typed = self.current_command
            if not typed:
                return ModeResult(consumed=True, status="noop")
            state["text"] = typed[:-1]
            return ModeResult(consumed=True, status="editing")

        text = key.printable
        if text is None:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        state["text"] = self.current_command + text
        return ModeResult(consumed=True, status="editing")


__all__ = ["CommandMode"]
