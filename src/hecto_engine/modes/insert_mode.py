"""Insert mode: printable keys edit the document at the cursor."""

from __future__ import annotations

from hecto_engine.actions.editing import insert_text

from .base_mode import KeyInput, ModeResult
from .keymap_mode import KeymapMode


class InsertMode(KeymapMode):
    name = "insert"

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        text = key.printable
        if text is None:
            return ModeResult(consumed=False, status="miss", message="unhandled")
        return insert_text(self.context, text)


__all__ = ["InsertMode"]
