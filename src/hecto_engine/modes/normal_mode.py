"""Normal mode: motions and the keys that enter the other modes."""

from __future__ import annotations

from .base_mode import KeyInput, ModeResult
from .keymap_mode import KeymapMode


class NormalMode(KeymapMode):
    name = "normal"

    def on_enter(self, previous: str | None) -> None:
        del previous
        self._pending.clear()

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        # Unbound keys never edit the document here.
        return ModeResult(consumed=False, status="miss", message=key.key)


__all__ = ["NormalMode"]
