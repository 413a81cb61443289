"""Synchronous key loop driving an ``Editor`` from any key source."""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol

from hecto_engine.modes.base_mode import KeyInput

from . import telemetry

if TYPE_CHECKING:
    from hecto_engine.editor import Editor


class KeySource(Protocol):
    def read_key(self) -> Optional[KeyInput]:
        """Block until the next key arrives; ``None`` once input is exhausted."""
        ...

    def poll(self, timeout_s: float) -> bool:
        """Wait up to ``timeout_s`` and report whether a key is ready."""
        ...


def run_session(editor: "Editor", source: KeySource) -> int:
    """Feed keys until quit is requested or the source runs dry.

    While a multi-key sequence is pending the loop polls instead of
    blocking, and expires the sequence when its lookahead passes without
    another key. Returns the number of keys handled.
    """

    handled = 0
    with telemetry.span("session::run", component="session"):
        while not editor.quit_requested:
            key = source.read_key()
            if key is None:
                break
            editor.feed(key)
            handled += 1

            wait = editor.pending_timeout_s()
            while wait is not None and not editor.quit_requested:
                if source.poll(wait):
                    break
                editor.expire_pending()
                wait = editor.pending_timeout_s()
    telemetry.record_event(
        "session.end", data={"keys": handled, "quit": editor.quit_requested}
    )
    return handled


__all__ = ["KeySource", "run_session"]
