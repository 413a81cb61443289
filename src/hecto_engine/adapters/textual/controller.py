"""Host-side glue between an ``Editor`` and whatever widgets draw it."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, Optional

from hecto_engine.buffer import DocumentMirror
from hecto_engine.editor import Editor
from hecto_engine.modes import KeyInput, ModeResult

# Bus events forwarded to ``TextualUIHooks.handle_event``.
RELAYED_EVENTS = (
    "document.changed",
    "command.start",
    "command.end",
    "command.submit",
    "command.cancel",
    "command.error",
    "command.write",
    "command.quit",
    "editor.quit",
)


def _noop(*_args, **_kwargs) -> None:  # pragma: no cover - default hook
    return None


@dataclass(slots=True)
class TextualUIHooks:
    """Callbacks the adapter drives; only ``update_view`` is required."""

    update_view: Callable[[DocumentMirror], None]
    update_status: Callable[[str], None] = _noop
    show_command: Callable[[str], None] = _noop
    handle_event: Callable[[str, object | None], None] = _noop
    request_exit: Callable[[], None] = _noop
    # Debug lines describing every key and its outcome.
    log: Callable[[str], None] = _noop


class TextualEditorAdapter:
    """Feeds host key events to the editor and pushes a fresh mirror back.

    Every call that may have changed the editor ends in ``refresh()``, which
    redraws the view, the message line and the command line, then asks the
    host to exit once quit has been requested.
    """

    def __init__(self, editor: Editor, hooks: TextualUIHooks) -> None:
        self.editor = editor
        self.hooks = hooks
        bus = editor.context.bus
        for event in RELAYED_EVENTS:
            bus.subscribe(event, lambda payload, name=event: self._relay(name, payload))
        self.refresh()

    def handle_textual_key(
        self,
        key: str,
        *,
        text: Optional[str] = None,
        modifiers: Iterable[str] = (),
    ) -> ModeResult:
        key_input = KeyInput(
            key=key, text=text, modifiers=tuple(str(m).lower() for m in modifiers)
        )
        self._trace("key ->", key=key, text=text, mods=key_input.modifiers)
        result = self.editor.feed(key_input)
        self._trace(
            "result <-",
            consumed=result.consumed,
            status=result.status,
            message=result.message,
            timeout_ms=result.timeout_ms,
        )
        self.refresh()
        return result

    def process_timeouts(self) -> Dict[str, ModeResult]:
        """Run sequences whose lookahead elapsed; redraw only if one ran."""

        results = self.editor.process_timeouts()
        if not results:
            return results
        for mode_name, outcome in results.items():
            self._trace("timeout ->", source_mode=mode_name, status=outcome.status)
        self.refresh()
        return results

    def resize(self, width: int, height: int) -> None:
        self.editor.resize(width, height)
        self.refresh()

    def refresh(self) -> None:
        mirror = self.editor.mirror()
        self.hooks.update_view(mirror)
        self.hooks.update_status(mirror.status)
        self.hooks.show_command(mirror.command_text)
        if self.editor.quit_requested:
            self.hooks.request_exit()

    def _relay(self, name: str, payload: object | None) -> None:
        self._trace("event ->", event=name, payload=payload)
        self.hooks.handle_event(name, payload)

    def _trace(self, prefix: str, **fields: object) -> None:
        editor = self.editor
        state: Dict[str, object] = {
            "mode": editor.mode.value,
            "cursor": editor.cursor.as_tuple(),
            "command": editor.command_text,
            "pending": editor.pending_timeout_s() is not None,
            "file": editor.file_label,
            "version": editor.document.version,
        }
        state.update((k, v) for k, v in fields.items() if v is not None)
        self.hooks.log(" ".join([prefix, *(f"{k}={v!r}" for k, v in state.items())]))


__all__ = ["TextualEditorAdapter", "TextualUIHooks", "RELAYED_EVENTS"]
