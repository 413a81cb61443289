"""Base classes and shared types for editor modes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Dict, FrozenSet, Mapping, Optional, Tuple

from hecto_engine.buffer import CursorState, Document
from hecto_engine.config import EditorConfig
from hecto_engine.runtime.status import StatusLine

ESC = "ESC"
ENTER = "ENTER"
BACKSPACE = "BACKSPACE"
DELETE = "DELETE"
TAB = "TAB"
LEFT = "LEFT"
RIGHT = "RIGHT"
UP = "UP"
DOWN = "DOWN"


class EditorMode(str, Enum):
    NORMAL = "normal"
    INSERT = "insert"
    COMMAND = "command"

    @property
    def label(self) -> str:
        return f"MODE: {self.value.upper()}"


MODE_TRANSITIONS: Mapping[EditorMode, FrozenSet[EditorMode]] = {
    EditorMode.NORMAL: frozenset({EditorMode.INSERT, EditorMode.COMMAND}),
    EditorMode.INSERT: frozenset({EditorMode.NORMAL}),
    EditorMode.COMMAND: frozenset({EditorMode.NORMAL}),
}


class InvalidTransitionError(ValueError):
    """Raised when a mode switch is not listed in ``MODE_TRANSITIONS``."""


@dataclass(slots=True)
class KeyInput:
    """Normalized key event passed to modes.

    ``key`` is either the character itself or one of the named keys above;
    ``text`` carries the printable character, if any.
    """

    key: str
    modifiers: Tuple[str, ...] = ()
    text: Optional[str] = None

    @classmethod
    def char(cls, ch: str, *modifiers: str) -> "KeyInput":
        return cls(key=ch, modifiers=tuple(modifiers), text=ch)

    @property
    def printable(self) -> Optional[str]:
        if not self.text:
            return None
        if any(mod.lower() in {"ctrl", "alt"} for mod in self.modifiers):
            return None
        if not self.text.isprintable():
            return None
        return self.text


@dataclass(slots=True)
class ModeResult:
    """Result returned from ``Mode.handle_key``.

    ``replay`` hands a key back to the manager so it is dispatched again
    after any requested mode switch has happened.
    """

    consumed: bool
    switch_to: Optional[str] = None
    status: str = "ok"
    message: Optional[str] = None
    timeout_ms: Optional[int] = None
    replay: Optional[KeyInput] = None


class ModeBus:
    """Minimal publish/subscribe channel between modes and hosts."""

    def __init__(self) -> None:
        self._subscribers: Dict[str, list[Callable[[object], None]]] = {}

    def subscribe(self, event: str, callback: Callable[[object], None]) -> None:
        self._subscribers.setdefault(event, []).append(callback)

    def emit(self, event: str, payload: object | None = None) -> None:
        for callback in self._subscribers.get(event, []):
            callback(payload)


@dataclass(slots=True)
class ModeContext:
    """Everything a mode or action may read or mutate."""

    document: Document
    cursor: CursorState
    bus: ModeBus
    status: StatusLine = field(default_factory=StatusLine)
    config: EditorConfig = field(default_factory=EditorConfig)
    quit_requested: bool = False
    extras: Dict[str, object] = field(default_factory=dict)


class Mode:
    """Base class all concrete editor modes inherit from."""

    name: str = "mode"

    def __init__(self, context: ModeContext) -> None:
        self.context = context

    def on_enter(self, previous: Optional[str]) -> None:
        del previous

    def on_exit(self, next_mode: Optional[str]) -> None:
        del next_mode

    def handle_key(self, key: KeyInput) -> ModeResult:
        raise NotImplementedError

    def handle_timeout(self) -> ModeResult:
        """Invoked by the manager when a pending key sequence expires."""

        return ModeResult(consumed=False, status="timeout")
