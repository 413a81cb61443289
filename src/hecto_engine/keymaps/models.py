"""Value types for keymaps: strokes, sequences, bindings and actions."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Callable, Dict, Iterable, Mapping

DEFAULT_SEQUENCE_TIMEOUT_MS = 500


def make_token(key: str, modifiers: Iterable[str] = ()) -> str:
    """Canonical token for a key press, e.g. ``"ctrl+q"`` or ``"alt+shift+w"``."""

    mods = sorted({mod.strip().lower() for mod in modifiers if mod.strip()})
    return "+".join([*mods, key])


@dataclass(frozen=True, slots=True)
class KeyStroke:
    key: str
    modifiers: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if not self.key:
            raise ValueError("key cannot be empty")

    @property
    def token(self) -> str:
        return make_token(self.key, self.modifiers)

    @classmethod
    def parse(cls, spec: str) -> "KeyStroke":
        """Parse ``"ctrl+q"`` style specs; a lone ``"+"`` is the plus key."""

        head, sep, key = spec.rpartition("+")
        if not sep or not key:
            return cls(spec)
        return cls(key, tuple(head.split("+")) if head else ())


@dataclass(frozen=True, slots=True)
class KeySequence:
    """One or more strokes typed in a row, plus the lookahead between them."""

    strokes: tuple[KeyStroke, ...]
    timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS

    def __post_init__(self) -> None:
        if not self.strokes:
            raise ValueError("KeySequence requires at least one stroke")

    @property
    def tokens(self) -> tuple[str, ...]:
        return tuple(stroke.token for stroke in self.strokes)

    def with_timeout(self, timeout_ms: int) -> "KeySequence":
        return replace(self, timeout_ms=timeout_ms)

    @classmethod
    def from_strings(
        cls, *keys: str, timeout_ms: int = DEFAULT_SEQUENCE_TIMEOUT_MS
    ) -> "KeySequence":
        return cls(tuple(KeyStroke.parse(key) for key in keys if key), timeout_ms)

    @classmethod
    def parse(cls, spec: str, **kwargs: int) -> "KeySequence":
        """``"g g"`` -> two strokes; strokes are separated by spaces."""

        return cls.from_strings(*spec.split(), **kwargs)


@dataclass(frozen=True, slots=True)
class WhenClause:
    """A flag a binding requires (``"flag"``) or forbids (``"!flag"``)."""

    flag: str
    expected: bool = True

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr.lstrip("!"):
            raise ValueError(f"invalid when clause {expression!r}")
        if expr.startswith("!"):
            return cls(expr[1:], False)
        return cls(expr)

    def evaluate(self, flags: Mapping[str, bool]) -> bool:
        return bool(flags.get(self.flag, False)) is self.expected


@dataclass(frozen=True, slots=True)
class ActionRef:
    """Named callable a binding points at; called as ``handler(context, match)``."""

    id: str
    handler: Callable[..., object]
    description: str = ""

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("ActionRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError(f"handler for '{self.id}' must be callable")

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class Binding:
    id: str
    mode: str
    sequence: KeySequence
    action_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        for name in ("id", "mode", "action_id"):
            if not getattr(self, name):
                raise ValueError(f"binding {name} cannot be empty")
        clauses = tuple(
            clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
            for clause in self.when
        )
        object.__setattr__(self, "when", clauses)

    @property
    def tokens(self) -> tuple[str, ...]:
        return self.sequence.tokens

    def flags(self) -> Dict[str, bool]:
        return {clause.flag: clause.expected for clause in self.when}

    def allows(self, flags: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(flags) for clause in self.when)


__all__ = [
    "DEFAULT_SEQUENCE_TIMEOUT_MS",
    "KeyStroke",
    "KeySequence",
    "WhenClause",
    "ActionRef",
    "Binding",
    "make_token",
]
