"""Mode manager: owns the active mode, its transitions and key lookahead."""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Type

from hecto_engine.keymaps import KeymapRegistry, KeymapResolver
from hecto_engine.keymaps.defaults import load_default_keymaps
from hecto_engine.runtime import telemetry

from .base_mode import (
    MODE_TRANSITIONS,
    EditorMode,
    InvalidTransitionError,
    KeyInput,
    Mode,
    ModeContext,
    ModeResult,
)


@dataclass(frozen=True)
class Lookahead:
    """A buffered key sequence in ``mode`` that expires at ``deadline``."""

    mode: str
    deadline: float


class ModeManager:
    """Dispatches keys to the active mode and applies the switches it asks for.

    Only the active mode can hold a partial key sequence (leaving a mode
    drops its buffer), so at most one lookahead is armed at a time. Hosts
    either poll ``process_timeouts()`` or call ``force_timeout()`` once they
    know no further key arrived.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.context = context
        self._clock = clock
        self._modes: Dict[str, Mode] = {}
        self._active: Optional[str] = None
        self._lookahead: Optional[Lookahead] = None

        if keymap_registry is None:
            keymap_registry = KeymapRegistry(logger_name="hecto_engine.keymaps")
            if load_defaults:
                load_default_keymaps(keymap_registry)
                keymap_registry.override_sequence_timeouts(
                    timeout_ms=context.config.sequence_timeout_ms
                )
        self.keymap_registry = keymap_registry
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            keymap_registry, logger_name="hecto_engine.keymaps"
        )
        extras = context.extras
        extras.setdefault("keymap_registry", self.keymap_registry)
        extras.setdefault("keymap_resolver", self.keymap_resolver)
        extras.setdefault("keymap_flags", {})
        extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        return self._modes.get(self._active) if self._active else None

    @property
    def current(self) -> EditorMode:
        if self._active is None:
            raise RuntimeError("No active mode registered")
        return EditorMode(self._active)

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        """Instantiate and add a mode; the first one registered becomes active."""

        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: str) -> None:
        key = name.value if isinstance(name, EditorMode) else name
        if key not in self._modes:
            raise KeyError(f"Unknown mode '{key}'")
        target = EditorMode(key)
        previous = self._active
        if previous == target.value:
            return
        if previous is not None:
            source = EditorMode(previous)
            if target not in MODE_TRANSITIONS[source]:
                raise InvalidTransitionError(
                    f"Cannot switch from '{source.value}' to '{target.value}'"
                )
            self._modes[previous].on_exit(target.value)

        self._lookahead = None
        self._active = target.value
        self._modes[target.value].on_enter(previous)
        telemetry.record_event(
            "mode.switch", data={"mode": target.value, "from": previous}
        )

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            f"mode::{mode.name}",
            component="modes",
            metadata={"key": key.key, "mode": mode.name},
        ):
            result = mode.handle_key(key)
        self._apply(mode, result)
        if result.replay is not None:
            return self.handle_key(result.replay)
        return result

    def arm_timeout(self, mode_name: str, timeout_ms: int) -> None:
        deadline = self._clock() + timeout_ms / 1000.0
        self._lookahead = Lookahead(mode_name, deadline)

    def cancel_timeout(self, mode_name: Optional[str] = None) -> None:
        if self._lookahead and mode_name in (None, self._lookahead.mode):
            self._lookahead = None

    def pending_timeout_s(self) -> Optional[float]:
        """Seconds left before the buffered sequence expires, if one is buffered."""

        if self._lookahead is None:
            return None
        return max(0.0, self._lookahead.deadline - self._clock())

    def process_timeouts(self) -> Dict[str, ModeResult]:
        lookahead = self._lookahead
        if lookahead is None or lookahead.deadline > self._clock():
            return {}
        return {lookahead.mode: self._expire(lookahead)}

    def force_timeout(self, mode_name: Optional[str] = None) -> Dict[str, ModeResult]:
        """Expire the buffered sequence now (only if it belongs to ``mode_name``)."""

        lookahead = self._lookahead
        if lookahead is None or mode_name not in (None, lookahead.mode):
            return {}
        return {lookahead.mode: self._expire(lookahead)}

    def _expire(self, lookahead: Lookahead) -> ModeResult:
        self._lookahead = None
        mode = self._modes[lookahead.mode]
        with telemetry.span(
            f"mode_timeout::{mode.name}",
            component="modes",
            metadata={"mode": mode.name},
        ):
            result = mode.handle_timeout()
        self._apply(mode, result)
        return result

    def _apply(self, mode: Mode, result: ModeResult) -> None:
        if result.timeout_ms:
            self.arm_timeout(mode.name, result.timeout_ms)
        else:
            self.cancel_timeout(mode.name)
        if result.switch_to:
            self.switch_mode(result.switch_to)


__all__ = ["ModeManager", "Lookahead"]
