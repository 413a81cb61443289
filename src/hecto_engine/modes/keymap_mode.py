"""Keymap resolution loop shared by every concrete mode."""

from __future__ import annotations

from dataclasses import replace
from typing import List, Optional, Sequence

from hecto_engine.keymaps.resolver import ResolutionMatch
from hecto_engine.runtime import telemetry

from .base_mode import KeyInput, Mode, ModeContext, ModeResult
from .keymap_helpers import key_to_token, keymap_flags, require_keymap_resolver


class KeymapMode(Mode):
    """Resolves keys through the keymap and defers misses to ``handle_unbound``.

    When a buffered prefix (``g``) is followed by a key that does not extend
    it, the prefix runs as its own binding first and the new key is then
    handled from scratch.
    """

    def __init__(
        self,
        context: ModeContext,
        *,
        default_pending_timeout_ms: Optional[int] = None,
    ) -> None:
        super().__init__(context)
        self.logger = telemetry.get_logger(f"hecto_engine.modes.{self.name}")
        self._resolver = require_keymap_resolver(context)
        self._flags = keymap_flags(context)
        self._pending: List[str] = []
        self._default_timeout_ms = (
            default_pending_timeout_ms or context.config.sequence_timeout_ms
        )

    @property
    def pending(self) -> tuple[str, ...]:
        return tuple(self._pending)

    def on_exit(self, next_mode: str | None) -> None:
        del next_mode
        self._pending.clear()

    def handle_key(self, key: KeyInput) -> ModeResult:
        self._pending.append(key_to_token(key))
        result = self._resolver.resolve(
            self.name, tuple(self._pending), context=self._flags
        )

        if result.status == "match" and result.match:
            self._pending.clear()
            return self._execute_match(result.match)

        if result.status == "pending":
            return ModeResult(
                consumed=True,
                status="pending",
                message="awaiting_sequence",
                timeout_ms=result.timeout_ms or self._default_timeout_ms,
            )

        prefix = tuple(self._pending[:-1])
        self._pending.clear()
        if prefix:
            flushed = self._flush(prefix)
            if flushed is not None and flushed.switch_to:
                return replace(flushed, replay=key)
            return self.handle_key(key)
        outcome = self.handle_unbound(key)
        self.context.cursor.clamp_to(self.context.document)
        return outcome

    def handle_unbound(self, key: KeyInput) -> ModeResult:
        del key
        return ModeResult(consumed=False, status="miss", message="unhandled")

    def handle_timeout(self) -> ModeResult:
        if not self._pending:
            return ModeResult(consumed=False, status="timeout")

        tokens = tuple(self._pending)
        self._pending.clear()
        flushed = self._flush(tokens)
        if flushed is not None:
            return flushed
        return ModeResult(consumed=False, status="timeout", message="pending_timeout")

    def _flush(self, tokens: Sequence[str]) -> Optional[ModeResult]:
        result = self._resolver.resolve(
            self.name, tokens, context=self._flags, exact=True
        )
        if result.status == "match" and result.match:
            return self._execute_match(result.match)
        return None

    def _execute_match(self, match: ResolutionMatch) -> ModeResult:
        with telemetry.span(
            "keymaps::execute",
            component="keymaps",
            metadata={"binding_id": match.binding.id, "action": match.action.id},
        ):
            outcome = match.action(self.context, match)
        self.context.cursor.clamp_to(self.context.document)

        if isinstance(outcome, ModeResult):
            return outcome
        return ModeResult(consumed=True)


__all__ = ["KeymapMode"]
