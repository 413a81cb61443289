"""Keymap registry storing actions and the bindings that trigger them."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Optional

from hecto_engine.runtime.telemetry import span

from .models import ActionRef, Binding


@dataclass(slots=True)
class RegistryStats:
    action_count: int
    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a binding would shadow another one in the same context."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        self.binding = binding
        self.conflicts = tuple(conflicts)
        names = ", ".join(existing.id for existing in self.conflicts)
        super().__init__(f"Binding '{binding.id}' conflicts with {names}")


def _shadows(left: Binding, right: Binding) -> bool:
    """Same mode, same keys, and no flag state that tells them apart.

    A gated binding never conflicts with an ungated one; two gated
    bindings conflict only when they require exactly the same flags.
    """

    return (
        left.mode == right.mode
        and left.tokens == right.tokens
        and left.flags() == right.flags()
    )


class KeymapRegistry:
    """Actions by id plus bindings by id, in registration order.

    ``revision()`` increases on every binding change so resolvers can tell
    when their cached tries went stale.
    """

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def has_action(self, action_id: str) -> bool:
        return action_id in self._actions

    def get_action(self, action_id: str) -> ActionRef:
        if action_id not in self._actions:
            raise KeyError(f"Action '{action_id}' is not registered")
        return self._actions[action_id]

    def get_binding(self, binding_id: str) -> Binding:
        if binding_id not in self._bindings:
            raise KeyError(f"Binding '{binding_id}' is not registered")
        return self._bindings[binding_id]

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        if action.id in self._actions and not replace:
            raise ValueError(f"Action '{action.id}' already registered")
        self._actions[action.id] = action
        return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        """Add ``binding``; with ``replace`` it evicts same-id or shadowed bindings."""

        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action "
                    f"'{binding.action_id}'"
                )
            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            conflicts = self.detect_conflicts(binding)
            if conflicts:
                handle.add_metadata("conflicts", [c.id for c in conflicts])
                if not replace:
                    raise KeymapConflictError(binding, conflicts)
                for existing in conflicts:
                    del self._bindings[existing.id]

            self._bindings[binding.id] = binding
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.pop(binding_id, None)
        if binding is not None:
            self._revision += 1
        return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        for binding in self._bindings.values():
            if mode is None or binding.mode == mode:
                yield binding

    def detect_conflicts(self, binding: Binding) -> List[Binding]:
        return [
            existing
            for existing in self._bindings.values()
            if existing.id != binding.id and _shadows(existing, binding)
        ]

    def override_sequence_timeouts(
        self,
        *,
        timeout_ms: int,
        mode: Optional[str] = None,
        binding_ids: Optional[Iterable[str]] = None,
    ) -> None:
        """Rewrite the lookahead of every binding in ``mode`` (or in ``binding_ids``)."""

        if timeout_ms <= 0:
            raise ValueError("timeout_ms must be positive")
        if binding_ids is None:
            targets = [binding.id for binding in self.iter_bindings(mode)]
        else:
            targets = [self.get_binding(binding_id).id for binding_id in binding_ids]
        if not targets:
            return

        for binding_id in targets:
            binding = self._bindings[binding_id]
            self._bindings[binding_id] = replace(
                binding, sequence=binding.sequence.with_timeout(timeout_ms)
            )
        self._revision += 1

    def stats(self) -> RegistryStats:
        return RegistryStats(
            action_count=len(self._actions),
            binding_count=len(self._bindings),
            modes=tuple(sorted({binding.mode for binding in self._bindings.values()})),
        )


__all__ = ["KeymapRegistry", "KeymapConflictError", "RegistryStats"]
