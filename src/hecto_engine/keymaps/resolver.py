"""Trie-based keymap resolution."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Literal, Mapping, Optional, Sequence

from hecto_engine.runtime.telemetry import span

from .models import ActionRef, Binding
from .registry import KeymapRegistry


class _Node:
    __slots__ = ("bindings", "children")

    def __init__(self) -> None:
        self.bindings: List[Binding] = []
        self.children: Dict[str, _Node] = {}

    def descendants(self) -> List["_Node"]:
        found: List[_Node] = []
        stack = list(self.children.values())
        while stack:
            node = stack.pop()
            found.append(node)
            stack.extend(node.children.values())
        return found


def _build_trie(bindings: Sequence[Binding]) -> _Node:
    root = _Node()
    for binding in bindings:
        node = root
        for token in binding.tokens:
            node = node.children.setdefault(token, _Node())
        node.bindings.append(binding)
    return root


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()
    timeout_ms: Optional[int] = None


class KeymapResolver:
    """Walks a per-mode trie of the registry's bindings.

    A sequence that is both a complete binding and the prefix of a longer
    one (``g`` next to ``g g``) resolves as ``pending`` so the caller can
    wait for the next key; passing ``exact=True`` (used once the lookahead
    expires) returns the shorter binding instead.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._tries: Dict[str, _Node] = {}
        self._built_at = -1

    def resolve(
        self,
        mode: str,
        tokens: Sequence[str],
        *,
        context: Optional[Mapping[str, bool]] = None,
        exact: bool = False,
    ) -> ResolutionResult:
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": mode, "length": len(tokens)},
        ) as handle:
            result = self._walk(mode, tuple(tokens), context or {}, exact)
            handle.add_metadata("status", result.status)
            if result.match is not None:
                handle.add_metadata("binding_id", result.match.binding.id)
            return result

    def _walk(
        self,
        mode: str,
        tokens: tuple[str, ...],
        flags: Mapping[str, bool],
        exact: bool,
    ) -> ResolutionResult:
        node = self._trie(mode)
        for consumed, token in enumerate(tokens):
            if token not in node.children:
                return ResolutionResult(status="miss", consumed=consumed)
            node = node.children[token]

        if node.children and not exact:
            return ResolutionResult(
                status="pending",
                consumed=len(tokens),
                next_expected=tuple(sorted(node.children)),
                timeout_ms=self._pending_timeout(node),
            )

        match = self._best_match(node, flags)
        if match is None:
            return ResolutionResult(status="miss", consumed=len(tokens))
        return ResolutionResult(status="match", match=match, consumed=len(tokens))

    def _trie(self, mode: str) -> _Node:
        revision = self._registry.revision()
        if revision != self._built_at:
            self._tries.clear()
            self._built_at = revision
        if mode not in self._tries:
            self._tries[mode] = _build_trie(list(self._registry.iter_bindings(mode)))
        return self._tries[mode]

    def _best_match(
        self, node: _Node, flags: Mapping[str, bool]
    ) -> Optional[ResolutionMatch]:
        candidates = [binding for binding in node.bindings if binding.allows(flags)]
        if not candidates:
            return None
        binding = min(candidates, key=lambda b: (-b.priority, b.id))
        return ResolutionMatch(binding, self._registry.get_action(binding.action_id))

    def _pending_timeout(self, node: _Node) -> Optional[int]:
        """Shortest lookahead among the bindings that could still complete."""

        timeouts = [
            binding.sequence.timeout_ms
            for child in node.descendants()
            for binding in child.bindings
        ]
        return min(timeouts, default=None)


__all__ = ["KeymapResolver", "ResolutionResult", "ResolutionMatch"]
