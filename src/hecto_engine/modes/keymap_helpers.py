"""Accessors for the shared state modes keep in ``ModeContext.extras``."""

from __future__ import annotations

from typing import MutableMapping, cast

from hecto_engine.keymaps.models import make_token
from hecto_engine.keymaps.resolver import KeymapResolver

from .base_mode import KeyInput, ModeContext


def key_to_token(key: KeyInput) -> str:
    """Token the keymaps know this key by.

    Shift is dropped for single printable characters, since ``A`` already
    says what ``shift+a`` would.
    """

    modifiers = key.modifiers
    if key.text and len(key.text) == 1:
        modifiers = tuple(mod for mod in modifiers if mod.lower() != "shift")
    return make_token(key.key, modifiers)


def require_keymap_resolver(context: ModeContext) -> KeymapResolver:
    resolver = context.extras.get("keymap_resolver")
    if not isinstance(resolver, KeymapResolver):
        raise RuntimeError("ModeContext.extras missing 'keymap_resolver'")
    return resolver


def keymap_flags(context: ModeContext) -> MutableMapping[str, bool]:
    """Flags consulted by ``when`` clauses, e.g. ``command_active``."""

    flags = context.extras.setdefault("keymap_flags", {})
    return cast(MutableMapping[str, bool], flags)


def command_state(context: ModeContext) -> MutableMapping[str, object]:
    """The command line being typed: ``{"text": str, "status": StatusKind | None}``."""

    state = cast(
        MutableMapping[str, object], context.extras.setdefault("command_state", {})
    )
    state.setdefault("text", "")
    state.setdefault("status", None)
    return state


__all__ = [
    "key_to_token",
    "require_keymap_resolver",
    "keymap_flags",
    "command_state",
]
