"""Declarative keymap registry and trie resolver.

The built-in bindings live in ``hecto_engine.keymaps.defaults``; it is not
imported here because it pulls in the action modules.
"""

from .models import ActionRef, Binding, KeySequence, KeyStroke, WhenClause, make_token
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "WhenClause",
    "make_token",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
