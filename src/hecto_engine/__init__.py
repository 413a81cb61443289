"""Grapheme-aware modal text-editing engine."""

__all__ = [
    "adapters",
    "actions",
    "buffer",
    "config",
    "editor",
    "keymaps",
    "modes",
    "runtime",
]

__version__ = "0.1.0"
