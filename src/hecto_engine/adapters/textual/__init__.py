"""Textual host: renders the editor mirror and feeds key events back in.

``app`` imports Textual itself; the controller does not, so it can be
driven from tests without a running application.
"""

from .controller import TextualEditorAdapter, TextualUIHooks

__all__ = ["TextualEditorAdapter", "TextualUIHooks"]
