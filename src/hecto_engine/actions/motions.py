"""Cursor motions bound in Normal mode (and reused by Insert-mode arrows).

Word motions treat any run of non-whitespace graphemes as a word:

* ``w`` skips the rest of the word under the cursor and the whitespace
  after it, landing on the first grapheme of the next word. With no word
  left on the line it moves to the first non-blank of the next line, or to
  the end of the last line.
* ``b`` skips whitespace to the left, then the word before it, landing on
  that word's first grapheme. With nothing but whitespace to the left it
  continues from the end of the previous line, stopping at (0, 0).
"""

from __future__ import annotations

from typing import Tuple

from hecto_engine.buffer import Document
from hecto_engine.modes.base_mode import ModeContext, ModeResult


def _moved() -> ModeResult:
    return ModeResult(consumed=True, status="motion")


def _is_space(cluster: str | None) -> bool:
    return cluster is not None and cluster.isspace()


def _place(context: ModeContext, x: int, y: int) -> ModeResult:
    context.cursor.move_to(x, y)
    context.cursor.clamp_to(context.document)
    context.cursor.sticky_column = context.cursor.x
    return _moved()


def _place_vertical(context: ModeContext, y: int) -> ModeResult:
    document = context.document
    cursor = context.cursor
    y = max(0, min(y, document.line_count - 1))
    cursor.move_vertical(y, min(cursor.sticky_column, document.width(y)))
    return _moved()


def next_word_start(document: Document, x: int, y: int) -> Tuple[int, int]:
    line = document.line(y)
    if line is None:
        return (0, 0)
    width = line.width()
    i = max(0, x)
    while i < width and not _is_space(line.grapheme_at(i)):
        i += 1
    while i < width and _is_space(line.grapheme_at(i)):
        i += 1
    if i < width:
        return (i, y)
    if y + 1 < document.line_count:
        return (document.line(y + 1).first_non_blank(), y + 1)  # type: ignore[union-attr]
    return (width, y)


def previous_word_start(document: Document, x: int, y: int) -> Tuple[int, int]:
    while True:
        line = document.line(y)
        if line is None:
            return (0, 0)
        i = max(0, min(x, line.width()))
        while i > 0 and _is_space(line.grapheme_at(i - 1)):
            i -= 1
        if i > 0:
            while i > 0 and not _is_space(line.grapheme_at(i - 1)):
                i -= 1
            return (i, y)
        if y == 0:
            return (0, 0)
        y -= 1
        x = document.width(y)


def move_left(context: ModeContext, match) -> ModeResult:
    del match
    x, y = context.cursor.position.as_tuple()
    if x > 0:
        return _place(context, x - 1, y)
    if y > 0:
        return _place(context, context.document.width(y - 1), y - 1)
    return _place(context, 0, 0)


def move_right(context: ModeContext, match) -> ModeResult:
    del match
    x, y = context.cursor.position.as_tuple()
    document = context.document
    if x < document.width(y):
        return _place(context, x + 1, y)
    if y < document.line_count - 1:
        return _place(context, 0, y + 1)
    return _place(context, x, y)


def move_up(context: ModeContext, match) -> ModeResult:
    del match
    return _place_vertical(context, context.cursor.y - 1)


def move_down(context: ModeContext, match) -> ModeResult:
    del match
    return _place_vertical(context, context.cursor.y + 1)


def page_up(context: ModeContext, match) -> ModeResult:
    del match
    return _place_vertical(context, context.cursor.y - context.cursor.viewport_height)


def page_down(context: ModeContext, match) -> ModeResult:
    del match
    return _place_vertical(context, context.cursor.y + context.cursor.viewport_height)


def document_start(context: ModeContext, match) -> ModeResult:
    del match
    return _place_vertical(context, 0)


def document_end(context: ModeContext, match) -> ModeResult:
    del match
    return _place_vertical(context, context.document.line_count - 1)


def line_start(context: ModeContext, match) -> ModeResult:
    del match
    return _place(context, 0, context.cursor.y)


def line_end(context: ModeContext, match) -> ModeResult:
    del match
    y = context.cursor.y
    return _place(context, context.document.width(y), y)


def first_non_blank(context: ModeContext, match) -> ModeResult:
    del match
    y = context.cursor.y
    line = context.document.line(y)
    return _place(context, line.first_non_blank() if line else 0, y)


def word_forward(context: ModeContext, match) -> ModeResult:
    del match
    x, y = context.cursor.position.as_tuple()
    return _place(context, *next_word_start(context.document, x, y))


def word_backward(context: ModeContext, match) -> ModeResult:
    del match
    x, y = context.cursor.position.as_tuple()
    return _place(context, *previous_word_start(context.document, x, y))


__all__ = [
    "move_left",
    "move_right",
    "move_up",
    "move_down",
    "page_up",
    "page_down",
    "document_start",
    "document_end",
    "line_start",
    "line_end",
    "first_non_blank",
    "word_forward",
    "word_backward",
    "next_word_start",
    "previous_word_start",
]
