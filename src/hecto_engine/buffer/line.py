"""Grapheme-indexed storage for a single line of text."""

from __future__ import annotations

from typing import List, Optional

import grapheme


def _segment(text: str) -> List[str]:
    return list(grapheme.graphemes(text))


class Line:
    """One line of text addressed by grapheme-cluster columns.

    Columns never refer to bytes or code points: ``"e\\u0301"`` is a single
    column. ``length`` is cached and recomputed by every mutator, so it
    always equals the number of clusters currently stored.
    """

    __slots__ = ("_graphemes", "length")

    def __init__(self, text: str = "") -> None:
        self._graphemes: List[str] = []
        self.length = 0
        self._set_text(text)

    def __repr__(self) -> str:
        return f"Line({self.text!r})"

    def __len__(self) -> int:
        return self.length

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Line):
            return NotImplemented
        return self._graphemes == other._graphemes

    @property
    def text(self) -> str:
        return "".join(self._graphemes)

    def width(self) -> int:
        return self.length

    def render(self, start: int, end: int) -> str:
        """Return the text covering columns ``[start, end)``.

        ``end`` is clamped to the line length first and ``start`` to ``end``
        afterwards, so any pair of integers is accepted.
        """

        end = max(0, min(end, self.length))
        start = max(0, min(start, end))
        return "".join(self._graphemes[start:end])

    def grapheme_at(self, index: int) -> Optional[str]:
        if 0 <= index < self.length:
            return self._graphemes[index]
        return None

    def insert(self, at: int, text: str) -> None:
        if not text:
            return
        if at >= self.length:
            self._set_text(self.text + text)
            return
        at = max(0, at)
        # Re-segment the whole line so combining marks join their base cluster.
        self._set_text(self.render(0, at) + text + self.render(at, self.length))

    def delete(self, at: int) -> bool:
        if at < 0 or at >= self.length:
            return False
        remaining = self._graphemes[:at] + self._graphemes[at + 1 :]
        self._set_text("".join(remaining))
        return True

    def split(self, at: int) -> "Line":
        at = max(0, min(at, self.length))
        remainder = Line(self.render(at, self.length))
        self._set_text(self.render(0, at))
        return remainder

    def append(self, other: "Line") -> None:
        if other.length:
            self._set_text(self.text + other.text)

    def leading_whitespace(self) -> int:
        count = 0
        for cluster in self._graphemes:
            if not cluster.isspace():
                break
            count += 1
        return count

    def first_non_blank(self) -> int:
        return self.leading_whitespace()

    def is_blank(self) -> bool:
        return self.leading_whitespace() == self.length

    def _set_text(self, text: str) -> None:
        self._graphemes = _segment(text)
        self.length = len(self._graphemes)


__all__ = ["Line"]
