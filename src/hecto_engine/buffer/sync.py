"""Read-only snapshot handed to render collaborators."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .state import Position


@dataclass(frozen=True, slots=True)
class DocumentMirror:
    """Host-friendly view of everything a renderer needs for one frame.

    ``rows`` holds only the lines inside the viewport, already cut to the
    viewport width on grapheme boundaries; ``cursor`` is relative to the
    document, ``screen_cursor`` relative to the viewport.
    """

    rows: tuple[str, ...]
    cursor: Position
    offset: Position
    mode: str
    line_count: int
    filename: Optional[str] = None
    status: str = ""
    status_bar: str = ""
    command_text: str = ""
    attributes: dict[str, str] = field(default_factory=dict)

    @property
    def text(self) -> str:
        return "\n".join(self.rows)

    @property
    def screen_cursor(self) -> Position:
        return Position(
            max(0, self.cursor.x - self.offset.x),
            max(0, self.cursor.y - self.offset.y),
        )


__all__ = ["DocumentMirror"]
