"""Cursor, sticky column and viewport state tied to a Document."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .document import Document


@dataclass(frozen=True, slots=True)
class Position:
    """Grapheme column ``x`` on line ``y``."""

    x: int = 0
    y: int = 0

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)


@dataclass(slots=True)
class CursorState:
    """Mutable cursor info plus the viewport the host last reported."""

    position: Position = field(default_factory=Position)
    sticky_column: int = 0
    offset: Position = field(default_factory=Position)
    viewport_width: int = 80
    viewport_height: int = 24
    saved_position: Optional[Position] = None

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    def move_to(self, x: int, y: int) -> None:
        """Horizontal or free placement: the sticky column follows ``x``."""

        self.position = Position(max(0, x), max(0, y))
        self.sticky_column = self.position.x

    def move_vertical(self, y: int, x: int) -> None:
        """Vertical placement: the sticky column is left untouched."""

        self.position = Position(max(0, x), max(0, y))

    def clamp_to(self, document: "Document") -> None:
        """Pull the cursor back inside ``document``; the sticky column stays."""

        y = max(0, min(self.position.y, document.line_count - 1))
        x = max(0, min(self.position.x, document.width(y)))
        if (x, y) != (self.position.x, self.position.y):
            self.position = Position(x, y)

    def save_position(self) -> None:
        self.saved_position = self.position

    def restore_position(self) -> None:
        if self.saved_position is not None:
            self.position = self.saved_position
            self.saved_position = None

    def resize(self, width: int, height: int) -> None:
        self.viewport_width = max(1, width)
        self.viewport_height = max(1, height)

    def scroll(self) -> None:
        """Shift the viewport offset so the cursor stays on screen."""

        x, y = self.position.x, self.position.y
        off_x, off_y = self.offset.x, self.offset.y

        if y < off_y:
            off_y = y
        elif y >= off_y + self.viewport_height:
            off_y = y - self.viewport_height + 1

        if x < off_x:
            off_x = x
        elif x >= off_x + self.viewport_width:
            off_x = x - self.viewport_width + 1

        self.offset = Position(off_x, off_y)


__all__ = ["Position", "CursorState"]
