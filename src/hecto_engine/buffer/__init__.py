"""Grapheme-aware line and document model."""

from .document import DeleteOutcome, DeleteResult, Document
from .errors import (
    DocumentError,
    FileUnreadableError,
    NoFilenameError,
    SaveFailedError,
)
from .io import read_lines, write_lines
from .line import Line
from .state import CursorState, Position
from .sync import DocumentMirror

__all__ = [
    "Line",
    "Document",
    "DeleteOutcome",
    "DeleteResult",
    "Position",
    "CursorState",
    "DocumentMirror",
    "DocumentError",
    "FileUnreadableError",
    "NoFilenameError",
    "SaveFailedError",
    "read_lines",
    "write_lines",
]
