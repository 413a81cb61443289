"""Exceptions raised by documents and their file collaborators."""

from __future__ import annotations

from typing import Optional


class DocumentError(RuntimeError):
    """Base class for failures the editor converts into status messages."""

    def __init__(self, message: str, *, path: Optional[str] = None) -> None:
        super().__init__(message)
        self.path = path


class FileUnreadableError(DocumentError):
    """Raised when a file cannot be opened or decoded."""


class NoFilenameError(DocumentError):
    """Raised when saving a document that is not bound to a file."""

    def __init__(self) -> None:
        super().__init__("No file name bound to the document")


class SaveFailedError(DocumentError):
    """Raised when writing the document out fails."""


__all__ = [
    "DocumentError",
    "FileUnreadableError",
    "NoFilenameError",
    "SaveFailedError",
]
