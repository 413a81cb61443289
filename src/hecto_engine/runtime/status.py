"""Timed single-line status messages."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional


class StatusKind(str, Enum):
    INFO = "info"
    FILE_UNREADABLE = "file_unreadable"
    SAVE_FAILED = "save_failed"
    NO_FILENAME = "no_filename"
    INVALID_COMMAND = "invalid_command"


@dataclass(frozen=True, slots=True)
class StatusMessage:
    text: str
    kind: StatusKind = StatusKind.INFO
    created_at: float = field(default_factory=time.monotonic)

    def is_visible(self, now: float, timeout_s: float) -> bool:
        return now - self.created_at < timeout_s


class StatusLine:
    """Holds the latest message; a new one always replaces the old."""

    def __init__(
        self,
        *,
        timeout_s: float = 5.0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.timeout_s = timeout_s
        self._clock = clock
        self._message: Optional[StatusMessage] = None

    @property
    def message(self) -> Optional[StatusMessage]:
        return self._message

    def post(self, text: str, kind: StatusKind = StatusKind.INFO) -> StatusMessage:
        self._message = StatusMessage(text=text, kind=kind, created_at=self._clock())
        return self._message

    def visible_text(self) -> str:
        message = self._message
        if message is None or not message.is_visible(self._clock(), self.timeout_s):
            return ""
        return message.text


__all__ = ["StatusKind", "StatusMessage", "StatusLine"]
