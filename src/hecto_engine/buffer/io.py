"""Line-oriented file reader and writer used by ``Document``."""

from __future__ import annotations

from typing import Iterable, List, Protocol


class LineReader(Protocol):
    def __call__(self, path: str) -> List[str]: ...


class LineWriter(Protocol):
    def __call__(self, path: str, lines: Iterable[str]) -> None: ...


def strip_terminator(line: str) -> str:
    if line.endswith("\n"):
        line = line[:-1]
    if line.endswith("\r"):
        line = line[:-1]
    return line


def read_lines(path: str) -> List[str]:
    """Return the file's lines without their terminators."""

    with open(path, "r", encoding="utf-8", newline="") as handle:
        return [strip_terminator(line) for line in handle]


def write_lines(path: str, lines: Iterable[str]) -> None:
    """Truncate ``path`` and write every line followed by ``\\n``."""

    with open(path, "w", encoding="utf-8", newline="\n") as handle:
        for line in lines:
            handle.write(line)
            handle.write("\n")


__all__ = ["LineReader", "LineWriter", "read_lines", "write_lines", "strip_terminator"]
