"""Split raw ``nix.conf`` text into logical lines."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass(frozen=True, slots=True)
class LogicalLine:
    """A trimmed, comment-free line; ``lineno`` is where it started."""

    text: str
    lineno: int


def _physical_lines(content: str) -> list[str]:
    lines = content.split("\n")
    # A final newline terminates the last line rather than opening a new one.
    if lines and lines[-1] == "":
        lines.pop()
    return [line.removesuffix("\r") for line in lines]


def _strip_comment(line: str) -> str:
    pos = line.find("#")
    if pos == -1:
        return line
    return line[:pos].rstrip()


def _continues(line: str) -> bool:
    """Only an odd run of trailing backslashes escapes the newline."""
    trailing = len(line) - len(line.rstrip("\\"))
    return trailing % 2 == 1


def logical_lines(content: str) -> Iterator[LogicalLine]:
    """Yield the non-empty logical lines of *content* in order."""
    pending: list[str] = []
    start = 1
    for lineno, physical in enumerate(_physical_lines(content), start=1):
        if not pending:
            start = lineno
        line = _strip_comment(physical)
        if _continues(line):
            pending.append(line[:-1])
            continue
        pending.append(line)
        text = "".join(pending).strip()
        pending = []
        if text:
            yield LogicalLine(text=text, lineno=start)

    if pending:
        # Continuation at end of input: keep the backslash as written.
        text = ("".join(pending) + "\\").strip()
        if text:
            yield LogicalLine(text=text, lineno=start)
