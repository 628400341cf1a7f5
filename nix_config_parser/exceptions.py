from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


def _display(path: Path | None) -> str:
    return str(path) if path is not None else "<unknown>"


@dataclass(frozen=True, slots=True)
class MalformedLine:
    """A line that is neither an include directive nor an assignment."""

    text: str
    lineno: int
    reason: str
    path: Path | None = None

    def __str__(self) -> str:
        location = str(self.path) if self.path is not None else "<string>"
        return f"{location}:{self.lineno}: {self.reason}: {self.text}"


class NixConfigError(Exception):
    """Base class for fatal errors raised while reading a ``nix.conf``."""

    pass


class ConfigFileNotFoundError(NixConfigError, FileNotFoundError):
    def __init__(self, path: Path, message: str | None = None):
        super().__init__(message or f"file '{path}' not found")
        self.path = path


class IncludedFileNotFoundError(ConfigFileNotFoundError):
    def __init__(self, path: Path, origin: Path | None = None):
        super().__init__(
            path, f"file '{path}' included from '{_display(origin)}' not found"
        )
        self.origin = origin


class FailedToReadFileError(NixConfigError, OSError):
    def __init__(self, path: Path, reason: object):
        super().__init__(f"failed to read contents of '{path}': {reason}")
        self.path = path


class CyclicIncludeError(NixConfigError):
    """Raised when a file is included while it is still being parsed."""

    def __init__(self, chain: tuple[Path, ...]):
        super().__init__(
            "cyclic include: " + " -> ".join(str(path) for path in chain)
        )
        self.chain = chain


class IncludeDepthExceededError(NixConfigError):
    def __init__(self, path: Path, limit: int):
        super().__init__(f"including '{path}' exceeds the maximum depth of {limit}")
        self.path = path
        self.limit = limit


class IllegalConfigurationError(NixConfigError):
    """Raised for a malformed line when parsing in strict mode."""

    def __init__(self, line: MalformedLine):
        super().__init__(
            f"illegal configuration line '{line.text}' in '{_display(line.path)}'"
            f" ({line.reason})"
        )
        self.line = line
