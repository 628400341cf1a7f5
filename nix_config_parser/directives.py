"""Include directives and the context threaded through nested includes."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from nix_config_parser.exceptions import CyclicIncludeError, IncludeDepthExceededError

DEFAULT_MAX_INCLUDE_DEPTH = 32


class IncludeMode(Enum):
    REQUIRED = "include"
    OPTIONAL = "include-ignore"


# ``!include`` is how Nix itself spells an include that may be missing.
INCLUDE_KEYWORDS: dict[str, IncludeMode] = {
    "include": IncludeMode.REQUIRED,
    "include-ignore": IncludeMode.OPTIONAL,
    "!include": IncludeMode.OPTIONAL,
}


@dataclass(frozen=True, slots=True)
class Include:
    mode: IncludeMode
    target: str

    @property
    def ignore_missing(self) -> bool:
        return self.mode is IncludeMode.OPTIONAL


def parse_directive(text: str) -> Include | None:
    """Return the include on *text*, or ``None`` if it is not a directive.

    ``include = foo`` assigns a setting named ``include`` and is left to the
    assignment parser. A keyword without a path raises ``ValueError``.
    """
    parts = text.split(maxsplit=1)
    if not parts or parts[0] not in INCLUDE_KEYWORDS:
        return None
    target = parts[1].strip() if len(parts) > 1 else ""
    if target.startswith(("=", "+=")):
        return None
    if not target:
        raise ValueError(f"missing path after '{parts[0]}'")
    return Include(mode=INCLUDE_KEYWORDS[parts[0]], target=target)


@dataclass(frozen=True, slots=True)
class ParseContext:
    """Where we are in the include tree.

    ``chain`` holds the resolved paths of every file currently being parsed,
    outermost first; ``depth`` counts nested includes only.
    """

    base_directory: Path
    origin: Path | None = None
    chain: tuple[Path, ...] = ()
    depth: int = 0
    max_depth: int = DEFAULT_MAX_INCLUDE_DEPTH

    def resolve(self, target: str) -> Path:
        """Resolve an include target against the including file's directory."""
        path = Path(target)
        if path.is_absolute():
            return path
        return self.base_directory / path

    def enter(self, path: Path, *, included: bool = True) -> ParseContext:
        """Return the context for parsing *path*, guarding against cycles."""
        resolved = path.resolve()
        if resolved in self.chain:
            start = self.chain.index(resolved)
            raise CyclicIncludeError(self.chain[start:] + (resolved,))
        depth = self.depth + 1 if included else self.depth
        if depth > self.max_depth:
            raise IncludeDepthExceededError(path, self.max_depth)
        return ParseContext(
            base_directory=path.parent,
            origin=path,
            chain=self.chain + (resolved,),
            depth=depth,
            max_depth=self.max_depth,
        )
