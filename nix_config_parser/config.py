"""Read ``nix.conf`` files and strings into a :class:`NixConfig`."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

from nix_config_parser.assignment import parse_assignment
from nix_config_parser.builtin_settings import builtin_settings
from nix_config_parser.directives import (
    DEFAULT_MAX_INCLUDE_DEPTH,
    Include,
    ParseContext,
    parse_directive,
)
from nix_config_parser.exceptions import (
    ConfigFileNotFoundError,
    FailedToReadFileError,
    IllegalConfigurationError,
    IncludedFileNotFoundError,
    MalformedLine,
)
from nix_config_parser.tokenizer import LogicalLine, logical_lines

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True, eq=False)
class NixConfig(Mapping[str, str]):
    """Settings parsed from a ``nix.conf``, in the order they first appeared.

    Values are raw strings; list-valued settings stay space separated.
    """

    settings: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    diagnostics: tuple[MalformedLine, ...] = ()

    def __getitem__(self, name: str) -> str:
        return self.settings[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.settings)

    def __len__(self) -> int:
        return len(self.settings)

    def to_dict(self) -> dict[str, str]:
        return dict(self.settings)

    def rebuild(self) -> str:
        """Render the settings back to ``nix.conf`` syntax."""
        return "".join(f"{name} = {value}\n" for name, value in self.settings.items())


def read_config_file(path: Path) -> str:
    """Read *path* in one go, mapping failures onto our error types."""
    logger.debug("Reading %s", path)
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigFileNotFoundError(path) from None
    except (OSError, UnicodeDecodeError) as exc:
        raise FailedToReadFileError(path, exc) from exc


@dataclass(slots=True)
class _Reader:
    """Accumulates settings across a file and everything it includes."""

    strict: bool = False
    settings: dict[str, str] = field(default_factory=dict)
    diagnostics: list[MalformedLine] = field(default_factory=list)

    def read(self, content: str, context: ParseContext) -> None:
        for line in logical_lines(content):
            self._dispatch(line, context)

    def _dispatch(self, line: LogicalLine, context: ParseContext) -> None:
        try:
            include = parse_directive(line.text)
            if include is None:
                parse_assignment(line.text).apply(self.settings)
        except ValueError as exc:
            self._malformed(line, str(exc), context)
            return
        if include is not None:
            self._include(include, context)

    def _include(self, include: Include, context: ParseContext) -> None:
        target = context.resolve(include.target)
        try:
            content = read_config_file(target)
        except ConfigFileNotFoundError:
            if include.ignore_missing:
                logger.debug("Skipping missing include %s", target)
                return
            raise IncludedFileNotFoundError(target, context.origin) from None
        nested = context.enter(target)
        logger.debug("Including %s from %s", target, context.origin or "<string>")
        self.read(content, nested)

    def _malformed(self, line: LogicalLine, reason: str, context: ParseContext) -> None:
        malformed = MalformedLine(
            text=line.text, lineno=line.lineno, reason=reason, path=context.origin
        )
        if self.strict:
            raise IllegalConfigurationError(malformed)
        logger.warning("Ignoring malformed line %s", malformed)
        self.diagnostics.append(malformed)

    def result(self) -> NixConfig:
        return NixConfig(
            settings=MappingProxyType(dict(self.settings)),
            diagnostics=tuple(self.diagnostics),
        )


def _reader(
    use_builtins: bool, environ: Mapping[str, str] | None, strict: bool
) -> _Reader:
    reader = _Reader(strict=strict)
    if use_builtins:
        reader.settings.update(builtin_settings(environ))
    return reader


def parse_string(
    content: str,
    base_directory: str | os.PathLike[str] | None = None,
    *,
    origin: str | os.PathLike[str] | None = None,
    use_builtins: bool = False,
    environ: Mapping[str, str] | None = None,
    strict: bool = False,
    max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
) -> NixConfig:
    """Parse ``nix.conf`` text.

    Relative includes resolve against *base_directory*, falling back to the
    directory of *origin* and then the working directory. *origin* names the
    text's source in errors and diagnostics.
    """
    origin_path = Path(origin) if origin is not None else None
    if base_directory is None:
        base_directory = origin_path.parent if origin_path else Path.cwd()
    context = ParseContext(
        base_directory=Path(base_directory),
        origin=origin_path,
        chain=(origin_path.resolve(),) if origin_path else (),
        max_depth=max_include_depth,
    )
    reader = _reader(use_builtins, environ, strict)
    reader.read(content, context)
    return reader.result()


def parse_file(
    path: str | os.PathLike[str],
    *,
    use_builtins: bool = False,
    environ: Mapping[str, str] | None = None,
    strict: bool = False,
    max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH,
) -> NixConfig:
    """Parse the ``nix.conf`` at *path* along with everything it includes."""
    path = Path(path)
    context = ParseContext(
        base_directory=path.parent, max_depth=max_include_depth
    ).enter(path, included=False)
    content = read_config_file(path)
    reader = _reader(use_builtins, environ, strict)
    reader.read(content, context)
    return reader.result()
