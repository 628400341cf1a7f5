from pathlib import Path

import pytest

from nix_config_parser.directives import (
    Include,
    IncludeMode,
    ParseContext,
    parse_directive,
)
from nix_config_parser.exceptions import CyclicIncludeError, IncludeDepthExceededError


@pytest.mark.parametrize(
    "text, expected",
    [
        ("include extra.conf", Include(IncludeMode.REQUIRED, "extra.conf")),
        ("include-ignore /etc/nix/x.conf", Include(IncludeMode.OPTIONAL, "/etc/nix/x.conf")),
        ("!include machine.conf", Include(IncludeMode.OPTIONAL, "machine.conf")),
        ("include\tspaced name.conf", Include(IncludeMode.REQUIRED, "spaced name.conf")),
    ],
)
def test_parse_directive(text, expected):
    """Ensure every include spelling is recognized."""
    assert parse_directive(text) == expected


@pytest.mark.parametrize(
    "text",
    ["cores = 4", "include = foo", "include += foo", "include=foo", "includes x"],
)
def test_parse_directive_leaves_assignments_alone(text):
    """Ensure settings that merely start with 'include' are not directives."""
    assert parse_directive(text) is None


def test_parse_directive_requires_a_path():
    """Ensure a bare keyword is reported as malformed."""
    with pytest.raises(ValueError, match="missing path after 'include'"):
        parse_directive("include")


def test_ignore_missing():
    """Ensure only optional includes ignore missing files."""
    assert Include(IncludeMode.OPTIONAL, "x").ignore_missing
    assert not Include(IncludeMode.REQUIRED, "x").ignore_missing


def test_resolve_relative_and_absolute(tmp_path):
    """Ensure relative targets resolve against the including directory."""
    context = ParseContext(base_directory=tmp_path)
    assert context.resolve("extra.conf") == tmp_path / "extra.conf"
    assert context.resolve("/etc/nix/nix.conf") == Path("/etc/nix/nix.conf")


def test_enter_moves_base_directory(tmp_path):
    """Ensure nested includes resolve against the included file's directory."""
    nested = tmp_path / "conf.d" / "extra.conf"
    context = ParseContext(base_directory=tmp_path).enter(nested)
    assert context.base_directory == tmp_path / "conf.d"
    assert context.origin == nested
    assert context.chain == (nested.resolve(),)
    assert context.depth == 1


def test_enter_detects_cycles(tmp_path):
    """Ensure revisiting an open file raises with the cycle."""
    a = tmp_path / "a.conf"
    b = tmp_path / "b.conf"
    context = ParseContext(base_directory=tmp_path).enter(a, included=False).enter(b)
    with pytest.raises(CyclicIncludeError) as excinfo:
        context.enter(a)
    assert excinfo.value.chain == (a.resolve(), b.resolve(), a.resolve())


def test_enter_bounds_depth(tmp_path):
    """Ensure nesting deeper than the limit fails."""
    context = ParseContext(base_directory=tmp_path, max_depth=2)
    context = context.enter(tmp_path / "1.conf").enter(tmp_path / "2.conf")
    with pytest.raises(IncludeDepthExceededError, match="maximum depth of 2"):
        context.enter(tmp_path / "3.conf")
