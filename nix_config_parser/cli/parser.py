"""Argument parsing for the ``nix-config-parser`` command."""

from __future__ import annotations

import argparse


def with_file_argument(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    """Add the optional configuration file plus the options that affect parsing."""
    parser.add_argument(
        "file",
        nargs="?",
        default=None,
        help="nix.conf to read ('-' for stdin, default: the system nix.conf)",
    )
    parser.add_argument(
        "--builtins",
        action="store_true",
        help="seed built-in settings from the environment before parsing",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="fail on malformed lines instead of reporting them",
    )
    return parser


def _with_json_flag(parser: argparse.ArgumentParser) -> argparse.ArgumentParser:
    parser.add_argument("--json", action="store_true", help="print settings as JSON")
    return parser


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nix-config-parser",
        description="Parse nix.conf files, following include directives.",
    )
    parser.add_argument(
        "--color",
        choices=("auto", "always", "never"),
        default="auto",
        help="highlight output (default: when writing to a terminal)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log debug messages to stderr"
    )
    subparsers = parser.add_subparsers(dest="command")

    show = subparsers.add_parser("show", help="print every setting")
    _with_json_flag(with_file_argument(show))

    get = subparsers.add_parser("get", help="print the value of one setting")
    get.add_argument("key", help="setting name")
    with_file_argument(get)

    check = subparsers.add_parser(
        "check", help="report whether a file parses without diagnostics"
    )
    with_file_argument(check)

    builtins = subparsers.add_parser(
        "builtins", help="print the built-in settings derived from the environment"
    )
    _with_json_flag(builtins)

    return parser
