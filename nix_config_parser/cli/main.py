"""
Command-line front end: parse a nix.conf and print what it sets.
"""

import json
import logging
import sys
from pathlib import Path

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexers import IniLexer, JsonLexer

from nix_config_parser.builtin_settings import builtin_settings
from nix_config_parser.cli.parser import build_parser
from nix_config_parser.config import NixConfig, parse_file, parse_string
from nix_config_parser.exceptions import NixConfigError
from nix_config_parser.locations import system_config_file


def _use_color(choice: str) -> bool:
    if choice == "auto":
        return sys.stdout.isatty()
    return choice == "always"


def _emit(text: str, lexer, color: bool) -> None:
    if color:
        text = highlight(text, lexer, TerminalFormatter())
    if text and not text.endswith("\n"):
        text += "\n"
    sys.stdout.write(text)


def _emit_settings(settings: dict[str, str], as_json: bool, color: bool) -> None:
    if as_json:
        _emit(json.dumps(settings, indent=2), JsonLexer(), color)
    else:
        _emit(NixConfig(settings=settings).rebuild(), IniLexer(), color)


def _load(args) -> NixConfig:
    options = {"use_builtins": args.builtins, "strict": args.strict}
    if args.file == "-":
        return parse_string(sys.stdin.read(), Path.cwd(), **options)
    path = Path(args.file) if args.file is not None else system_config_file()
    return parse_file(path, **options)


def _report(config: NixConfig) -> None:
    for diagnostic in config.diagnostics:
        print(f"warning: {diagnostic}", file=sys.stderr)


def main(args=None) -> int:
    """Return CLI exit codes so automation can distinguish success from failure."""
    parser = build_parser()
    args = parser.parse_args(args)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.ERROR,
        format="%(levelname)s %(name)s: %(message)s",
    )
    color = _use_color(args.color)

    if args.command == "builtins":
        _emit_settings(builtin_settings(), args.json, color)
        return 0
    if args.command is None:
        parser.print_help(sys.stderr)
        return 2

    try:
        config = _load(args)
    except NixConfigError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    match args.command:
        case "show":
            _report(config)
            _emit_settings(config.to_dict(), args.json, color)
            return 0
        case "get":
            _report(config)
            value = config.get(args.key)
            if value is None:
                print(f"error: '{args.key}' is not set", file=sys.stderr)
                return 1
            print(value)
            return 0
        case "check":
            _report(config)
            if config.diagnostics:
                print("Fail")
                return 1
            print("OK")
            return 0
        case _:
            parser.print_help(sys.stderr)
            return 2
