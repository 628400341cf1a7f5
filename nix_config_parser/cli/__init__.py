"""CLI package for the nix-config-parser entrypoints."""

from nix_config_parser.cli.main import main
from nix_config_parser.cli.parser import build_parser, with_file_argument

__all__ = ["build_parser", "main", "with_file_argument"]
