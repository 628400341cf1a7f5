"""
nix-config-parser

A Python library for reading Nix configuration files (nix.conf), following
include directives and the append operator the way Nix itself does.
"""

from nix_config_parser.builtin_settings import builtin_settings
from nix_config_parser.config import NixConfig, parse_file, parse_string
from nix_config_parser.exceptions import (
    ConfigFileNotFoundError,
    CyclicIncludeError,
    FailedToReadFileError,
    IllegalConfigurationError,
    IncludedFileNotFoundError,
    IncludeDepthExceededError,
    MalformedLine,
    NixConfigError,
)

__all__ = [
    "ConfigFileNotFoundError",
    "CyclicIncludeError",
    "FailedToReadFileError",
    "IllegalConfigurationError",
    "IncludeDepthExceededError",
    "IncludedFileNotFoundError",
    "MalformedLine",
    "NixConfig",
    "NixConfigError",
    "builtin_settings",
    "parse_file",
    "parse_string",
]
