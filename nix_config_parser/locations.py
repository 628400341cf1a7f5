"""Where Nix looks for its configuration files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

CONFIG_FILE_NAME = "nix.conf"
DEFAULT_SYSTEM_CONFIG_DIR = Path("/etc/nix")


def _environ(environ: Mapping[str, str] | None) -> Mapping[str, str]:
    return os.environ if environ is None else environ


def system_config_dir(environ: Mapping[str, str] | None = None) -> Path:
    value = _environ(environ).get("NIX_CONF_DIR")
    return Path(value) if value else DEFAULT_SYSTEM_CONFIG_DIR


def system_config_file(environ: Mapping[str, str] | None = None) -> Path:
    return system_config_dir(environ) / CONFIG_FILE_NAME


def user_config_files(environ: Mapping[str, str] | None = None) -> list[Path]:
    """List user configuration files, highest priority first.

    ``NIX_USER_CONF_FILES`` replaces the XDG search entirely when set.
    """
    env = _environ(environ)
    explicit = env.get("NIX_USER_CONF_FILES")
    if explicit:
        return [Path(entry) for entry in explicit.split(":") if entry]

    config_home = env.get("XDG_CONFIG_HOME")
    if config_home:
        home = Path(config_home)
    else:
        home = Path(env.get("HOME", "~")).expanduser() / ".config"
    config_dirs = env.get("XDG_CONFIG_DIRS") or "/etc/xdg"

    directories = [home] + [Path(entry) for entry in config_dirs.split(":") if entry]
    return [directory / "nix" / CONFIG_FILE_NAME for directory in directories]
