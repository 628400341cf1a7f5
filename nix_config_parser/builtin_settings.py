"""Settings whose defaults come from the process environment.

==================  ==================================  ========
Setting             Environment                         Fallback
==================  ==================================  ========
``store``           ``NIX_REMOTE``                      ``auto``
``nix-path``        ``NIX_PATH``                        -
``cores``           ``NIX_BUILD_CORES``                 -
``ssl-cert-file``   ``NIX_SSL_CERT_FILE``,              -
                    ``SSL_CERT_FILE``
==================  ==================================  ========
"""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass
from typing import Callable, Mapping

logger = logging.getLogger(__name__)


# ``flake:``, ``channel:`` and ``scheme://`` values swallow the next colon.
_PSEUDO_URL_RE = re.compile(r"(flake:|channel:|[a-zA-Z][a-zA-Z0-9+.-]*://)")


def _search_path(value: str) -> str:
    """Turn a colon-separated ``NIX_PATH`` into nix.conf's space-separated form."""
    entries: list[str] = []
    start = 0
    while start < len(value):
        end = value.find(":", start)
        if end == -1:
            end = len(value)
        else:
            prefix_start = value.rfind("=", start, end) + 1 or start
            if _PSEUDO_URL_RE.match(value, prefix_start):
                end = value.find(":", end + 1)
                if end == -1:
                    end = len(value)
        if end > start:
            entries.append(value[start:end])
        start = end + 1
    return " ".join(entries)


@dataclass(frozen=True, slots=True)
class BuiltinSetting:
    name: str
    variables: tuple[str, ...]
    fallback: str | None = None
    convert: Callable[[str], str] | None = None

    def resolve(self, environ: Mapping[str, str]) -> str | None:
        """Return the first non-empty variable's value, else the fallback."""
        for variable in self.variables:
            value = environ.get(variable)
            if value:
                return self.convert(value) if self.convert is not None else value
        return self.fallback


BUILTIN_SETTINGS: tuple[BuiltinSetting, ...] = (
    BuiltinSetting("store", ("NIX_REMOTE",), fallback="auto"),
    BuiltinSetting("nix-path", ("NIX_PATH",), convert=_search_path),
    BuiltinSetting("cores", ("NIX_BUILD_CORES",)),
    BuiltinSetting("ssl-cert-file", ("NIX_SSL_CERT_FILE", "SSL_CERT_FILE")),
)


def builtin_settings(environ: Mapping[str, str] | None = None) -> dict[str, str]:
    """Resolve every built-in setting that has a value in *environ*."""
    if environ is None:
        environ = os.environ
    settings: dict[str, str] = {}
    for setting in BUILTIN_SETTINGS:
        value = setting.resolve(environ)
        if value is not None:
            settings[setting.name] = value
    logger.debug("Built-in settings: %s", settings)
    return settings
