from __future__ import annotations

import os
import subprocess
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent.parent


def run_cli(nix_conf: str, command: list[str], cwd: Path | None = None) -> str:
    """Run the command-line interface on nix.conf text passed through stdin."""
    cli_args = [sys.executable, "-m", "nix_config_parser", *command]

    env = os.environ.copy()
    pythonpath_entries = [str(PROJECT_ROOT)]
    if env.get("PYTHONPATH"):
        pythonpath_entries.append(env["PYTHONPATH"])
    env["PYTHONPATH"] = os.pathsep.join(pythonpath_entries)

    result = subprocess.run(
        cli_args,
        input=nix_conf,
        text=True,
        capture_output=True,
        cwd=cwd or PROJECT_ROOT,
        check=False,
        env=env,
    )

    if result.returncode != 0:
        stderr = result.stderr.strip()
        stdout = result.stdout.strip()
        details = stderr or stdout or f"exit code {result.returncode}"
        raise RuntimeError(f"nix-config-parser {' '.join(command)} failed: {details}")

    return result.stdout.rstrip("\n")
