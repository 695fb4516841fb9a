"""Shared helpers for tooltool_tooling (subprocess, manifest discovery, semver pattern).

Used by release, revision, pre_commit and build.
"""

from __future__ import annotations

import logging
import re
import subprocess
from collections.abc import Mapping, Sequence
from pathlib import Path

from tooltool_tooling.errors import EnvironmentFailure

log = logging.getLogger(__name__)

SEMVER_RE = re.compile(r"^(\d+)\.(\d+)\.(\d+)(?:-([\w.-]+))?$")

# --- Process ---


def run_command(
    cmd: Sequence[str],
    cwd: Path | None = None,
    *,
    capture: bool = True,
    env: Mapping[str, str] | None = None,
    step: str | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run cmd and return the completed process; never raises on non-zero exit.

    capture=False inherits the terminal (interactive commands like `jj desc`).
    A missing executable raises EnvironmentFailure.
    """
    argv = list(cmd)
    log.debug("run: %s (cwd=%s)", " ".join(argv), cwd)
    try:
        r = subprocess.run(
            argv,
            cwd=cwd,
            capture_output=capture,
            text=True,
            env=dict(env) if env is not None else None,
        )
    except FileNotFoundError as e:
        msg = f"{argv[0]} not found in PATH"
        raise EnvironmentFailure(msg, step=step) from e
    log.debug("exit %s: %s", r.returncode, argv[0])
    return r


def command_output(r: subprocess.CompletedProcess[str]) -> str:
    """stderr, falling back to stdout, stripped (for error messages)."""
    return ((r.stderr or "") or (r.stdout or "")).strip()


# --- Path ---


def find_cargo_tomls(
    root: Path,
    *,
    exclude: set[str] | frozenset[str] | None = None,
) -> list[Path]:
    """All Cargo.toml under root, excluding path segments in exclude (default: target, node_modules, .git)."""
    if exclude is None:
        exclude = {"target", "node_modules", ".git"}
    out: list[Path] = []
    for p in root.rglob("Cargo.toml"):
        try:
            rel = p.relative_to(root)
        except ValueError:
            continue
        if any(part in exclude for part in rel.parts):
            continue
        out.append(p)
    return sorted(out)

