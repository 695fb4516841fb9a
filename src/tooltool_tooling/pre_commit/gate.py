"""Pre-commit gate: cargo fmt, cargo clippy -D warnings, cargo test, in that order.

Each command is a hard gate; the first non-zero exit stops the sequence.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from tooltool_tooling.config import DEFAULT_RELEASE_CONFIG
from tooltool_tooling.errors import GateFailure
from tooltool_tooling.helpers import run_command

log = logging.getLogger(__name__)


def gate_name(cmd: Sequence[str]) -> str:
    """Short name for a gate command: `cargo clippy -- ...` -> clippy."""
    if len(cmd) > 1 and not cmd[1].startswith("-"):
        return cmd[1]
    return cmd[0]


def run_gate(project_root: Path, commands: Sequence[Sequence[str]] | None = None) -> None:
    """Run each gate command with inherited output. Raises GateFailure on the first failure."""
    if commands is None:
        commands = DEFAULT_RELEASE_CONFIG["gate"]
    for cmd in commands:
        name = gate_name(cmd)
        log.info("gate: %s", " ".join(cmd))
        r = run_command(cmd, cwd=project_root, capture=False, step=name)
        if r.returncode != 0:
            msg = f"{' '.join(cmd)} exited {r.returncode}"
            raise GateFailure(msg, step=name, returncode=r.returncode)
