"""Release build with the git revision embedded: TOOL_TOOL_REVISION=<rev> cargo build --release.

The revision is passed through the child environment only; os.environ is not modified.
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from tooltool_tooling.config import load_release_config
from tooltool_tooling.errors import EnvironmentFailure, ReleaseError
from tooltool_tooling.helpers import run_command
from tooltool_tooling.release.bump import read_manifest_version
from tooltool_tooling.revision import compose_revision, full_version

log = logging.getLogger(__name__)


def binary_path(project_root: Path, binary_name: str) -> Path:
    """target/release/<binary_name>, with .exe on Windows."""
    suffix = ".exe" if os.name == "nt" and not binary_name.endswith(".exe") else ""
    return project_root / "target" / "release" / f"{binary_name}{suffix}"


def build_env(revision_env: str, revision: str, base: Mapping[str, str] | None = None) -> dict[str, str]:
    env = dict(os.environ if base is None else base)
    env[revision_env] = revision
    return env


def _human_size(n: int) -> str:
    if n < 1024:
        return f"{n}B"
    size = n / 1024
    for unit in ("K", "M"):
        if size < 1024:
            return f"{size:.1f}{unit}"
        size /= 1024
    return f"{size:.1f}G"


def build_release(project_root: Path, config: dict[str, Any]) -> tuple[Path, str]:
    """Compose revision, build, and check the binary exists. Returns (binary, full version)."""
    revision = compose_revision(project_root)
    env = build_env(config["revision_env"], revision)
    log.info("building with %s=%s", config["revision_env"], revision)
    r = run_command(["cargo", "build", "--release"], cwd=project_root, capture=False, env=env, step="build")
    if r.returncode != 0:
        msg = f"cargo build --release exited {r.returncode}"
        raise EnvironmentFailure(msg, step="build", returncode=r.returncode)

    binary = binary_path(project_root, config["binary_name"])
    if not binary.is_file():
        msg = f"{binary} not found after build"
        raise EnvironmentFailure(msg, step="artifact")
    version = read_manifest_version(project_root, config["manifest"])
    return binary, full_version(version, revision)


def run(project_root: Path, *, config_path: Path | None = None) -> int:
    """Build and print the full version to stdout. Returns 0 or the failing exit code."""
    try:
        cfg = load_release_config(project_root, config_path)
        binary, version = build_release(project_root, cfg)
    except ReleaseError as e:
        print(f"error: {e}", file=sys.stderr)
        return e.returncode
    print(f"{binary} ({_human_size(binary.stat().st_size)})", file=sys.stderr)
    print(version)
    return 0
