"""Build revision string from git: <YYYYMMDD>-<short hash>[-dev].

Read only. Consumed by the release build through TOOL_TOOL_REVISION.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from tooltool_tooling import vcs
from tooltool_tooling.errors import ReleaseError

log = logging.getLogger(__name__)

DIRTY_SUFFIX = "-dev"


def compose_revision(project_root: Path) -> str:
    """Return "{date}-{hash}{dirty}". Raises EnvironmentFailure outside a repo or with no commits."""
    date = vcs.head_commit_date(project_root)
    short_hash = vcs.head_short_hash(project_root)
    dirty = DIRTY_SUFFIX if vcs.is_dirty(project_root) else ""
    revision = f"{date}-{short_hash}{dirty}"
    log.debug("revision: %s", revision)
    return revision


def full_version(version: str, revision: str | None) -> str:
    """Version as the binary reports it: <version>-<revision>, or <version>-dev without one."""
    return f"{version}-{revision or 'dev'}"


def run(project_root: Path) -> int:
    """Print the revision string to stdout. Returns 0 or the failing command's exit code."""
    try:
        print(compose_revision(project_root))
        return 0
    except ReleaseError as e:
        print(f"error: {e}", file=sys.stderr)
        return e.returncode
