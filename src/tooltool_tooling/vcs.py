"""git and jj operations used by release, revision and commit flows.

Each function raises VCSFailure (or EnvironmentFailure for read queries) on a
non-zero exit, carrying the command's exit code.
"""

from __future__ import annotations

from pathlib import Path

from tooltool_tooling.errors import EnvironmentFailure, VCSFailure
from tooltool_tooling.helpers import command_output, run_command


def _git(project_root: Path, *args: str, step: str) -> str:
    r = run_command(["git", *args], cwd=project_root, step=step)
    if r.returncode != 0:
        msg = f"git {' '.join(args)} failed: {command_output(r)}"
        raise VCSFailure(msg, step=step, returncode=r.returncode)
    return (r.stdout or "").strip()


# --- Read queries ---


def head_commit_date(project_root: Path) -> str:
    """Committer date of HEAD as YYYYMMDD."""
    r = run_command(
        ["git", "log", "-1", "--format=%cd", "--date=format:%Y%m%d"],
        cwd=project_root,
        step="commit-date",
    )
    out = (r.stdout or "").strip()
    if r.returncode != 0 or not out:
        msg = f"Cannot read last commit date (not a git repository, or no commits): {command_output(r)}"
        raise EnvironmentFailure(msg, step="commit-date", returncode=r.returncode)
    return out


def head_short_hash(project_root: Path) -> str:
    r = run_command(["git", "log", "-1", "--format=%h"], cwd=project_root, step="commit-hash")
    out = (r.stdout or "").strip()
    if r.returncode != 0 or not out:
        msg = f"Cannot read last commit hash (not a git repository, or no commits): {command_output(r)}"
        raise EnvironmentFailure(msg, step="commit-hash", returncode=r.returncode)
    return out


def is_dirty(project_root: Path) -> bool:
    """True when the working tree differs from HEAD. Any non-zero exit of diff-index counts as dirty.

    Read only: the index is not refreshed, so a file touched without content change can count.
    """
    r = run_command(["git", "diff-index", "--quiet", "HEAD"], cwd=project_root, step="dirty-check")
    return r.returncode != 0


def tag_exists(project_root: Path, tag: str) -> bool:
    r = run_command(
        ["git", "rev-parse", "--verify", "--quiet", f"refs/tags/{tag}"],
        cwd=project_root,
        step="check-tag",
    )
    return r.returncode == 0


# --- Mutations ---


def commit_all(project_root: Path, message: str) -> None:
    """git commit -a -m message. Nothing to commit is a failure."""
    _git(project_root, "commit", "-a", "-m", message, step="commit")


def create_annotated_tag(project_root: Path, tag: str, message: str) -> None:
    _git(project_root, "tag", "-a", tag, "-m", message, step="tag")


def push(project_root: Path, remote: str, refspec: str, *, step: str = "push") -> None:
    _git(project_root, "push", remote, refspec, step=step)


def checkout(project_root: Path, branch: str) -> None:
    _git(project_root, "checkout", branch, step="checkout")


def pull(project_root: Path) -> None:
    _git(project_root, "pull", step="pull")


def jj(project_root: Path, *args: str, interactive: bool = False) -> None:
    """Run jj; interactive=True inherits the terminal (e.g. `jj desc` opens an editor)."""
    step = f"jj-{args[0]}" if args else "jj"
    r = run_command(["jj", *args], cwd=project_root, capture=not interactive, step=step)
    if r.returncode != 0:
        detail = command_output(r) if not interactive else "see output above"
        msg = f"jj {' '.join(args)} failed: {detail}"
        raise VCSFailure(msg, step=step, returncode=r.returncode)
