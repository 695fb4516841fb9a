"""Release workflow: bump manifest -> commit -> push branch -> tag -> push tag.

Prints `VERSION: <version>` to stdout once the manifest is rewritten; everything
else goes to stderr. Fail-fast, no rollback.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from tooltool_tooling import vcs
from tooltool_tooling.config import load_release_config
from tooltool_tooling.errors import ReleaseError, VCSFailure
from tooltool_tooling.pipeline import Pipeline, report_failure
from tooltool_tooling.release.bump import (
    BumpLevel,
    bump_inline,
    bump_with_cargo,
    next_version,
    pkgid_version,
    read_manifest_version,
)

log = logging.getLogger(__name__)

MUTATING_STEPS = frozenset({"bump", "commit", "push-branch", "tag", "push-tag"})


def commit_message(tag: str) -> str:
    return f"chore(release): Release {tag}"


def tag_message(tag: str) -> str:
    return f"Release {tag}"


def build_pipeline(
    project_root: Path,
    level: str | BumpLevel | None,
    config: dict[str, Any],
    *,
    push_branch: bool | None = None,
) -> tuple[Pipeline, dict[str, str]]:
    """Build the release pipeline. Returns (pipeline, state); state gets "version" and "tag"."""
    bump = BumpLevel.parse(level, default=config["default_level"])
    manifest = config["manifest"]
    prefix = config["tag_prefix"]
    remote = config["remote"]
    use_cargo = config["bumper"] == "cargo"
    do_push_branch = config["push_branch"] if push_branch is None else push_branch
    state: dict[str, str] = {}

    def check_tag() -> None:
        expected = next_version(read_manifest_version(project_root, manifest), bump)
        tag = f"{prefix}{expected}"
        if vcs.tag_exists(project_root, tag):
            msg = f"tag {tag} already exists; refusing to bump"
            raise VCSFailure(msg)

    def bump_manifest() -> None:
        if use_cargo:
            bump_with_cargo(project_root, bump)
        else:
            bump_inline(project_root, manifest, bump)

    def read_version() -> None:
        if use_cargo:
            version = pkgid_version(project_root, manifest)
        else:
            version = read_manifest_version(project_root, manifest)
        state["version"] = version
        state["tag"] = f"{prefix}{version}"
        print(f"VERSION: {version}", flush=True)

    def commit() -> None:
        vcs.commit_all(project_root, commit_message(state["tag"]))

    def push_current_branch() -> None:
        vcs.push(project_root, remote, "HEAD", step="push-branch")

    def tag() -> None:
        vcs.create_annotated_tag(project_root, state["tag"], tag_message(state["tag"]))

    def push_tag() -> None:
        vcs.push(project_root, remote, state["tag"], step="push-tag")

    steps = [
        ("check-tag", check_tag),
        ("bump", bump_manifest),
        ("read-version", read_version),
        ("commit", commit),
    ]
    if do_push_branch:
        steps.append(("push-branch", push_current_branch))
    steps += [("tag", tag), ("push-tag", push_tag)]
    return Pipeline("release", steps), state


def release(
    project_root: Path,
    level: str | BumpLevel | None = None,
    *,
    config: dict[str, Any] | None = None,
    push_branch: bool | None = None,
) -> str:
    """Run the release pipeline and return the new version. Raises ReleaseError on the first failure."""
    cfg = config if config is not None else load_release_config(project_root)
    pipeline, state = build_pipeline(project_root, level, cfg, push_branch=push_branch)
    pipeline.run()
    return state["version"]


def run(
    project_root: Path,
    level: str | None = None,
    *,
    push_branch: bool | None = None,
    config_path: Path | None = None,
) -> int:
    """CLI entry: release and return 0, or print the failing step and return its exit code."""
    pipeline: Pipeline | None = None
    try:
        cfg = load_release_config(project_root, config_path)
        pipeline, state = build_pipeline(project_root, level, cfg, push_branch=push_branch)
        pipeline.run()
    except ReleaseError as e:
        completed = pipeline.completed if pipeline is not None else []
        return report_failure(e, completed, MUTATING_STEPS)
    log.info("released %s", state["tag"])
    return 0
