"""`tooltool release|revision|commit|build` argument parsing. Each returns an exit code."""

from __future__ import annotations

import argparse

from tooltool_tooling.build import run_build
from tooltool_tooling.cli.parse_common import add_common_flags, path_resolver, project_root_of
from tooltool_tooling.pre_commit import run_commit
from tooltool_tooling.release import run_release
from tooltool_tooling.revision import run as run_revision


def run_release_argv(argv: list[str]) -> int:
    """tooltool release [major|minor|patch] [--no-push-branch]."""
    ap = argparse.ArgumentParser(
        prog="tooltool release",
        description="Bump version, commit, tag v<version> and push",
    )
    ap.add_argument(
        "level",
        nargs="?",
        default=None,
        help="major, minor, or patch (default: minor, or default_level from config)",
    )
    ap.add_argument(
        "--no-push-branch",
        dest="push_branch",
        action="store_false",
        default=None,
        help="Only push the tag, not the current branch",
    )
    add_common_flags(ap)
    args = ap.parse_args(argv)
    return run_release(
        project_root_of(args),
        args.level,
        push_branch=args.push_branch,
        config_path=args.config,
    )


def run_revision_argv(argv: list[str]) -> int:
    """tooltool revision: print <YYYYMMDD>-<hash>[-dev]."""
    ap = argparse.ArgumentParser(
        prog="tooltool revision",
        description="Print the build revision string for the current checkout",
    )
    ap.add_argument(
        "--project-root",
        type=path_resolver,
        default=None,
        help="Workspace root (default: cwd)",
    )
    args = ap.parse_args(argv)
    return run_revision(project_root_of(args))


def run_commit_argv(argv: list[str]) -> int:
    """tooltool commit [--gate-only]."""
    ap = argparse.ArgumentParser(
        prog="tooltool commit",
        description="fmt, clippy, test; then jj desc, jj new and push to the mainline branch",
    )
    ap.add_argument("--gate-only", action="store_true", help="Run fmt/clippy/test only")
    add_common_flags(ap)
    args = ap.parse_args(argv)
    return run_commit(project_root_of(args), gate_only=args.gate_only, config_path=args.config)


def run_build_argv(argv: list[str]) -> int:
    """tooltool build: cargo build --release with the revision embedded."""
    ap = argparse.ArgumentParser(
        prog="tooltool build",
        description="Release build with TOOL_TOOL_REVISION set from git",
    )
    add_common_flags(ap)
    args = ap.parse_args(argv)
    return run_build(project_root_of(args), config_path=args.config)
