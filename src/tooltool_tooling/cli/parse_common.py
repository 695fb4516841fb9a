"""Shared CLI argument parsing for common flags (--project-root, --config)."""

from __future__ import annotations

import argparse
from pathlib import Path


def path_resolver(s: str) -> Path:
    """Resolve a path argument to absolute Path (e.g. --project-root, --config)."""
    return Path(s).resolve()


def add_common_flags(ap: argparse.ArgumentParser) -> None:
    ap.add_argument(
        "--project-root",
        type=path_resolver,
        default=None,
        help="Workspace root (default: cwd)",
    )
    ap.add_argument(
        "--config",
        type=path_resolver,
        default=None,
        help="Config file (default: <project-root>/tooltool.yaml if present)",
    )


def project_root_of(args: argparse.Namespace) -> Path:
    return args.project_root if args.project_root is not None else Path.cwd()
