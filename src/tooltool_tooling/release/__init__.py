"""Release: bump version across Cargo.toml, commit, tag and push."""

from .bump import BumpLevel, next_version, read_manifest_version
from .workflow import release
from .workflow import run as run_release

__all__ = ["BumpLevel", "next_version", "read_manifest_version", "release", "run_release"]
