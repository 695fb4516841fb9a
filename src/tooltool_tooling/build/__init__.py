"""Release build of the workspace binary with the git revision embedded."""

from .release_build import binary_path, build_env, build_release
from .release_build import run as run_build

__all__ = ["binary_path", "build_env", "build_release", "run_build"]
