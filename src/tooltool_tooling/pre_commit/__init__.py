"""Pre-commit: fmt/clippy/test gate and the jj commit flow."""

from tooltool_tooling.pre_commit.commit_flow import run as run_commit
from tooltool_tooling.pre_commit.gate import run_gate

__all__ = ["run_commit", "run_gate"]
