"""Error kinds for release workflows. Every failure is fatal to the invocation."""

from __future__ import annotations


class ReleaseError(RuntimeError):
    """Base error. step names the pipeline step; returncode is the exit code to propagate."""

    def __init__(self, message: str, *, step: str | None = None, returncode: int = 1) -> None:
        super().__init__(message)
        self.step = step
        self.returncode = returncode if returncode else 1

    def __str__(self) -> str:
        msg = super().__str__()
        return f"[{self.step}] {msg}" if self.step else msg


class InvalidInput(ReleaseError):
    """Unknown bump level, missing/unparsable manifest, bad config."""


class GateFailure(ReleaseError):
    """fmt, clippy or test exited non-zero."""


class VCSFailure(ReleaseError):
    """commit, tag, push, checkout or pull failed (git or jj)."""


class EnvironmentFailure(ReleaseError):
    """Not a repository, no commits, missing executable or build artifact."""
