"""Ordered pipeline of fallible steps; stops at the first ReleaseError.

No retries and no rollback: steps completed before a failure stay applied and
are reported so the operator can resolve state by hand.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable

from tooltool_tooling.errors import ReleaseError

log = logging.getLogger(__name__)

Step = tuple[str, Callable[[], None]]


class Pipeline:
    def __init__(self, name: str, steps: list[Step]) -> None:
        self.name = name
        self.steps = steps
        self.completed: list[str] = []

    def run(self) -> None:
        """Run steps in order. A failing step's error is tagged with the step name and re-raised."""
        for step_name, fn in self.steps:
            log.info("%s: %s", self.name, step_name)
            try:
                fn()
            except ReleaseError as e:
                if e.step is None:
                    e.step = step_name
                log.debug("%s: %s failed after %s", self.name, step_name, self.completed)
                raise
            self.completed.append(step_name)


def report_failure(e: ReleaseError, completed: list[str], mutating: frozenset[str]) -> int:
    """Print the error (and any applied side effects) to stderr. Returns the exit code."""
    print(f"error: {e}", file=sys.stderr)
    applied = [s for s in completed if s in mutating]
    if applied:
        print(
            f"note: already applied and not rolled back: {', '.join(applied)}",
            file=sys.stderr,
        )
    return e.returncode
