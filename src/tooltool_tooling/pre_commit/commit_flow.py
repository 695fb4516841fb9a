"""Gate, then describe and advance the jj change and publish it to the mainline branch.

gate -> jj desc -> jj new -> git push <remote> HEAD:refs/heads/<mainline>
     -> git checkout <mainline> -> git pull
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from tooltool_tooling import vcs
from tooltool_tooling.config import load_release_config
from tooltool_tooling.errors import ReleaseError
from tooltool_tooling.pipeline import Pipeline, report_failure
from tooltool_tooling.pre_commit.gate import run_gate

MUTATING_STEPS = frozenset({"gate", "describe", "new-change", "push", "checkout", "pull"})


def build_pipeline(project_root: Path, config: dict[str, Any], *, gate_only: bool = False) -> Pipeline:
    remote = config["remote"]
    mainline = config["mainline_branch"]
    steps = [("gate", lambda: run_gate(project_root, config["gate"]))]
    if not gate_only:
        steps += [
            ("describe", lambda: vcs.jj(project_root, "desc", interactive=True)),
            ("new-change", lambda: vcs.jj(project_root, "new")),
            ("push", lambda: vcs.push(project_root, remote, f"HEAD:refs/heads/{mainline}")),
            ("checkout", lambda: vcs.checkout(project_root, mainline)),
            ("pull", lambda: vcs.pull(project_root)),
        ]
    return Pipeline("commit", steps)


def run(project_root: Path, *, gate_only: bool = False, config_path: Path | None = None) -> int:
    """Returns 0, or the exit code of the first failing gate/VCS command."""
    pipeline: Pipeline | None = None
    try:
        cfg = load_release_config(project_root, config_path)
        pipeline = build_pipeline(project_root, cfg, gate_only=gate_only)
        pipeline.run()
    except ReleaseError as e:
        completed = pipeline.completed if pipeline is not None else []
        return report_failure(e, completed, MUTATING_STEPS)
    return 0
