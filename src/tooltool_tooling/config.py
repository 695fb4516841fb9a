"""Release configuration (manifest path, remote, gate commands, naming).

Optional tooltool.yaml at the project root; keys override DEFAULT_RELEASE_CONFIG.
Unknown keys are ignored.
"""

from __future__ import annotations

import copy
import logging
from pathlib import Path
from typing import Any

import yaml

from tooltool_tooling.errors import InvalidInput

log = logging.getLogger(__name__)

CONFIG_FILENAME = "tooltool.yaml"

# tool-tool layout; override for other workspaces.
DEFAULT_RELEASE_CONFIG: dict[str, Any] = {
    "manifest": "cli/Cargo.toml",
    "default_level": "minor",
    "bumper": "inline",
    "remote": "origin",
    "push_branch": True,
    "tag_prefix": "v",
    "mainline_branch": "master",
    "revision_env": "TOOL_TOOL_REVISION",
    "binary_name": "tool-tool",
    "gate": [
        ["cargo", "fmt"],
        ["cargo", "clippy", "--", "-D", "warnings"],
        ["cargo", "test"],
    ],
}

BUMPERS = ("inline", "cargo")


def _check_gate(value: Any) -> list[list[str]]:
    if not isinstance(value, list) or not all(
        isinstance(cmd, list) and cmd and all(isinstance(a, str) for a in cmd) for cmd in value
    ):
        msg = "gate must be a list of non-empty argv lists, e.g. [[cargo, fmt]]"
        raise InvalidInput(msg, step="config")
    return [list(cmd) for cmd in value]


def resolve_release_config(overrides: dict[str, Any] | None) -> dict[str, Any]:
    """Return config dict with defaults filled and override types checked."""
    out = copy.deepcopy(DEFAULT_RELEASE_CONFIG)
    if not overrides:
        return out
    for key, value in overrides.items():
        if key not in out:
            log.debug("ignoring unknown config key %r", key)
            continue
        if key == "gate":
            out[key] = _check_gate(value)
        elif key == "push_branch":
            if not isinstance(value, bool):
                msg = f"push_branch must be true or false, got {value!r}"
                raise InvalidInput(msg, step="config")
            out[key] = value
        else:
            if value is None or isinstance(value, (dict, list)):
                msg = f"{key} must be a string, got {value!r}"
                raise InvalidInput(msg, step="config")
            out[key] = str(value)
    if out["bumper"] not in BUMPERS:
        msg = f"bumper must be one of {', '.join(BUMPERS)}; got {out['bumper']!r}"
        raise InvalidInput(msg, step="config")
    return out


def load_release_config(project_root: Path, config_path: Path | None = None) -> dict[str, Any]:
    """Load project_root/tooltool.yaml (or config_path) over defaults. Missing file -> defaults."""
    path = config_path or project_root / CONFIG_FILENAME
    if not path.is_file():
        if config_path is not None:
            msg = f"{path} not found"
            raise InvalidInput(msg, step="config")
        return resolve_release_config(None)
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        msg = f"Could not read {path}: {e}"
        raise InvalidInput(msg, step="config") from e
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping at the top level"
        raise InvalidInput(msg, step="config")
    log.debug("loaded config from %s", path)
    return resolve_release_config(data)
