"""Tests for tooltool_tooling.helpers."""

from pathlib import Path
from unittest.mock import patch

import pytest

from tooltool_tooling.errors import EnvironmentFailure
from tooltool_tooling.helpers import find_cargo_tomls, run_command


class TestFindCargoTomls:
    def test_excludes_target(self, cargo_workspace: Path) -> None:
        found = [p.relative_to(cargo_workspace) for p in find_cargo_tomls(cargo_workspace)]
        assert found == [Path("Cargo.toml"), Path("cli/Cargo.toml"), Path("logic/Cargo.toml")]


class TestRunCommand:
    def test_missing_executable(self, tmp_path: Path) -> None:
        with patch("subprocess.run", side_effect=FileNotFoundError("jj")):
            with pytest.raises(EnvironmentFailure, match="jj not found") as exc_info:
                run_command(["jj", "new"], cwd=tmp_path, step="jj-new")
        assert exc_info.value.step == "jj-new"
