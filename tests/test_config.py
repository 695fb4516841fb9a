"""Tests for tooltool_tooling.config."""

from pathlib import Path

import pytest

from tooltool_tooling.config import DEFAULT_RELEASE_CONFIG, load_release_config, resolve_release_config
from tooltool_tooling.errors import InvalidInput


class TestResolveReleaseConfig:
    def test_defaults(self) -> None:
        cfg = resolve_release_config(None)
        assert cfg == DEFAULT_RELEASE_CONFIG
        assert cfg is not DEFAULT_RELEASE_CONFIG
        cfg["gate"].append(["make"])
        assert len(DEFAULT_RELEASE_CONFIG["gate"]) == 3

    def test_overrides_and_ignores_unknown(self) -> None:
        cfg = resolve_release_config({"remote": "upstream", "push_branch": False, "colour": "blue"})
        assert cfg["remote"] == "upstream"
        assert cfg["push_branch"] is False
        assert "colour" not in cfg

    def test_bad_bumper(self) -> None:
        with pytest.raises(InvalidInput, match="bumper"):
            resolve_release_config({"bumper": "npm"})

    def test_bad_gate(self) -> None:
        with pytest.raises(InvalidInput, match="gate"):
            resolve_release_config({"gate": "cargo test"})

    def test_bad_push_branch(self) -> None:
        with pytest.raises(InvalidInput, match="push_branch"):
            resolve_release_config({"push_branch": "yes please"})


class TestLoadReleaseConfig:
    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        assert load_release_config(tmp_path) == DEFAULT_RELEASE_CONFIG

    def test_yaml_file(self, tmp_path: Path) -> None:
        (tmp_path / "tooltool.yaml").write_text(
            "manifest: Cargo.toml\ngate:\n  - [cargo, fmt, --check]\n"
        )
        cfg = load_release_config(tmp_path)
        assert cfg["manifest"] == "Cargo.toml"
        assert cfg["gate"] == [["cargo", "fmt", "--check"]]

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        (tmp_path / "tooltool.yaml").write_text("manifest: [unclosed\n")
        with pytest.raises(InvalidInput) as exc_info:
            load_release_config(tmp_path)
        assert exc_info.value.step == "config"

    def test_non_mapping(self, tmp_path: Path) -> None:
        (tmp_path / "tooltool.yaml").write_text("- a\n- b\n")
        with pytest.raises(InvalidInput, match="mapping"):
            load_release_config(tmp_path)

    def test_explicit_path_must_exist(self, tmp_path: Path) -> None:
        with pytest.raises(InvalidInput, match="not found"):
            load_release_config(tmp_path, tmp_path / "other.yaml")
