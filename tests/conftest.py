"""Pytest fixtures for tool-tool release tooling tests."""

from pathlib import Path

import pytest

CLI_CARGO = """[package]
name = "tool-tool"
version = "1.2.3"
edition = "2021"

[dependencies]
serde = { version = "1.2.3" }
"""

LOGIC_CARGO = """[package]
name = "tool-tool-logic"
version = "1.2.3"
edition = "2021"
"""


@pytest.fixture
def cargo_workspace(tmp_path: Path) -> Path:
    """Workspace root with cli/ and logic/ crates at 1.2.3 and a stale target/ copy."""
    (tmp_path / "Cargo.toml").write_text('[workspace]\nmembers = ["cli", "logic"]\n')
    for crate, text in (("cli", CLI_CARGO), ("logic", LOGIC_CARGO)):
        (tmp_path / crate).mkdir()
        (tmp_path / crate / "Cargo.toml").write_text(text)
    stale = tmp_path / "target" / "package" / "tool-tool-1.2.3"
    stale.mkdir(parents=True)
    (stale / "Cargo.toml").write_text(CLI_CARGO)
    return tmp_path
