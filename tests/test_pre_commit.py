"""Tests for tooltool_tooling.pre_commit (gate order and commit flow)."""

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from tooltool_tooling.errors import GateFailure
from tooltool_tooling.pre_commit import run_commit, run_gate
from tooltool_tooling.pre_commit.gate import gate_name


class TestRunGate:
    def test_runs_fmt_clippy_test_in_order(self, tmp_path: Path) -> None:
        with patch(
            "tooltool_tooling.pre_commit.gate.run_command",
            return_value=MagicMock(returncode=0),
        ) as m:
            run_gate(tmp_path)
        assert [c.args[0] for c in m.call_args_list] == [
            ["cargo", "fmt"],
            ["cargo", "clippy", "--", "-D", "warnings"],
            ["cargo", "test"],
        ]
        assert all(c.kwargs["capture"] is False for c in m.call_args_list)

    def test_lint_failure_stops_before_tests(self, tmp_path: Path) -> None:
        with patch(
            "tooltool_tooling.pre_commit.gate.run_command",
            side_effect=[MagicMock(returncode=0), MagicMock(returncode=101)],
        ) as m:
            with pytest.raises(GateFailure) as exc_info:
                run_gate(tmp_path)
        assert m.call_count == 2
        assert exc_info.value.step == "clippy"
        assert exc_info.value.returncode == 101

    def test_custom_commands(self, tmp_path: Path) -> None:
        with patch(
            "tooltool_tooling.pre_commit.gate.run_command",
            return_value=MagicMock(returncode=0),
        ) as m:
            run_gate(tmp_path, [["cargo", "nextest", "run"]])
        m.assert_called_once()
        assert m.call_args.args[0] == ["cargo", "nextest", "run"]

    def test_gate_name(self) -> None:
        assert gate_name(["cargo", "clippy", "--", "-D", "warnings"]) == "clippy"
        assert gate_name(["make"]) == "make"
        assert gate_name(["cargo", "--locked", "test"]) == "cargo"


class TestCommitFlow:
    def _patches(self, gate_rcs, vcs_rc=0):
        gate = patch(
            "tooltool_tooling.pre_commit.gate.run_command",
            side_effect=[MagicMock(returncode=rc) for rc in gate_rcs],
        )
        vcs = patch(
            "tooltool_tooling.vcs.run_command",
            return_value=MagicMock(returncode=vcs_rc, stdout="", stderr="rejected"),
        )
        return gate, vcs

    def test_full_flow_order(self, tmp_path: Path) -> None:
        gate, vcs = self._patches([0, 0, 0])
        with gate, vcs as m_vcs:
            rc = run_commit(tmp_path)
        assert rc == 0
        assert [c.args[0] for c in m_vcs.call_args_list] == [
            ["jj", "desc"],
            ["jj", "new"],
            ["git", "push", "origin", "HEAD:refs/heads/master"],
            ["git", "checkout", "master"],
            ["git", "pull"],
        ]
        assert m_vcs.call_args_list[0].kwargs["capture"] is False

    def test_lint_failure_means_no_commit_or_push(self, tmp_path: Path, capsys) -> None:
        gate, vcs = self._patches([0, 1])
        with gate, vcs as m_vcs:
            rc = run_commit(tmp_path)
        assert rc == 1
        m_vcs.assert_not_called()
        assert "[clippy]" in capsys.readouterr().err

    def test_gate_only(self, tmp_path: Path) -> None:
        gate, vcs = self._patches([0, 0, 0])
        with gate, vcs as m_vcs:
            assert run_commit(tmp_path, gate_only=True) == 0
        m_vcs.assert_not_called()

    def test_push_failure_reports_applied_steps(self, tmp_path: Path, capsys) -> None:
        gate = patch(
            "tooltool_tooling.pre_commit.gate.run_command",
            return_value=MagicMock(returncode=0),
        )
        vcs = patch(
            "tooltool_tooling.vcs.run_command",
            side_effect=[
                MagicMock(returncode=0),  # jj desc
                MagicMock(returncode=0, stdout="", stderr=""),  # jj new
                MagicMock(returncode=1, stdout="", stderr="! [rejected] non-fast-forward"),
            ],
        )
        with gate, vcs:
            rc = run_commit(tmp_path)
        err = capsys.readouterr().err
        assert rc == 1
        assert "non-fast-forward" in err
        assert "not rolled back: gate, describe, new-change" in err

    def test_mainline_from_config(self, tmp_path: Path) -> None:
        (tmp_path / "tooltool.yaml").write_text("mainline_branch: main\nremote: upstream\n")
        gate, vcs = self._patches([0, 0, 0])
        with gate, vcs as m_vcs:
            run_commit(tmp_path)
        cmds = [c.args[0] for c in m_vcs.call_args_list]
        assert ["git", "push", "upstream", "HEAD:refs/heads/main"] in cmds
        assert ["git", "checkout", "main"] in cmds
