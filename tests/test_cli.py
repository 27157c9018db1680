"""Tests for the command-line entry point."""

from __future__ import annotations

import json
from typing import TYPE_CHECKING

import pytest
import yaml

from treecopy.__main__ import main

from .conftest import write_tree

if TYPE_CHECKING:
    from pathlib import Path


class TestCli:
    @pytest.fixture(autouse=True)
    def _setup(self, copy_tmp: Path) -> None:
        self.tmp_dir = copy_tmp
        write_tree(copy_tmp / "src", {"a.txt": "a", "b/c.txt": "c"})

    def test_copies_file_and_prints_outcome(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["src/a.txt", "out.txt"]) == 0
        outcome = json.loads(capsys.readouterr().out)
        assert outcome["success"] is True
        assert (self.tmp_dir / "out.txt").read_text() == "a"

    def test_recursive_flag(self) -> None:
        assert main(["-r", "src", "dest"]) == 0
        assert (self.tmp_dir / "dest" / "src" / "b" / "c.txt").read_text() == "c"

    def test_directory_without_recursive_fails(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["src", "dest"]) == 1
        captured = capsys.readouterr()
        assert json.loads(captured.out)["error"]["code"] == "EISDIR"
        assert "EISDIR: illegal operation on a directory" in captured.err

    def test_no_clobber(self) -> None:
        (self.tmp_dir / "out.txt").write_text("keep")
        assert main(["-n", "src/a.txt", "out.txt"]) == 0
        assert (self.tmp_dir / "out.txt").read_text() == "keep"

    def test_negative_retry_count_is_usage_error(self) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--retry-count", "-1", "src/a.txt", "out.txt"])
        assert exc_info.value.code == 2

    def test_plan_subcommand(self, capsys: pytest.CaptureFixture[str]) -> None:
        (self.tmp_dir / "plan.yaml").write_text(
            yaml.safe_dump({"steps": [{"source": "src", "destination": "dist", "flags": "-r"}]})
        )
        assert main(["plan", "plan.yaml"]) == 0
        assert json.loads(capsys.readouterr().out)["success"] is True
        assert (self.tmp_dir / "dist" / "src" / "a.txt").read_text() == "a"

    def test_plan_subcommand_missing_file(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["plan", "missing.yaml"]) == 1
        assert "Copy plan not found" in capsys.readouterr().err

    def test_plan_subcommand_invalid_yaml(self, capsys: pytest.CaptureFixture[str]) -> None:
        (self.tmp_dir / "plan.yaml").write_text("steps: [\n")
        assert main(["plan", "plan.yaml"]) == 1
        err = capsys.readouterr().err
        assert err.startswith("treecopy: Copy plan is not valid YAML")
        assert "Traceback" not in err

    def test_plan_subcommand_unknown_step_flag(self, capsys: pytest.CaptureFixture[str]) -> None:
        (self.tmp_dir / "plan.yaml").write_text(
            yaml.safe_dump({"steps": [{"source": "src", "destination": "dist", "flags": "-x"}]})
        )
        assert main(["plan", "plan.yaml"]) == 1
        assert "step 0" in capsys.readouterr().err
        assert not (self.tmp_dir / "dist").exists()

    def test_malformed_retry_setting_exits_with_message(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        monkeypatch.setenv("TREECOPY_RETRY_COUNT", "abc")
        assert main(["src/a.txt", "out.txt"]) == 1
        assert "treecopy: TREECOPY_RETRY_COUNT must be a non-negative int" in capsys.readouterr().err
        assert not (self.tmp_dir / "out.txt").exists()
