"""Shared fixtures for copy engine tests."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest

if TYPE_CHECKING:
    from pathlib import Path


def _can_symlink() -> bool:
    import tempfile

    with tempfile.TemporaryDirectory() as tmp:
        try:
            os.symlink("target", os.path.join(tmp, "link"))
        except (OSError, NotImplementedError):
            return False
    return True


requires_symlinks = pytest.mark.skipif(not _can_symlink(), reason="platform cannot create symlinks")


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in ("TREECOPY_RETRY_COUNT", "TREECOPY_RETRY_DELAY", "TREECOPY_CONTINUE_ON_ERROR"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture()
def copy_tmp(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a temp directory and chdir into it."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture()
def testcases(copy_tmp: Path) -> dict[str, Path]:
    """temp1/testcase_1, temp1/testcase_2 and temp2/file1, as used by the cp cases."""
    temp1 = copy_tmp / "temp1"
    temp2 = copy_tmp / "temp2"
    temp1.mkdir()
    temp2.mkdir()
    (temp1 / "testcase_1").write_text("testcase_1")
    (temp1 / "testcase_2").write_text("testcase_2")
    (temp2 / "file1").write_text("file1")
    return {
        "temp1": temp1,
        "temp2": temp2,
        "testcase_1": temp1 / "testcase_1",
        "testcase_2": temp1 / "testcase_2",
    }


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create files (and their parent directories) under root."""
    for rel_path, content in files.items():
        full_path = root / rel_path
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_text(content, encoding="utf-8")
    return root
