"""Tests for the retry loop."""

from __future__ import annotations

import pytest

from treecopy.retry import run_with_retry


class TestRunWithRetry:
    def test_returns_result_without_retry(self) -> None:
        assert run_with_retry(lambda: 42) == 42

    def test_retries_until_success(self) -> None:
        calls: list[int] = []

        def op() -> str:
            calls.append(1)
            if len(calls) < 3:
                raise OSError("transient")
            return "ok"

        assert run_with_retry(op, 2) == "ok"
        assert len(calls) == 3

    def test_reraises_after_retry_count_extra_attempts(self) -> None:
        calls: list[int] = []

        def op() -> None:
            calls.append(1)
            raise OSError("permanent")

        with pytest.raises(OSError, match="permanent"):
            run_with_retry(op, 3)
        assert len(calls) == 4

    def test_zero_retries_fails_immediately(self) -> None:
        calls: list[int] = []

        def op() -> None:
            calls.append(1)
            raise OSError("nope")

        with pytest.raises(OSError):
            run_with_retry(op, 0)
        assert len(calls) == 1

    def test_non_os_errors_are_not_retried(self) -> None:
        calls: list[int] = []

        def op() -> None:
            calls.append(1)
            raise KeyError("bug")

        with pytest.raises(KeyError):
            run_with_retry(op, 5)
        assert len(calls) == 1

    def test_sleeps_between_attempts(self) -> None:
        sleeps: list[float] = []
        calls: list[int] = []

        def op() -> None:
            calls.append(1)
            if len(calls) < 3:
                raise OSError("transient")

        run_with_retry(op, 5, delay_s=0.5, sleep=sleeps.append)
        assert sleeps == [0.5, 0.5]

    def test_negative_retry_count_rejected(self) -> None:
        with pytest.raises(ValueError):
            run_with_retry(lambda: None, -1)
