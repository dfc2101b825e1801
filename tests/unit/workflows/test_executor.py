"""Tests for executors and pipeline executors."""

from __future__ import annotations

import logging
from typing import List

import pytest

from stackpurge.workflows.executor import (
    Executor,
    new_pipeline_executor,
    new_pipeline_executor_no_stop,
    run_pipeline_no_stop,
)


def _recording(calls: List[str], name: str, fail: bool = False) -> Executor:
    def run() -> None:
        calls.append(name)
        if fail:
            raise RuntimeError(f"{name} broke")

    return Executor(name, run)


class TestExecutor:
    def test_call_runs_action_once(self) -> None:
        calls: List[str] = []
        executor = _recording(calls, "one")

        executor()

        assert calls == ["one"]
        assert executor.description == "one"
        assert repr(executor) == "Executor('one')"


class TestPipelineExecutor:
    """Tests for the stop-on-failure pipeline."""

    def test_runs_all_in_order(self) -> None:
        calls: List[str] = []
        pipeline = new_pipeline_executor(_recording(calls, "a"), _recording(calls, "b"), _recording(calls, "c"))

        pipeline()

        assert calls == ["a", "b", "c"]

    def test_stops_at_first_failure(self) -> None:
        """Test executors after the first failure are skipped and the error propagates."""
        calls: List[str] = []
        pipeline = new_pipeline_executor(
            _recording(calls, "a"),
            _recording(calls, "b", fail=True),
            _recording(calls, "c"),
            _recording(calls, "d", fail=True),
        )

        with pytest.raises(RuntimeError, match="b broke"):
            pipeline()

        assert calls == ["a", "b"]


class TestPipelineExecutorNoStop:
    """Tests for the continue-on-failure pipeline."""

    def test_runs_every_executor_despite_failures(self, caplog: pytest.LogCaptureFixture) -> None:
        calls: List[str] = []
        executors = [
            _recording(calls, "a", fail=True),
            _recording(calls, "b"),
            _recording(calls, "c", fail=True),
            _recording(calls, "d"),
        ]

        with caplog.at_level(logging.ERROR):
            result = run_pipeline_no_stop(executors)

        assert calls == ["a", "b", "c", "d"]
        assert result.executed == 4
        assert result.failed_count == 2
        assert result.succeeded_count == 2
        assert [description for description, _ in result.failures] == ["a", "c"]
        assert "a failed: a broke" in caplog.text
        assert "c failed: c broke" in caplog.text

    def test_uses_injected_logger(self, caplog: pytest.LogCaptureFixture) -> None:
        log = logging.getLogger("test.purge.injected")

        with caplog.at_level(logging.ERROR, logger="test.purge.injected"):
            run_pipeline_no_stop([_recording([], "x", fail=True)], log=log)

        assert [record.name for record in caplog.records] == ["test.purge.injected"]

    def test_executor_form_never_raises(self) -> None:
        calls: List[str] = []
        pipeline = new_pipeline_executor_no_stop(_recording(calls, "a", fail=True), _recording(calls, "b"))

        pipeline()

        assert calls == ["a", "b"]

    def test_empty_plan(self) -> None:
        result = run_pipeline_no_stop([])

        assert result.executed == 0
        assert result.failures == []
