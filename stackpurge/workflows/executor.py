"""Executors and pipeline executors.

An executor is a deferred, argument-less unit of work. It succeeds by
returning and fails by raising. Pipelines run executors in order, either
stopping at the first failure or running everything regardless.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class Executor:
    """Named deferred operation.

    Attributes:
        description: Human-readable label used in logs
        action: Callable performing the work
    """

    def __init__(self, description: str, action: Callable[[], None]) -> None:
        self.description = description
        self.action = action

    def __call__(self) -> None:
        self.action()

    def __repr__(self) -> str:
        return f"Executor({self.description!r})"


@dataclass
class PipelineResult:
    """Outcome of a continue-on-failure pipeline run.

    Attributes:
        executed: Number of executors invoked
        failures: (description, error) for every executor that raised
    """

    executed: int = 0
    failures: List[Tuple[str, Exception]] = field(default_factory=list)

    @property
    def failed_count(self) -> int:
        return len(self.failures)

    @property
    def succeeded_count(self) -> int:
        return self.executed - self.failed_count


def new_pipeline_executor(*executors: Executor, log: Optional[logging.Logger] = None) -> Executor:
    """Compose executors into one that stops at the first failure.

    The first exception raised is propagated and the remaining executors
    are skipped.
    """
    log = log or logger

    def run() -> None:
        for executor in executors:
            log.debug(f"Running {executor.description}")
            executor()

    return Executor("pipeline", run)


def run_pipeline_no_stop(
    executors: Sequence[Executor], log: Optional[logging.Logger] = None
) -> PipelineResult:
    """Run every executor in order, logging failures instead of stopping.

    Args:
        executors: Executors to invoke
        log: Logger for progress and failures (default: module logger)

    Returns:
        PipelineResult describing what ran and what failed
    """
    log = log or logger
    result = PipelineResult()

    for executor in executors:
        log.debug(f"Running {executor.description}")
        result.executed += 1
        try:
            executor()
        except Exception as e:
            log.error(f"{executor.description} failed: {e}")
            result.failures.append((executor.description, e))

    return result


def new_pipeline_executor_no_stop(*executors: Executor, log: Optional[logging.Logger] = None) -> Executor:
    """Compose executors into one that runs all of them and never raises."""

    def run() -> None:
        run_pipeline_no_stop(executors, log=log)

    return Executor("pipeline (no stop)", run)
