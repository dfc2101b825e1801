"""Teardown workflows.

This module builds and runs purge plans: ordered lists of executors that
tear stacks down category by category.

Classes:
    PurgeWorkflow: Classifies stacks, builds the plan and runs it
    StackTerminateWorkflow: Tears down one stack with its cleanup side effects
    Executor: Deferred unit of work
"""

from __future__ import annotations

__all__ = [
    "PurgeWorkflow",
    "StackTerminateWorkflow",
    "Executor",
]
