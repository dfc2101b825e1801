"""Filtering helpers over a stack inventory snapshot."""

from __future__ import annotations

from typing import Iterable, List

from ..models.stack import Stack, StackType


def filter_stacks_by_status(stacks: Iterable[Stack], statuses: Iterable[str]) -> List[Stack]:
    """Return the stacks whose status is none of ``statuses``."""
    excluded = set(statuses)
    return [stack for stack in stacks if stack.status not in excluded]


def filter_stacks_by_type(stacks: Iterable[Stack], stack_type: StackType) -> List[Stack]:
    """Return the stacks whose ``type`` tag equals ``stack_type``, in input order."""
    return [stack for stack in stacks if stack.tags.get("type") == stack_type.value]
