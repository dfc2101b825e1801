"""Purge summary model.

Candidates shown to the operator before a purge runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from .stack import Stack


@dataclass
class PurgeCandidate:
    """One stack that the purge will remove.

    Attributes:
        stack_type: Value of the stack's ``type`` tag
        name: Stack name
        status: Provider lifecycle status
        status_reason: Diagnostic text for the status
        last_update_time: When the stack last changed (optional)
    """

    stack_type: str
    name: str
    status: str
    status_reason: str
    last_update_time: Optional[datetime] = None

    @classmethod
    def from_stack(cls, stack: Stack) -> "PurgeCandidate":
        return cls(
            stack_type=stack.tags["type"],
            name=stack.name,
            status=stack.status,
            status_reason=stack.status_reason,
            last_update_time=stack.last_update_time,
        )


@dataclass
class PurgeSummary:
    """Every typed stack found in the inventory."""

    candidates: List[PurgeCandidate] = field(default_factory=list)

    @property
    def stack_count(self) -> int:
        return len(self.candidates)

    @classmethod
    def from_stacks(cls, stacks: List[Stack]) -> "PurgeSummary":
        """Summarize the stacks that carry a ``type`` tag, skipping the rest."""
        return cls(candidates=[PurgeCandidate.from_stack(stack) for stack in stacks if stack.stack_type])
