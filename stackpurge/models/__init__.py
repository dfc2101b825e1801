"""Data models for stacks and their resources."""

from __future__ import annotations

from .purge_summary import PurgeCandidate, PurgeSummary
from .stack import Resource, ResourceKind, Stack, StackType, create_stack_name

__all__ = [
    "PurgeCandidate",
    "PurgeSummary",
    "Resource",
    "ResourceKind",
    "Stack",
    "StackType",
    "create_stack_name",
]
