"""AWS implementations of the purge capabilities."""

from __future__ import annotations

from .roleset import StackRolesetManager
from .stack_manager import CloudFormationStackManager

__all__ = [
    "CloudFormationStackManager",
    "StackRolesetManager",
]
