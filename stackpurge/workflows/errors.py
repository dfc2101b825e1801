"""Exceptions raised by purge workflows."""

from __future__ import annotations


class PurgeError(Exception):
    """Base class for purge failures."""


class StackTerminationError(PurgeError):
    """A teardown step could not finish (lookup failed or stack ended in a failed status)."""


class PurgeAbortedError(PurgeError):
    """The operator declined the purge confirmation."""
