"""Logging configuration."""

from __future__ import annotations

import logging

from rich.logging import RichHandler


def setup_logging(level: str = "INFO", verbose: bool = False) -> None:
    """Configure the root logger to write through Rich.

    Args:
        level: Log level name (DEBUG, INFO, WARNING, ERROR)
        verbose: Show module paths and timestamps
    """
    handler = RichHandler(show_time=verbose, show_path=verbose, markup=False, rich_tracebacks=verbose)

    root = logging.getLogger()
    for existing in root.handlers[:]:
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    # boto is noisy below WARNING
    for name in ("boto3", "botocore", "urllib3"):
        logging.getLogger(name).setLevel(logging.WARNING)
