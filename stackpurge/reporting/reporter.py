"""Purge summary rendering with Rich."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..models.purge_summary import PurgeSummary

LAST_UPDATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def colorize_stack_status(status: str) -> str:
    """Wrap a stack status in Rich markup by outcome."""
    status = escape(status)
    if status.endswith("_FAILED") or "ROLLBACK" in status:
        return f"[red]{status}[/red]"
    if status.endswith("_IN_PROGRESS"):
        return f"[yellow]{status}[/yellow]"
    if status.endswith("_COMPLETE"):
        return f"[green]{status}[/green]"
    return status


class PurgeReporter:
    """Renders the stacks a purge is about to remove."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.console = console or Console()

    def build_table(self, summary: PurgeSummary) -> Table:
        table = Table(title="Stacks to purge")
        table.add_column("Type", style="bold")
        table.add_column("Stack")
        table.add_column("Status")
        table.add_column("Reason")
        table.add_column("Last Update")

        for candidate in summary.candidates:
            reason = escape(candidate.status_reason)
            status = colorize_stack_status(candidate.status)
            if candidate.status_reason:
                status = f"{status}: {reason}"

            last_update = ""
            if candidate.last_update_time is not None:
                last_update = candidate.last_update_time.astimezone().strftime(LAST_UPDATE_FORMAT)

            table.add_row(escape(candidate.stack_type), escape(candidate.name), status, reason, last_update)

        return table

    def render(self, summary: PurgeSummary) -> None:
        self.console.print(self.build_table(summary))
