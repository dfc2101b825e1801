"""Tests for the purge summary reporter."""

from __future__ import annotations

from datetime import datetime, timezone

import pytest
from rich.console import Console

from stackpurge.models.purge_summary import PurgeCandidate, PurgeSummary
from stackpurge.reporting.reporter import PurgeReporter, colorize_stack_status


@pytest.mark.parametrize(
    "status,color",
    [
        ("CREATE_COMPLETE", "green"),
        ("UPDATE_IN_PROGRESS", "yellow"),
        ("CREATE_FAILED", "red"),
        ("UPDATE_ROLLBACK_COMPLETE", "red"),
    ],
)
def test_colorize_stack_status(status: str, color: str) -> None:
    assert colorize_stack_status(status) == f"[{color}]{status}[/{color}]"


def test_colorize_unknown_status_is_plain() -> None:
    assert colorize_stack_status("REVIEW") == "REVIEW"


class TestPurgeReporter:
    @pytest.fixture
    def summary(self) -> PurgeSummary:
        return PurgeSummary(
            candidates=[
                PurgeCandidate(
                    stack_type="vpc",
                    name="mu-vpc-dev",
                    status="CREATE_COMPLETE",
                    status_reason="",
                    last_update_time=datetime(2025, 1, 15, 10, 0, 0, tzinfo=timezone.utc),
                ),
                PurgeCandidate(
                    stack_type="service",
                    name="mu-service-api-dev",
                    status="UPDATE_ROLLBACK_COMPLETE",
                    status_reason="Resource creation cancelled",
                ),
            ]
        )

    def test_table_has_a_row_per_candidate(self, summary: PurgeSummary) -> None:
        table = PurgeReporter().build_table(summary)

        assert [column.header for column in table.columns] == ["Type", "Stack", "Status", "Reason", "Last Update"]
        assert table.row_count == 2

    def test_render_prints_stacks(self, summary: PurgeSummary) -> None:
        console = Console(record=True, width=200)

        PurgeReporter(console).render(summary)

        output = console.export_text()
        assert "mu-vpc-dev" in output
        assert "mu-service-api-dev" in output
        assert "UPDATE_ROLLBACK_COMPLETE: Resource creation cancelled" in output

    @pytest.mark.parametrize(
        "reason",
        [
            "The following resource(s) failed to delete: [mybucket].",
            "Resource [/bold] failed",
        ],
    )
    def test_render_keeps_bracketed_reason_text(self, reason: str) -> None:
        summary = PurgeSummary(
            candidates=[
                PurgeCandidate(
                    stack_type="bucket",
                    name="mu-bucket-[data]",
                    status="DELETE_FAILED",
                    status_reason=reason,
                )
            ]
        )
        console = Console(record=True, width=200)

        PurgeReporter(console).render(summary)

        output = console.export_text()
        assert f"DELETE_FAILED: {reason}" in output
        assert "mu-bucket-[data]" in output


def test_colorize_escapes_markup_in_status() -> None:
    assert colorize_stack_status("[bold]") == "\\[bold]"
