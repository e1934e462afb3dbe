"""Console and CSV presentation of response time results.

This module provides utilities for:
- Formatting optional hours and SLA flags as CSV cells.
- Rendering the per-repository summary as a fixed-width text table.
- Writing the issue-level and repository-level CSV files.

Column order of both CSV files is consumed by downstream tooling and must not
change.
"""

from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import List, Optional, Sequence, TextIO

from .models import IssueResult, RepoSummary

logger = logging.getLogger(__name__)

RESULTS_FILENAME = "repo-results-all.csv"
SUMMARY_FILENAME = "repo-summary.csv"

RESULT_COLUMNS = (
    "repo",
    "issue_number",
    "title",
    "author",
    "created_at",
    "first_response_time_hours",
    "responded_in_48_business_hours",
)
SUMMARY_COLUMNS = ("repo", "totalIssues", "responded", "responseRate")
TABLE_HEADERS = ("Repos", "Total Issues", "Responded", "Response Rate (%)")


def format_hours(hours: Optional[float]) -> str:
    """Format response hours with two decimals, or an empty cell when absent."""
    if hours is None:
        return ""
    return f"{hours:.2f}"


def result_to_row(result: IssueResult) -> List[str]:
    return [
        result.repo,
        str(result.issueNumber),
        result.title,
        result.author,
        result.createdAt,
        format_hours(result.firstResponseTimeHours),
        result.respondedWithinSla or "",
    ]


def summary_to_row(summary: RepoSummary) -> List[str]:
    return [
        summary.repo,
        str(summary.totalIssues),
        str(summary.responded),
        summary.responseRatePercent,
    ]


def render_summary_table(summaries: Sequence[RepoSummary]) -> str:
    """Render repository summaries as a human-readable text table.

    Args:
        summaries: Per-repository summaries in configured order.

    Returns:
        Multi-line table with a banner, header row, separator and one row per
        repository.
    """
    body = [summary_to_row(summary) for summary in summaries]
    widths = [len(header) for header in TABLE_HEADERS]
    for row in body:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row)]

    def _line(cells: Sequence[str]) -> str:
        first, *rest = cells
        padded = [first.ljust(widths[0])]
        padded.extend(cell.rjust(width) for cell, width in zip(rest, widths[1:]))
        return " | ".join(padded).rstrip()

    lines = [
        "============================",
        "Overall Issue Response Time Summary for All Repos",
        "============================",
        "",
        _line(TABLE_HEADERS),
        "-+-".join("-" * width for width in widths),
    ]
    lines.extend(_line(row) for row in body)

    return "\n".join(lines)


def write_results_csv(path: Path, rows: Sequence[IssueResult]) -> None:
    with path.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh)
        writer.writerow(RESULT_COLUMNS)
        writer.writerows(result_to_row(row) for row in rows)


def write_summary_csv(path: Path, summaries: Sequence[RepoSummary]) -> None:
    with path.open("w", encoding="utf-8", newline="") as fh:
        writer = csv.writer(fh)
        writer.writerow(SUMMARY_COLUMNS)
        writer.writerows(summary_to_row(summary) for summary in summaries)


class ConsoleCsvReportSink:
    """Prints the summary table and saves both CSV reports into ``output_dir``."""

    def __init__(self, output_dir: Path, stream: Optional[TextIO] = None) -> None:
        self._output_dir = Path(output_dir)
        self._stream = stream

    @property
    def results_path(self) -> Path:
        return self._output_dir / RESULTS_FILENAME

    @property
    def summary_path(self) -> Path:
        return self._output_dir / SUMMARY_FILENAME

    def present(self, rows: Sequence[IssueResult], summaries: Sequence[RepoSummary]) -> None:
        print("\n" + render_summary_table(summaries), file=self._stream)

        self._output_dir.mkdir(parents=True, exist_ok=True)
        write_results_csv(self.results_path, rows)
        logger.info("Saved %s (%d rows)", self.results_path, len(rows))
        write_summary_csv(self.summary_path, summaries)
        logger.info("Saved %s (%d repositories)", self.summary_path, len(summaries))
