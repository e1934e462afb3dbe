"""Tests for running analysis across repositories."""

import sys
from pathlib import Path
from unittest.mock import Mock

import pytest

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from issue_response_time.aggregator import ReportAggregator
from issue_response_time.errors import TransportError
from issue_response_time.models import IssueResult, RepoAnalysis, RepositoryRef, RepoSummary


def _analysis(name: str, numbers) -> RepoAnalysis:
    rows = [
        IssueResult(
            repo=name,
            issueNumber=number,
            title="t",
            author="carol",
            createdAt="2025-03-03T09:00:00.000Z",
        )
        for number in numbers
    ]
    summary = RepoSummary(repo=name, totalIssues=len(rows), responded=0, responseRatePercent="0.00")
    return RepoAnalysis(rows=rows, summary=summary)


def test_run_concatenates_rows_and_keeps_repository_order():
    """Verify rows and summaries follow configured repository order."""
    repos = [RepositoryRef("o", "b"), RepositoryRef("o", "a")]
    analyses = {"b": _analysis("b", [5, 4]), "a": _analysis("a", [9])}
    analyzer = Mock()
    analyzer.analyze.side_effect = lambda repo: analyses[repo.name]
    sink = Mock()

    report = ReportAggregator(analyzer, sink=sink).run(repos)

    assert [(row.repo, row.issueNumber) for row in report.allRows] == [("b", 5), ("b", 4), ("a", 9)]
    assert [summary.repo for summary in report.allSummaries] == ["b", "a"]
    assert [call.args[0] for call in analyzer.analyze.call_args_list] == repos
    sink.present.assert_called_once_with(report.allRows, report.allSummaries)


def test_run_without_sink_returns_collections():
    """Verify the aggregator works without a presentation sink."""
    analyzer = Mock()
    analyzer.analyze.return_value = _analysis("a", [])

    report = ReportAggregator(analyzer).run([RepositoryRef("o", "a")])

    assert report.allRows == []
    assert len(report.allSummaries) == 1


def test_run_stops_on_first_failure_without_presenting():
    """Verify a repository failure stops the run and nothing is presented."""
    analyzer = Mock()
    analyzer.analyze.side_effect = [_analysis("a", [1]), TransportError("down"), _analysis("c", [2])]
    sink = Mock()
    repos = [RepositoryRef("o", "a"), RepositoryRef("o", "b"), RepositoryRef("o", "c")]

    with pytest.raises(TransportError):
        ReportAggregator(analyzer, sink=sink).run(repos)

    assert analyzer.analyze.call_count == 2
    sink.present.assert_not_called()


def test_run_logs_repository_and_row_counts(caplog):
    """Verify the completion log line carries the counts in its message."""
    analyzer = Mock()
    analyzer.analyze.side_effect = [_analysis("a", [1, 2]), _analysis("b", [3])]

    with caplog.at_level("INFO", logger="issue_response_time.aggregator"):
        ReportAggregator(analyzer).run([RepositoryRef("o", "a"), RepositoryRef("o", "b")])

    assert "Completed analysis for 2 repositories (3 issue rows)" in caplog.text
