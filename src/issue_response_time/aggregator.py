"""Runs the repository analysis across all configured repositories."""

from __future__ import annotations

import logging
from typing import List, Optional, Protocol, Sequence

from .analyzer import RepoAnalyzer
from .models import AggregateReport, IssueResult, RepositoryRef, RepoSummary

logger = logging.getLogger(__name__)


class ReportSink(Protocol):
    """Presents the collected rows and summaries (console, files, ...)."""

    def present(self, rows: Sequence[IssueResult], summaries: Sequence[RepoSummary]) -> None:
        ...


class ReportAggregator:
    """Analyzes repositories one at a time, preserving configured order.

    A failure while analyzing any repository propagates and stops the run;
    no partial results are handed to the sink.
    """

    def __init__(self, analyzer: RepoAnalyzer, sink: Optional[ReportSink] = None) -> None:
        self._analyzer = analyzer
        self._sink = sink

    def run(self, repos: Sequence[RepositoryRef]) -> AggregateReport:
        all_rows: List[IssueResult] = []
        all_summaries: List[RepoSummary] = []

        for repo in repos:
            analysis = self._analyzer.analyze(repo)
            all_rows.extend(analysis.rows)
            all_summaries.append(analysis.summary)

        logger.info(
            "Completed analysis for %d repositories (%d issue rows)",
            len(repos),
            len(all_rows),
        )

        if self._sink is not None:
            self._sink.present(all_rows, all_summaries)

        return AggregateReport(allRows=all_rows, allSummaries=all_summaries)
