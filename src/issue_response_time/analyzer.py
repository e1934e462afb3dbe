"""Per-repository response time analysis.

Issue ordering dependency: the issue source is expected to yield issues newest
first. Pagination stops at the first issue created before the cutoff, so an
out-of-order source can cause in-window issues beyond that point to be missed.
"""

from __future__ import annotations

import logging
from typing import Iterator, List, Protocol, Sequence

from .issue_filter import IssueFilter
from .models import Comment, Issue, IssueResult, RepoAnalysis, RepositoryRef, RepoSummary

logger = logging.getLogger(__name__)

RESPONSE_RATE_TARGET = 90.0


class IssueSource(Protocol):
    """Lazily yields a repository's issues ordered by creation time, newest first."""

    def list_issues(self, repo: RepositoryRef) -> Iterator[Issue]:
        ...


class CommentSource(Protocol):
    """Returns all comments on an issue, oldest first."""

    def list_comments(self, repo: RepositoryRef, issue_number: int) -> List[Comment]:
        ...


def summarize_results(repo: RepositoryRef, rows: Sequence[IssueResult]) -> RepoSummary:
    """Aggregate issue rows into a repository summary.

    The response rate is ``"100.00"`` for a repository with no community issues.
    """
    total_issues = len(rows)
    responded = sum(1 for row in rows if row.respondedWithinSla is not None)
    if total_issues == 0:
        response_rate = "100.00"
    else:
        response_rate = f"{responded / total_issues * 100:.2f}"

    return RepoSummary(
        repo=repo.name,
        totalIssues=total_issues,
        responded=responded,
        responseRatePercent=response_rate,
    )


class RepoAnalyzer:
    """Computes first maintainer response rows and a summary for one repository."""

    def __init__(
        self,
        issue_source: IssueSource,
        comment_source: CommentSource,
        issue_filter: IssueFilter,
    ) -> None:
        self._issue_source = issue_source
        self._comment_source = comment_source
        self._issue_filter = issue_filter

    def collect_candidates(self, repo: RepositoryRef) -> List[Issue]:
        """Pull issues until the first one created before the cutoff."""
        candidates: List[Issue] = []
        for issue in self._issue_source.list_issues(repo):
            if self._issue_filter.is_before_cutoff(issue):
                logger.debug(
                    "Reached %s#%d, older than the cutoff; stopping pagination",
                    repo.full_name,
                    issue.number,
                )
                break
            candidates.append(issue)
        return candidates

    def analyze(self, repo: RepositoryRef) -> RepoAnalysis:
        """Analyze a repository and return its issue rows and summary."""
        logger.info("Running report for %s", repo.full_name)

        candidates = self.collect_candidates(repo)
        rows: List[IssueResult] = []
        skipped_maintainer_issues = 0

        for issue in candidates:
            if not self._issue_filter.is_community_issue(issue):
                skipped_maintainer_issues += 1
                continue

            comments = self._comment_source.list_comments(repo, issue.number)
            rows.append(self._issue_filter.build_result(repo, issue, comments))

        summary = summarize_results(repo, rows)
        logger.info(
            "Analyzed %s: %d issues since cutoff, %d opened by maintainers",
            repo.full_name,
            len(candidates),
            skipped_maintainer_issues,
        )
        _log_summary(summary)

        return RepoAnalysis(rows=rows, summary=summary)


def _log_summary(summary: RepoSummary) -> None:
    logger.info("Total community issues: %d", summary.totalIssues)
    logger.info("Issues with an initial response: %d", summary.responded)
    logger.info("Initial response rate: %s%%", summary.responseRatePercent)

    if float(summary.responseRatePercent) < RESPONSE_RATE_TARGET:
        logger.warning(
            "Not all issues in %s received a response; the target is %.0f%%",
            summary.repo,
            RESPONSE_RATE_TARGET,
        )
    else:
        logger.info("Response coverage for %s meets the %.0f%% target", summary.repo, RESPONSE_RATE_TARGET)
