"""Scope and first-response rules applied to fetched issues.

Business logic:
- Issues opened by a maintainer are not community issues and are dropped.
- The first maintainer response is the first comment, in the order returned by
  the comment source, whose author is a maintainer other than the issue author.
- A response counts as within the 48 business hour target when it lands within
  two business days of issue creation (see :func:`business_days_between`).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import AbstractSet, Iterable, Optional

from .business_time import business_days_between
from .models import AnalysisCutoff, Comment, Issue, IssueResult, RepositoryRef

logger = logging.getLogger(__name__)

SLA_BUSINESS_DAYS = 2


class IssueFilter:
    """Applies maintainer and cutoff policy to issues and their comments."""

    def __init__(self, maintainers: AbstractSet[str], cutoff: AnalysisCutoff) -> None:
        self._maintainers = frozenset(maintainers)
        self._cutoff = cutoff

    def is_maintainer(self, login: str) -> bool:
        return login in self._maintainers

    def is_community_issue(self, issue: Issue) -> bool:
        """Return ``True`` when the issue was not opened by a maintainer."""
        return not self.is_maintainer(issue.author)

    def is_before_cutoff(self, issue: Issue) -> bool:
        """Return ``True`` when the issue was created strictly before the cutoff month."""
        return issue.createdAt < self._cutoff.boundary

    def first_maintainer_response(
        self,
        issue: Issue,
        comments: Iterable[Comment],
    ) -> Optional[Comment]:
        """Return the first comment by a maintainer who is not the issue author.

        Comments are not re-sorted; the source order is taken as chronological.
        """
        for comment in comments:
            if comment.authorLogin == issue.author:
                continue
            if self.is_maintainer(comment.authorLogin):
                return comment
        return None

    @staticmethod
    def classify_sla(created_at: datetime, responded_at: datetime) -> str:
        """Return ``"yes"`` when the response landed within the business-day target."""
        business_days = business_days_between(created_at, responded_at)
        return "yes" if business_days <= SLA_BUSINESS_DAYS else "no"

    def build_result(
        self,
        repo: RepositoryRef,
        issue: Issue,
        comments: Iterable[Comment],
    ) -> IssueResult:
        """Produce the report row for a community issue."""
        response_hours: Optional[float] = None
        responded_within_sla: Optional[str] = None

        response = self.first_maintainer_response(issue, comments)
        if response is not None:
            elapsed_seconds = (response.createdAt - issue.createdAt).total_seconds()
            response_hours = round(elapsed_seconds / 3600, 2)
            responded_within_sla = self.classify_sla(issue.createdAt, response.createdAt)
        else:
            logger.debug("No maintainer response recorded for %s#%d", repo.full_name, issue.number)

        return IssueResult(
            repo=repo.name,
            issueNumber=issue.number,
            title=issue.title,
            author=issue.author,
            createdAt=_iso_utc(issue.createdAt),
            firstResponseTimeHours=response_hours,
            respondedWithinSla=responded_within_sla,
        )


def _iso_utc(value: datetime) -> str:
    """Format a UTC datetime the way GitHub does (``2025-03-03T09:00:00.000Z``)."""
    utc_value = value.astimezone(timezone.utc)
    return utc_value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc_value.microsecond // 1000:03d}Z"
