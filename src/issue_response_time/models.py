"""Domain models for issue response time reporting.

These dataclasses intentionally model only the subset of API payload fields that
are required to measure maintainer response time.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Optional

GHOST_LOGIN = "ghost"


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    """Identifies one target repository as ``owner/name``."""

    owner: str
    name: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True, slots=True)
class AnalysisCutoff:
    """Earliest year/month included in the analysis.

    ``month_index`` is 0-based (0 is January).
    """

    year: int
    month_index: int

    @classmethod
    def from_month(cls, year: int, month: int) -> "AnalysisCutoff":
        """Build a cutoff from a calendar month in the range 1-12."""
        return cls(year=year, month_index=month - 1)

    @property
    def boundary(self) -> datetime:
        """First UTC instant that is inside the analysis window."""
        return datetime(self.year, self.month_index + 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True, slots=True)
class Issue:
    """Represents the minimal issue data required for response time analysis."""

    number: int
    title: str
    createdAt: datetime
    author: str = GHOST_LOGIN


@dataclass(frozen=True, slots=True)
class Comment:
    """Represents the minimal comment data used to find the first maintainer response."""

    authorLogin: str
    createdAt: datetime


@dataclass(frozen=True, slots=True)
class IssueResult:
    """One report row for a community issue."""

    repo: str
    issueNumber: int
    title: str
    author: str
    createdAt: str
    firstResponseTimeHours: Optional[float] = None
    respondedWithinSla: Optional[str] = None


@dataclass(frozen=True, slots=True)
class RepoSummary:
    """Aggregated response statistics for one repository."""

    repo: str
    totalIssues: int
    responded: int
    responseRatePercent: str


@dataclass(frozen=True, slots=True)
class RepoAnalysis:
    """Rows and summary produced by analyzing a single repository."""

    rows: List[IssueResult]
    summary: RepoSummary


@dataclass(frozen=True, slots=True)
class AggregateReport:
    """Rows and summaries collected across all configured repositories."""

    allRows: List[IssueResult]
    allSummaries: List[RepoSummary]
