"""Tests for issue scope and first maintainer response rules."""

import sys
from datetime import datetime, timezone
from pathlib import Path

# Add src directory to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from issue_response_time.issue_filter import IssueFilter
from issue_response_time.models import AnalysisCutoff, Comment, Issue, RepositoryRef

REPO = RepositoryRef("octo-org", "widgets")
MAINTAINERS = frozenset({"alice", "bob"})


def _utc(day: int, hour: int = 9, month: int = 3, year: int = 2025) -> datetime:
    return datetime(year, month, day, hour, tzinfo=timezone.utc)


def _filter() -> IssueFilter:
    return IssueFilter(MAINTAINERS, AnalysisCutoff(year=2025, month_index=2))


def _issue(author: str = "carol", created: datetime | None = None, number: int = 7) -> Issue:
    return Issue(number=number, title="Crash on start", createdAt=created or _utc(3, 9), author=author)


def test_is_community_issue_excludes_maintainers():
    """Verify issues opened by maintainers are not community issues."""
    issue_filter = _filter()

    assert issue_filter.is_community_issue(_issue(author="carol")) is True
    assert issue_filter.is_community_issue(_issue(author="alice")) is False


def test_is_before_cutoff_uses_month_boundary():
    """Verify the cutoff boundary is the first instant of the configured month."""
    issue_filter = _filter()

    assert issue_filter.is_before_cutoff(_issue(created=datetime(2025, 2, 28, 23, 59, tzinfo=timezone.utc)))
    assert not issue_filter.is_before_cutoff(_issue(created=datetime(2025, 3, 1, 0, 0, tzinfo=timezone.utc)))
    assert not issue_filter.is_before_cutoff(_issue(created=_utc(5, month=1, year=2026)))


def test_first_maintainer_response_skips_author_and_community_comments():
    """Verify the issue author's own and non-maintainer comments are skipped."""
    issue = _issue(author="carol")
    comments = [
        Comment(authorLogin="carol", createdAt=_utc(3, 10)),
        Comment(authorLogin="dave", createdAt=_utc(3, 11)),
        Comment(authorLogin="bob", createdAt=_utc(4, 9)),
        Comment(authorLogin="alice", createdAt=_utc(4, 10)),
    ]

    response = _filter().first_maintainer_response(issue, comments)

    assert response == comments[2]


def test_first_maintainer_response_none_without_maintainer_comments():
    """Verify no response is found when no maintainer commented."""
    comments = [Comment(authorLogin="dave", createdAt=_utc(3, 11))]

    assert _filter().first_maintainer_response(_issue(), comments) is None


def test_build_result_same_day_response_within_sla():
    """Verify a Monday issue answered the same Monday is within the target."""
    issue = _issue(created=_utc(3, 9))
    comments = [Comment(authorLogin="alice", createdAt=_utc(3, 15))]

    result = _filter().build_result(REPO, issue, comments)

    assert result.repo == "widgets"
    assert result.issueNumber == 7
    assert result.author == "carol"
    assert result.createdAt == "2025-03-03T09:00:00.000Z"
    assert result.firstResponseTimeHours == 6.0
    assert result.respondedWithinSla == "yes"


def test_build_result_friday_to_monday_is_boundary_yes():
    """Verify a Friday issue answered the next Monday is still within the target."""
    issue = _issue(created=_utc(7, 16))
    comments = [Comment(authorLogin="bob", createdAt=_utc(10, 10))]

    result = _filter().build_result(REPO, issue, comments)

    assert result.firstResponseTimeHours == 66.0
    assert result.respondedWithinSla == "yes"


def test_build_result_three_business_days_is_no():
    """Verify a response on the third business day misses the target."""
    issue = _issue(created=_utc(3, 9))
    comments = [Comment(authorLogin="bob", createdAt=_utc(5, 8))]

    result = _filter().build_result(REPO, issue, comments)

    assert result.firstResponseTimeHours == 47.0
    assert result.respondedWithinSla == "no"


def test_build_result_without_comments_has_null_fields():
    """Verify an issue with no comments records neither hours nor SLA flag."""
    result = _filter().build_result(REPO, _issue(), [])

    assert result.firstResponseTimeHours is None
    assert result.respondedWithinSla is None


def test_build_result_rounds_hours_to_two_decimals():
    """Verify response hours are rounded to two decimals."""
    issue = _issue(created=datetime(2025, 3, 3, 9, 0, 0, tzinfo=timezone.utc))
    comments = [Comment(authorLogin="alice", createdAt=datetime(2025, 3, 3, 9, 20, 0, tzinfo=timezone.utc))]

    result = _filter().build_result(REPO, issue, comments)

    assert result.firstResponseTimeHours == 0.33
