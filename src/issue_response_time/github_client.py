"""GitHub API client supplying issues and comments for response time analysis."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Tuple

import requests

from .config import Config
from .errors import AuthenticationError, DataShapeError, TransportError
from .models import GHOST_LOGIN, Comment, Issue, RepositoryRef

logger = logging.getLogger(__name__)

ISSUES_QUERY = """
query ($owner: String!, $repo: String!, $cursor: String) {
  repository(owner: $owner, name: $repo) {
    issues(first: 100, after: $cursor, orderBy: {field: CREATED_AT, direction: DESC}, states: [OPEN, CLOSED]) {
      pageInfo {
        hasNextPage
        endCursor
      }
      nodes {
        number
        title
        createdAt
        author {
          login
        }
      }
    }
  }
}
"""


class GitHubClient:
    """Small, typed client for the GitHub issue and comment APIs.

    Requests are not retried; any failure is raised as ``TransportError`` or
    ``AuthenticationError``.
    """

    _API_URL = "https://api.github.com"
    _COMMENT_PAGE_SIZE = 100

    def __init__(self, config: Config) -> None:
        """Initialize an authenticated GitHub API client.

        Args:
            config: Validated runtime configuration including the API token
                and per-request timeout.
        """
        self._config = config
        self._timeout_seconds = config.timeout_seconds

        self._session = requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"bearer {config.token}",
                "Accept": "application/vnd.github+json",
                "User-Agent": "issue-response-time",
            }
        )

    def _build_url(self, path: str) -> str:
        return f"{self._API_URL}/{path.lstrip('/')}"

    def _parse_datetime(self, value: Optional[str], context: str = "") -> Optional[datetime]:
        """Parse GitHub ISO8601 timestamps into timezone-aware UTC datetimes.

        Raises:
            DataShapeError: If the value is present but not a valid timestamp.
        """
        if not value:
            return None

        normalized = value[:-1] + "+00:00" if value.endswith("Z") else value
        try:
            parsed = datetime.fromisoformat(normalized)
        except ValueError as exc:
            raise DataShapeError(f"GitHub returned an invalid timestamp {value!r}: {context}") from exc
        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed.astimezone(timezone.utc)

    def _send(
        self,
        method: str,
        url: str,
        accepted_statuses: Tuple[int, ...] = (),
        **kwargs: Any,
    ) -> requests.Response:
        """Send one request and translate failures into the client error kinds.

        Raises:
            AuthenticationError: If GitHub rejects the credentials (HTTP 401).
            TransportError: If the request fails, times out, or returns HTTP >= 400.
                Statuses listed in ``accepted_statuses`` are returned to the caller.
        """
        try:
            response = self._session.request(method, url, timeout=self._timeout_seconds, **kwargs)
        except requests.Timeout as exc:
            raise TransportError(
                f"GitHub request timed out after {self._timeout_seconds}s: {method} {url}"
            ) from exc
        except requests.RequestException as exc:
            raise TransportError(f"GitHub request failed: {method} {url}") from exc

        if response.status_code == 401:
            raise AuthenticationError(
                "GitHub rejected the configured token. Check the 'GITHUB_TOKEN' value."
            )

        if response.status_code >= 400 and response.status_code not in accepted_statuses:
            raise TransportError(
                "GitHub API request failed: "
                f"{method} {url} returned {response.status_code} - {response.text}"
            )

        return response

    def _decode(self, response: requests.Response, url: str) -> Any:
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"GitHub API returned invalid JSON: {url}") from exc

    def _graphql(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        url = self._build_url("graphql")
        response = self._send("POST", url, json={"query": query, "variables": variables})
        payload = self._decode(response, url)

        if not isinstance(payload, dict):
            raise TransportError(f"GitHub API returned unexpected payload shape: POST {url}")
        if payload.get("errors"):
            messages = "; ".join(str(error.get("message", error)) for error in payload["errors"])
            raise TransportError(f"GitHub GraphQL query failed: {messages}")

        return payload.get("data") or {}

    def verify_credentials(self) -> str:
        """Return the login of the authenticated user.

        Installation tokens cannot read ``/user`` and get HTTP 403 although
        they can read issues; that case returns an empty login.

        Raises:
            AuthenticationError: If the token is rejected (HTTP 401).
        """
        url = self._build_url("user")
        response = self._send("GET", url, accepted_statuses=(403,))
        if response.status_code == 403:
            logger.debug("Token cannot read the authenticated user; continuing")
            return ""
        payload = self._decode(response, url)
        return str(payload.get("login", ""))

    def list_issues(self, repo: RepositoryRef) -> Iterator[Issue]:
        """Yield issues (open and closed) newest first, one page at a time.

        The next page is only requested once the consumer has exhausted the
        current one, so callers may stop iterating early.
        """
        cursor: Optional[str] = None

        while True:
            data = self._graphql(
                ISSUES_QUERY,
                {"owner": repo.owner, "repo": repo.name, "cursor": cursor},
            )
            repository = data.get("repository")
            if repository is None:
                raise TransportError(f"Repository '{repo.full_name}' was not found.")

            issues = repository.get("issues") or {}
            for node in issues.get("nodes") or []:
                yield self._issue_from_node(repo, node)

            page_info = issues.get("pageInfo") or {}
            if not page_info.get("hasNextPage"):
                break
            cursor = page_info.get("endCursor")
            if not cursor:
                raise DataShapeError(
                    f"GitHub reported another issue page without an end cursor: repo={repo.full_name}"
                )

    def _issue_from_node(self, repo: RepositoryRef, node: Dict[str, Any]) -> Issue:
        number = node.get("number")
        created_at = self._parse_datetime(
            node.get("createdAt"),
            context=f"repo={repo.full_name}, payload={node}",
        )
        if number is None or created_at is None:
            raise DataShapeError(
                "GitHub issue payload is missing required fields: "
                f"repo={repo.full_name}, payload={node}"
            )

        author = (node.get("author") or {}).get("login") or GHOST_LOGIN
        return Issue(
            number=int(number),
            title=str(node.get("title") or ""),
            createdAt=created_at,
            author=str(author),
        )

    def list_comments(self, repo: RepositoryRef, issue_number: int) -> List[Comment]:
        """List all comments on an issue, oldest first, following ``Link`` pagination."""
        url: Optional[str] = self._build_url(f"repos/{repo.owner}/{repo.name}/issues/{issue_number}/comments")
        params: Optional[Dict[str, Any]] = {"per_page": self._COMMENT_PAGE_SIZE}
        comments: List[Comment] = []

        while url:
            response = self._send("GET", url, params=params)
            payload = self._decode(response, url)
            if not isinstance(payload, list):
                raise TransportError(f"GitHub API returned unexpected payload shape: GET {url}")

            for item in payload:
                created_at = self._parse_datetime(
                    item.get("created_at"),
                    context=f"repo={repo.full_name}, issue={issue_number}",
                )
                if created_at is None:
                    raise DataShapeError(
                        "GitHub comment payload is missing 'created_at': "
                        f"repo={repo.full_name}, issue={issue_number}"
                    )
                login = (item.get("user") or {}).get("login") or GHOST_LOGIN
                comments.append(Comment(authorLogin=str(login), createdAt=created_at))

            # The next link already carries the query string.
            url = response.links.get("next", {}).get("url")
            params = None

        return comments
