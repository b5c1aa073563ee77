"""
GitHub API client for fetching contribution and commit data.
"""

import logging

import requests

from github_stats.config import GITHUB_API_URL

logger = logging.getLogger(__name__)

CONTRIBUTIONS_QUERY = """
query($username: String!, $repoLimit: Int!) {
    user(login: $username) {
        contributionsCollection {
            contributionCalendar {
                totalContributions
                weeks {
                    contributionDays {
                        date
                        contributionCount
                        contributionLevel
                    }
                }
            }
        }
        repositories(
            first: $repoLimit
            orderBy: {field: PUSHED_AT, direction: DESC}
            ownerAffiliations: [OWNER, COLLABORATOR]
        ) {
            nodes {
                name
                pushedAt
                owner {
                    login
                }
            }
        }
    }
}
"""


class GitHubClientError(Exception):
    """Base exception for GitHub client errors."""

    pass


class UserNotFoundError(GitHubClientError):
    """Raised when the requested user does not exist."""

    pass


class GitHubClient:
    """Client for interacting with the GitHub REST and GraphQL APIs."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str = GITHUB_API_URL,
        timeout: float = 15.0,
    ):
        """
        Initialize the GitHub client.

        Args:
            token: GitHub personal access token. Without one the client
                falls back to unauthenticated (rate limited) access.
            base_url: REST API root, also used for the /graphql endpoint
            timeout: Per-request timeout in seconds
        """
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update(
            {
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
                "User-Agent": "github-stats-cli",
            }
        )
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        try:
            return self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise GitHubClientError(f"Request to GitHub failed: {e}") from e

    def _check_response(self, response: requests.Response) -> None:
        if response.status_code == 401:
            raise GitHubClientError(
                "Authentication failed. Check your GITHUB_TOKEN is valid."
            )
        elif response.status_code == 403:
            # Check for rate limiting
            remaining = response.headers.get("X-RateLimit-Remaining", "unknown")
            raise GitHubClientError(
                f"API rate limit exceeded or access forbidden. "
                f"Remaining requests: {remaining}"
            )
        elif not response.ok:
            raise GitHubClientError(
                f"GitHub API error: {response.status_code} - {response.text}"
            )

    def _json(self, response: requests.Response):
        try:
            return response.json()
        except ValueError as e:
            raise GitHubClientError(f"Invalid JSON from GitHub: {e}") from e

    def get_user(self, username: str) -> dict:
        """
        Fetch the public profile of a user.

        Args:
            username: GitHub login to look up

        Returns:
            User dictionary from the GitHub API (login, id, ...)

        Raises:
            UserNotFoundError: If the user does not exist
            GitHubClientError: If the API request fails
        """
        response = self._request("GET", f"{self.base_url}/users/{username}")

        if response.status_code == 404:
            raise UserNotFoundError(f"User '{username}' not found")
        self._check_response(response)

        user = self._json(response)
        if not isinstance(user, dict) or not user.get("login"):
            raise GitHubClientError("GitHub user response is missing the login")
        return user

    def get_contributions(self, username: str, repo_limit: int = 5) -> dict:
        """
        Fetch the contribution calendar and most recently pushed repositories.

        Args:
            username: GitHub login
            repo_limit: How many recently pushed repositories to include

        Returns:
            The GraphQL "user" object with contributionsCollection and
            repositories

        Raises:
            GitHubClientError: If the request fails or GraphQL reports errors
        """
        response = self._request(
            "POST",
            f"{self.base_url}/graphql",
            json={
                "query": CONTRIBUTIONS_QUERY,
                "variables": {"username": username, "repoLimit": repo_limit},
            },
        )
        self._check_response(response)

        payload = self._json(response)
        if not isinstance(payload, dict):
            raise GitHubClientError("GitHub GraphQL response is invalid")
        if payload.get("errors"):
            messages = "; ".join(
                str(error.get("message", error)) if isinstance(error, dict) else str(error)
                for error in payload["errors"]
            )
            raise GitHubClientError(f"GitHub GraphQL returned errors: {messages}")

        user = (payload.get("data") or {}).get("user")
        if not isinstance(user, dict):
            raise GitHubClientError(f"No contribution data for '{username}'")
        return user

    def list_commits(
        self,
        full_name: str,
        since: str,
        until: str,
        page: int = 1,
        per_page: int = 100,
    ) -> list[dict]:
        """
        Fetch one page of commits for a repository.

        Args:
            full_name: Repository in owner/name form
            since: ISO 8601 UTC lower bound (e.g. 2026-10-01T00:00:00Z)
            until: ISO 8601 UTC upper bound
            page: 1-based page number
            per_page: Commits per page (max 100)

        Returns:
            List of commit dictionaries from the GitHub API

        Raises:
            GitHubClientError: If the API request fails
        """
        url = f"{self.base_url}/repos/{full_name}/commits"
        params = {
            "since": since,
            "until": until,
            "page": page,
            "per_page": min(per_page, 100),
        }

        logger.debug("Fetching commits for %s page %d", full_name, page)
        response = self._request("GET", url, params=params)
        self._check_response(response)

        commits = self._json(response)
        if not isinstance(commits, list):
            raise GitHubClientError(f"Unexpected commit listing for {full_name}")
        return commits
