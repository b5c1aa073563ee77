"""
Assemble the full report for a user and export it as JSON.
"""

import json
import logging
from collections.abc import Mapping
from datetime import datetime, timezone, tzinfo

from github_stats.calendar_grid import build_contribution_graph
from github_stats.commit_aggregator import aggregate_commit_counts
from github_stats.config import REPO_LIMIT
from github_stats.github_client import GitHubClientError
from github_stats.models import (
    GraphResult,
    Report,
    Repository,
    RepositoryActivity,
)

logger = logging.getLogger(__name__)


def _mapping_get(data, key):
    """Return data[key] when data is a mapping, otherwise None."""
    if not isinstance(data, Mapping):
        return None
    return data.get(key)


def parse_repositories(user_data: dict) -> tuple[Repository, ...]:
    """Extract recently pushed repositories from the GraphQL user object."""
    nodes = _mapping_get(_mapping_get(user_data, "repositories"), "nodes")
    if not isinstance(nodes, list):
        return ()

    repositories = []
    for node in nodes:
        if not isinstance(node, Mapping):
            continue
        owner = _mapping_get(node.get("owner"), "login")
        name = node.get("name")
        if not isinstance(owner, str) or not owner or not isinstance(name, str) or not name:
            logger.debug("Skipping repository without owner/name: %r", node)
            continue
        pushed_at = node.get("pushedAt")
        repositories.append(
            Repository(
                name=name,
                owner=owner,
                pushed_at=pushed_at if isinstance(pushed_at, str) else "",
            )
        )
    return tuple(repositories)


def fetch_graph(client, username: str, repo_limit: int = REPO_LIMIT) -> GraphResult:
    """
    Fetch the contribution calendar and recent repositories.

    A failure here leaves the report without a graph rather than aborting
    the run, so the result is marked degraded instead of raising.
    """
    try:
        user_data = client.get_contributions(username, repo_limit=repo_limit)
    except GitHubClientError as e:
        logger.warning("Contribution graph unavailable for %s: %s", username, e)
        return GraphResult(degraded=True, error=str(e))

    calendar = _mapping_get(
        _mapping_get(user_data, "contributionsCollection"), "contributionCalendar"
    )
    if not isinstance(calendar, Mapping):
        logger.warning("Contribution calendar missing for %s", username)
        return GraphResult(degraded=True, error="Contribution calendar is missing")

    return GraphResult(
        graph=build_contribution_graph(calendar),
        repositories=parse_repositories(user_data),
    )


def build_report(
    client,
    username: str,
    now: datetime | None = None,
    tz: tzinfo | None = None,
) -> Report:
    """
    Build the report for a user.

    The user lookup is mandatory; the contribution graph and per-repository
    commit counts are best effort and fall back to empty values.

    Args:
        client: GitHubClient (or compatible object)
        username: GitHub login to report on
        now: Override the current time for testing. Resolved once, so every
            repository is bucketed against the same day.
        tz: Time zone for day boundaries. Defaults to the system zone.

    Returns:
        Report for the user

    Raises:
        UserNotFoundError: If the user does not exist
        GitHubClientError: If the user lookup fails
    """
    if now is None:
        now = datetime.now(timezone.utc)

    user = client.get_user(username)
    login = user["login"]

    graph_result = fetch_graph(client, login)

    recent_repos = []
    for repository in graph_result.repositories:
        aggregation = aggregate_commit_counts(
            client, repository.full_name, login, now=now, tz=tz
        )
        if aggregation.degraded:
            logger.warning(
                "Commit counts for %s are partial: %s",
                repository.full_name,
                aggregation.error,
            )
        recent_repos.append(
            RepositoryActivity(
                name=repository.name,
                full_name=repository.full_name,
                pushed_at=repository.pushed_at,
                today_commits=aggregation.counts.today,
                week_commits=aggregation.counts.week,
                month_commits=aggregation.counts.month,
            )
        )

    return Report(
        username=login,
        contribution_graph=graph_result.graph,
        recent_repos=tuple(recent_repos),
    )


def report_to_dict(report: Report) -> dict:
    """Convert a Report to plain JSON-compatible data with stable field names."""
    graph = report.contribution_graph
    return {
        "username": report.username,
        "contribution_graph": {
            "weeks": [
                {
                    "days": [
                        {
                            "date": day.date.isoformat(),
                            "count": day.count,
                            "level": day.level,
                        }
                        for day in week.days
                    ]
                }
                for week in graph.weeks
            ],
            "total_contributions": graph.total_contributions,
        },
        "recent_repos": [
            {
                "name": repo.name,
                "full_name": repo.full_name,
                "pushed_at": repo.pushed_at,
                "today_commits": repo.today_commits,
                "week_commits": repo.week_commits,
                "month_commits": repo.month_commits,
            }
            for repo in report.recent_repos
        ],
    }


def report_to_json(report: Report) -> str:
    return json.dumps(report_to_dict(report), indent=2, ensure_ascii=False)
