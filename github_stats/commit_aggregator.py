"""
Count a user's commits per repository for today, this week and this month.
"""

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo

from github_stats.config import MAX_PAGES, PER_PAGE
from github_stats.date_windows import (
    commit_windows,
    format_utc,
    local_today,
    parse_timestamp,
)
from github_stats.github_client import GitHubClientError
from github_stats.models import CommitAggregation, CommitCounts

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommitFetch:
    """Commits by one author, gathered across pages."""

    commits: list
    pages_fetched: int
    error: str | None = None


def is_authored_by(commit: dict, login: str) -> bool:
    """
    Check the GitHub account attributed to a commit.

    Uses the linked GitHub account rather than the git author name/email,
    which can match unrelated people with common names.
    """
    author = commit.get("author")
    if not isinstance(author, dict):
        return False
    commit_login = author.get("login")
    return isinstance(commit_login, str) and commit_login.lower() == login.lower()


def commit_timestamp(commit: dict) -> datetime | None:
    """Return the commit's authoring time, or None if it is missing or malformed."""
    details = commit.get("commit")
    if not isinstance(details, dict):
        return None
    author = details.get("author")
    if not isinstance(author, dict):
        return None
    raw_date = author.get("date")
    if not isinstance(raw_date, str):
        return None
    try:
        return parse_timestamp(raw_date)
    except ValueError:
        return None


def fetch_author_commits(
    client,
    full_name: str,
    author: str,
    since: datetime,
    until: datetime,
    per_page: int = PER_PAGE,
    max_pages: int = MAX_PAGES,
) -> CommitFetch:
    """
    Page through a repository's commits and keep those by author.

    Paging stops at the first empty page or after max_pages. A failing page
    ends paging early; commits from earlier pages are kept and the error is
    recorded on the result.

    Args:
        client: Object with a GitHubClient-compatible list_commits()
        full_name: Repository in owner/name form
        author: GitHub login whose commits are counted
        since: Aware lower bound of the window
        until: Aware upper bound of the window

    Returns:
        CommitFetch with the matching commits
    """
    since_str = format_utc(since)
    until_str = format_utc(until)
    commits = []
    pages_fetched = 0

    for page in range(1, max_pages + 1):
        try:
            batch = client.list_commits(
                full_name, since_str, until_str, page=page, per_page=per_page
            )
        except GitHubClientError as e:
            logger.warning("Stopped fetching commits for %s: %s", full_name, e)
            return CommitFetch(commits=commits, pages_fetched=pages_fetched, error=str(e))

        pages_fetched += 1
        if not batch:
            break

        commits.extend(
            commit for commit in batch
            if isinstance(commit, dict) and is_authored_by(commit, author)
        )
    else:
        logger.debug("Reached the %d page limit for %s", max_pages, full_name)

    return CommitFetch(commits=commits, pages_fetched=pages_fetched)


def aggregate_commit_counts(
    client,
    full_name: str,
    author: str,
    now: datetime | None = None,
    tz: tzinfo | None = None,
    max_pages: int = MAX_PAGES,
) -> CommitAggregation:
    """
    Count author's commits in a repository for today, this week and this month.

    Bucket boundaries come from date_windows.commit_windows, the same
    Monday-based rules the calendar stats use, so the per-repository counts
    line up with the totals under the heatmap.

    Never raises for API failures: the result is marked degraded and carries
    whatever could be counted.

    Args:
        client: Object with a GitHubClient-compatible list_commits()
        full_name: Repository in owner/name form
        author: GitHub login whose commits are counted
        now: Override the current time for testing
        tz: Time zone for day boundaries. Defaults to the system zone.

    Returns:
        CommitAggregation with today/week/month counts
    """
    if now is None:
        today = local_today(tz)
    elif tz is not None:
        today = now.astimezone(tz).date()
    else:
        today = now.astimezone().date() if now.tzinfo else now.date()

    windows = commit_windows(today, tz)

    fetch = fetch_author_commits(
        client,
        full_name,
        author,
        since=windows.fetch_since,
        until=windows.today_end,
        max_pages=max_pages,
    )

    today_count = 0
    week_count = 0
    before_month = 0

    for commit in fetch.commits:
        timestamp = commit_timestamp(commit)
        if timestamp is None:
            # Still part of the fetched total, just not placeable in a day
            continue
        if windows.today_start <= timestamp <= windows.today_end:
            today_count += 1
        if windows.week_start <= timestamp <= windows.today_end:
            week_count += 1
        if timestamp < windows.month_start:
            before_month += 1

    counts = CommitCounts(
        today=today_count,
        week=week_count,
        month=len(fetch.commits) - before_month,
    )

    return CommitAggregation(
        counts=counts,
        pages_fetched=fetch.pages_fetched,
        degraded=fetch.error is not None,
        error=fetch.error,
    )
