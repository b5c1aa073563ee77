"""
FastAPI web application for github-stats.

Serves the same report document the CLI prints with --format json.
"""

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from github_stats.config import resolve_token, resolve_username
from github_stats.github_client import GitHubClient, GitHubClientError, UserNotFoundError
from github_stats.report import build_report, report_to_dict

app = FastAPI(
    title="github-stats",
    description="GitHub contribution statistics",
    version="0.1.0",
)


class DayModel(BaseModel):
    """One day of the contribution calendar."""

    date: str = Field(..., description="Calendar date (YYYY-MM-DD)")
    count: int = Field(..., ge=0)
    level: int = Field(..., ge=0, le=4, description="Heatmap intensity (0-4)")


class WeekModel(BaseModel):
    days: list[DayModel]


class ContributionGraphModel(BaseModel):
    weeks: list[WeekModel]
    total_contributions: int = Field(..., ge=0)


class RepositoryModel(BaseModel):
    """A recently pushed repository with commit counts for the user."""

    name: str
    full_name: str
    pushed_at: str
    today_commits: int = Field(..., ge=0)
    week_commits: int = Field(..., ge=0)
    month_commits: int = Field(..., ge=0)


class ReportModel(BaseModel):
    """Response model for the stats endpoints."""

    username: str
    contribution_graph: ContributionGraphModel
    recent_repos: list[RepositoryModel]


@app.get("/health")
def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


def _fetch_report(username: str) -> dict:
    """
    Build the report for a user.

    Raises:
        HTTPException: 404 for unknown users, 502 on GitHub API errors
    """
    client = GitHubClient(resolve_token())

    try:
        report = build_report(client, username)
    except UserNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except GitHubClientError as e:
        raise HTTPException(status_code=502, detail=str(e))

    return report_to_dict(report)


@app.get("/api/stats", response_model=ReportModel)
def get_default_stats():
    """
    Get the report for the configured user.

    Returns:
        JSON report for GITHUB_USERNAME
    """
    try:
        username = resolve_username()
    except ValueError as e:
        raise HTTPException(status_code=500, detail=f"Configuration error: {e}")
    return _fetch_report(username)


@app.get("/api/stats/{username}", response_model=ReportModel)
def get_stats(username: str):
    """
    Get the contribution graph and recent repository activity for a user.

    Returns:
        JSON with username, contribution_graph and recent_repos
    """
    return _fetch_report(username)
