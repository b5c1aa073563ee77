"""
Value objects shared across github-stats.

Everything here is built once per run and never mutated afterwards.
"""

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class DayCell:
    """One day of the contribution calendar."""

    date: date
    count: int
    level: int  # 0-4, display hint only


@dataclass(frozen=True)
class Week:
    """A column of the calendar, in the provider's day order."""

    days: tuple[DayCell, ...] = ()


@dataclass(frozen=True)
class ContributionGraph:
    """The full week-by-day grid plus the provider's own total."""

    weeks: tuple[Week, ...] = ()
    total_contributions: int = 0

    def iter_days(self):
        for week in self.weeks:
            yield from week.days


@dataclass(frozen=True)
class PeriodStats:
    """Date-bucketed contribution totals for a single "today"."""

    today: int = 0
    this_week: int = 0
    last_week: int = 0
    this_month: int = 0
    this_year: int = 0

    @property
    def week_difference(self) -> int:
        return self.this_week - self.last_week

    @property
    def week_trend(self) -> str:
        """Return "more", "less" or "same" compared with last week."""
        if self.week_difference > 0:
            return "more"
        if self.week_difference < 0:
            return "less"
        return "same"


@dataclass(frozen=True)
class CommitCounts:
    """Commit totals for one repository."""

    today: int = 0
    week: int = 0
    month: int = 0


@dataclass(frozen=True)
class CommitAggregation:
    """
    Result of aggregating one repository's commits.

    degraded is True when a page failed and the counts are partial
    (or zero), so a failed fetch can be told apart from a quiet repository.
    """

    counts: CommitCounts = field(default_factory=CommitCounts)
    pages_fetched: int = 0
    degraded: bool = False
    error: str | None = None


@dataclass(frozen=True)
class Repository:
    """A recently pushed repository as returned by the activity API."""

    name: str
    owner: str
    pushed_at: str

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class GraphResult:
    """Result of fetching the contribution calendar and recent repositories."""

    graph: ContributionGraph = field(default_factory=ContributionGraph)
    repositories: tuple[Repository, ...] = ()
    degraded: bool = False
    error: str | None = None


@dataclass(frozen=True)
class RepositoryActivity:
    """A recently pushed repository with the principal's commit counts."""

    name: str
    full_name: str
    pushed_at: str
    today_commits: int
    week_commits: int
    month_commits: int


@dataclass(frozen=True)
class Report:
    """Everything needed to render or export one run."""

    username: str
    contribution_graph: ContributionGraph
    recent_repos: tuple[RepositoryActivity, ...] = ()
