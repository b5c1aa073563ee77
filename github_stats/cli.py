"""
CLI display functions for github-stats.
"""

from datetime import date, datetime, timezone

from github_stats.date_windows import local_today, parse_timestamp
from github_stats.models import Report, RepositoryActivity
from github_stats.month_labels import month_labels
from github_stats.stats_calculator import calculate_period_stats, format_week_comparison

LEVEL_GLYPHS = ["⬛", "🟩", "🟨", "🟧", "🟥"]
EMPTY_GLYPH = "⬛"
MONTH_INDENT = "       "
MONTH_SPACING = 10
ROW_LABELS = ["", "Mon", "", "Wed", "", "Fri", ""]
MAX_REPOS_SHOWN = 5


def level_glyph(level: int) -> str:
    """Return the heatmap square for an intensity level."""
    if 0 <= level < len(LEVEL_GLYPHS):
        return LEVEL_GLYPHS[level]
    return EMPTY_GLYPH


def format_month_header(labels: list[str]) -> str:
    """Indent and space the month labels. Empty labels give a blank header."""
    if not labels:
        return MONTH_INDENT
    return MONTH_INDENT + (" " * MONTH_SPACING).join(labels)


def format_grid_rows(report: Report) -> list[str]:
    """
    Render the heatmap body, one line per weekday position.

    Row n shows the nth day of each week in provider order; weeks shorter
    than seven days are padded with empty squares.
    """
    weeks = report.contribution_graph.weeks
    rows = []
    for position, label in enumerate(ROW_LABELS):
        row = f"{label:>6}"
        for week in weeks:
            if position < len(week.days):
                row += " " + level_glyph(week.days[position].level)
            else:
                row += " " + EMPTY_GLYPH
        rows.append(row)
    return rows


def display_contribution_graph(report: Report, today: date | None = None) -> None:
    """
    Display the heatmap, the period totals and the legend.

    Args:
        report: Report from build_report()
        today: Override today's date for testing
    """
    if today is None:
        today = local_today()

    graph = report.contribution_graph

    print()
    print(format_month_header(month_labels(today.month - 1, len(graph.weeks))))
    for row in format_grid_rows(report):
        print(row)
    print()

    stats = calculate_period_stats(graph, today=today)
    print(
        f"Today: {stats.today} | "
        f"This week: {stats.this_week} ({format_week_comparison(stats)}) | "
        f"This month: {stats.this_month} | "
        f"This year: {stats.this_year}"
    )

    print()
    print("Less " + " ".join(LEVEL_GLYPHS) + " More")


def format_pushed_at(pushed_at: str, now: datetime | None = None) -> str:
    """
    Format a push timestamp relative to now.

    Returns:
        "N days ago", "N hours ago", "N minutes ago", "just now",
        or "unknown" if the timestamp can't be parsed
    """
    if now is None:
        now = datetime.now(timezone.utc)

    try:
        pushed = parse_timestamp(pushed_at)
    except (TypeError, ValueError):
        return "unknown"

    seconds = int((now - pushed).total_seconds())
    days = seconds // 86400
    hours = seconds // 3600
    minutes = seconds // 60

    if days > 0:
        return f"{days} days ago"
    elif hours > 0:
        return f"{hours} hours ago"
    elif minutes > 0:
        return f"{minutes} minutes ago"
    return "just now"


def format_repository_row(
    index: int, repo: RepositoryActivity, now: datetime | None = None
) -> str:
    """Format one line of the repositories table."""
    number = f"{index}."
    return (
        f"{number:<4} {repo.full_name:<35} {repo.today_commits:<8} "
        f"{repo.week_commits:<10} {repo.month_commits:<12} "
        f"{format_pushed_at(repo.pushed_at, now):<15}"
    )


def display_repositories(
    repos: tuple[RepositoryActivity, ...] | list[RepositoryActivity],
    now: datetime | None = None,
) -> None:
    """
    Display the most recently pushed repositories with commit counts.

    Prints nothing when there are no repositories.
    """
    if not repos:
        return

    print()
    print("Latest Updated Repositories:")
    print()
    print(
        f"{'No.':<4} {'Repository':<35} {'Today':<8} {'This Week':<10} "
        f"{'This Month':<12} {'Last Updated':<15}"
    )
    print("─" * 85)

    for i, repo in enumerate(repos[:MAX_REPOS_SHOWN], start=1):
        print(format_repository_row(i, repo, now))


def display_report(
    report: Report, today: date | None = None, now: datetime | None = None
) -> None:
    """Display the full text report."""
    display_contribution_graph(report, today=today)
    display_repositories(report.recent_repos, now=now)
