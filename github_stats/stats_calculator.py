"""
Calculate today/week/month/year contribution totals from the calendar grid.
"""

from datetime import date, timedelta

from github_stats.date_windows import local_today, month_start, week_start, year_start
from github_stats.models import ContributionGraph, PeriodStats


def calculate_period_stats(
    graph: ContributionGraph, today: date | None = None
) -> PeriodStats:
    """
    Calculate contribution totals for the periods shown under the heatmap.

    Weeks run Monday to Sunday here regardless of how the provider
    arranges days inside each grid column.

    Args:
        graph: Contribution grid from build_contribution_graph()
        today: Override today's date for testing. Defaults to the local date.

    Returns:
        PeriodStats with:
        - today: Contributions on today's date
        - this_week: Contributions since Monday
        - last_week: Contributions Monday-Sunday of the previous week
        - this_month: Contributions since the 1st of the month
        - this_year: Contributions since January 1st
    """
    if today is None:
        today = local_today()

    # Period boundaries
    this_week_start = week_start(today)
    last_week_start = this_week_start - timedelta(days=7)
    last_week_end = this_week_start - timedelta(days=1)
    this_month_start = month_start(today)
    this_year_start = year_start(today)

    today_count = 0
    this_week = 0
    last_week = 0
    this_month = 0
    this_year = 0

    for day in graph.iter_days():
        if day.date == today:
            today_count = day.count
        if day.date >= this_week_start:
            this_week += day.count
        if last_week_start <= day.date <= last_week_end:
            last_week += day.count
        if day.date >= this_month_start:
            this_month += day.count
        if day.date >= this_year_start:
            this_year += day.count

    return PeriodStats(
        today=today_count,
        this_week=this_week,
        last_week=last_week,
        this_month=this_month,
        this_year=this_year,
    )


def format_week_comparison(stats: PeriodStats) -> str:
    """Describe this week against last week, e.g. "3 more than last week"."""
    difference = stats.week_difference
    if stats.week_trend == "more":
        return f"{difference} more than last week"
    if stats.week_trend == "less":
        return f"{-difference} less than last week"
    return "same as last week"
