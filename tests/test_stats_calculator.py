"""
Tests for the contribution period statistics.
"""

from datetime import date, timedelta

import pytest

from github_stats.models import ContributionGraph, DayCell, PeriodStats, Week
from github_stats.stats_calculator import calculate_period_stats, format_week_comparison


def make_graph(counts: dict[str, int]) -> ContributionGraph:
    """Build a graph from {date: count}, seven days per week in date order."""
    days = [
        DayCell(date=date.fromisoformat(day), count=count, level=0)
        for day, count in sorted(counts.items())
    ]
    weeks = tuple(Week(days=tuple(days[i:i + 7])) for i in range(0, len(days), 7))
    return ContributionGraph(weeks=weeks, total_contributions=sum(counts.values()))


def daily_counts(start: date, end: date, count: int = 1) -> dict[str, int]:
    counts = {}
    day = start
    while day <= end:
        counts[day.isoformat()] = count
        day += timedelta(days=1)
    return counts


class TestCalculatePeriodStats:
    """Tests for calculate_period_stats."""

    @pytest.mark.parametrize(
        "today",
        [date(2026, 1, 1), date(2026, 6, 1), date(2026, 10, 19), date(2028, 2, 29)],
    )
    def test_empty_graph_returns_zeros(self, today):
        stats = calculate_period_stats(ContributionGraph(), today=today)

        assert stats == PeriodStats()
        assert stats.week_trend == "same"

    def test_today_count(self):
        graph = make_graph({"2026-10-18": 4, "2026-10-19": 6})

        stats = calculate_period_stats(graph, today=date(2026, 10, 19))

        assert stats.today == 6

    def test_today_last_match_wins_for_duplicates(self):
        graph = ContributionGraph(
            weeks=(
                Week(days=(DayCell(date(2026, 10, 19), 2, 1),)),
                Week(days=(DayCell(date(2026, 10, 19), 5, 2),)),
            )
        )

        stats = calculate_period_stats(graph, today=date(2026, 10, 19))

        assert stats.today == 5

    def test_monday_starts_a_new_week(self):
        """On a Monday, Sunday's contributions belong to last week."""
        today = date(2026, 6, 1)  # Monday
        graph = make_graph({"2026-05-31": 3, "2026-06-01": 2})

        stats = calculate_period_stats(graph, today=today)

        assert stats.this_week == 2
        assert stats.last_week == 3

    def test_week_windows_are_contiguous_and_disjoint(self):
        """Every day of the last two weeks lands in exactly one week bucket."""
        today = date(2026, 6, 3)  # Wednesday
        counts = daily_counts(date(2026, 5, 18), today)
        graph = make_graph(counts)

        stats = calculate_period_stats(graph, today=today)

        # Mon 1 Jun - Wed 3 Jun
        assert stats.this_week == 3
        # Mon 25 May - Sun 31 May
        assert stats.last_week == 7
        # 18-24 May is older than last week
        assert stats.this_week + stats.last_week == 10

    def test_week_spanning_month_boundary(self):
        today = date(2026, 10, 2)  # Friday, week started Mon 28 Sep
        graph = make_graph({"2026-09-28": 1, "2026-09-30": 2, "2026-10-01": 4, "2026-10-02": 8})

        stats = calculate_period_stats(graph, today=today)

        assert stats.this_week == 15
        assert stats.this_month == 12

    def test_month_and_year(self):
        today = date(2026, 3, 15)
        graph = make_graph(
            {
                "2025-12-31": 100,
                "2026-01-01": 1,
                "2026-02-28": 2,
                "2026-03-01": 4,
                "2026-03-15": 8,
            }
        )

        stats = calculate_period_stats(graph, today=today)

        assert stats.this_month == 12
        assert stats.this_year == 15

    def test_january_first(self):
        today = date(2026, 1, 1)  # Thursday, week started Mon 29 Dec 2025
        graph = make_graph({"2025-12-29": 1, "2025-12-31": 2, "2026-01-01": 4})

        stats = calculate_period_stats(graph, today=today)

        assert stats.today == 4
        assert stats.this_week == 7
        assert stats.this_month == 4
        assert stats.this_year == 4

    def test_defaults_to_local_today(self):
        today = date.today()
        graph = make_graph({today.isoformat(): 3})

        stats = calculate_period_stats(graph)

        assert stats.today == 3


class TestWeekComparison:
    """Tests for the week-over-week comparison."""

    def test_more_than_last_week(self):
        stats = PeriodStats(this_week=10, last_week=4)
        assert stats.week_difference == 6
        assert stats.week_trend == "more"
        assert format_week_comparison(stats) == "6 more than last week"

    def test_less_than_last_week(self):
        stats = PeriodStats(this_week=1, last_week=4)
        assert stats.week_difference == -3
        assert stats.week_trend == "less"
        assert format_week_comparison(stats) == "3 less than last week"

    def test_same_as_last_week(self):
        stats = PeriodStats(this_week=4, last_week=4)
        assert stats.week_trend == "same"
        assert format_week_comparison(stats) == "same as last week"
