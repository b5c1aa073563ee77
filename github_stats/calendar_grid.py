"""
Build the contribution calendar grid from GitHub's GraphQL payload.
"""

import logging
from collections.abc import Mapping
from datetime import datetime

from github_stats.models import ContributionGraph, DayCell, Week

logger = logging.getLogger(__name__)

CONTRIBUTION_LEVELS = {
    "NONE": 0,
    "FIRST_QUARTILE": 1,
    "SECOND_QUARTILE": 2,
    "THIRD_QUARTILE": 3,
    "FOURTH_QUARTILE": 4,
}


def contribution_level(label) -> int:
    """
    Map GitHub's contributionLevel label to a heatmap level.

    Args:
        label: One of NONE, FIRST_QUARTILE ... FOURTH_QUARTILE

    Returns:
        Level from 0-4. Unknown labels map to 0.
    """
    if not isinstance(label, str):
        return 0
    return CONTRIBUTION_LEVELS.get(label, 0)


def parse_day(raw_day: dict) -> DayCell | None:
    """
    Convert one contributionDays entry into a DayCell.

    Returns None for a malformed record (bad date or count) so the caller
    can skip it without discarding the rest of the year.
    """
    raw_date = raw_day.get("date")
    raw_count = raw_day.get("contributionCount")

    try:
        day = datetime.strptime(raw_date, "%Y-%m-%d").date()
    except (TypeError, ValueError):
        logger.debug("Skipping day with malformed date: %r", raw_date)
        return None

    if isinstance(raw_count, bool) or not isinstance(raw_count, int) or raw_count < 0:
        logger.debug("Skipping %s with malformed count: %r", raw_date, raw_count)
        return None

    return DayCell(
        date=day,
        count=raw_count,
        level=contribution_level(raw_day.get("contributionLevel")),
    )


def build_contribution_graph(calendar: dict) -> ContributionGraph:
    """
    Build a ContributionGraph from a contributionCalendar mapping.

    Weeks and days keep the provider's order. No sorting or deduplication
    is done here.

    Args:
        calendar: Mapping with totalContributions and
            weeks[].contributionDays[] (date, contributionCount,
            contributionLevel)

    Returns:
        ContributionGraph with the provider's total carried through as-is
    """
    raw_weeks = calendar.get("weeks")
    if not isinstance(raw_weeks, list):
        raw_weeks = []

    weeks = []
    for raw_week in raw_weeks:
        if not isinstance(raw_week, Mapping):
            logger.debug("Skipping malformed week: %r", raw_week)
            continue
        raw_days = raw_week.get("contributionDays")
        if not isinstance(raw_days, list):
            raw_days = []

        days = []
        for raw_day in raw_days:
            if not isinstance(raw_day, Mapping):
                logger.debug("Skipping malformed day: %r", raw_day)
                continue
            cell = parse_day(raw_day)
            if cell is not None:
                days.append(cell)
        weeks.append(Week(days=tuple(days)))

    total = calendar.get("totalContributions", 0)
    if not isinstance(total, int) or total < 0:
        total = 0

    return ContributionGraph(weeks=tuple(weeks), total_contributions=total)
