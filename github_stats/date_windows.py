"""
Date window helpers shared by the calendar stats and the commit aggregator.

Both sides must agree on where "this week" and "this month" begin, so the
boundaries are derived in one place.
"""

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone, tzinfo

END_OF_DAY = time(23, 59, 59)


def week_start(day: date) -> date:
    """Return the Monday of the week containing day."""
    return day - timedelta(days=day.weekday())


def month_start(day: date) -> date:
    return day.replace(day=1)


def year_start(day: date) -> date:
    return day.replace(month=1, day=1)


def local_today(tz: tzinfo | None = None) -> date:
    """Return today's date in tz, or in the system zone when tz is None."""
    if tz is None:
        return datetime.now().date()
    return datetime.now(tz).date()


def to_utc(day: date, at: time, tz: tzinfo | None = None) -> datetime:
    """
    Convert a local wall-clock moment to an aware UTC datetime.

    With tz=None the naive datetime is interpreted in the system time zone,
    which keeps daylight saving transitions correct for the given day.
    """
    naive = datetime.combine(day, at)
    if tz is None:
        return naive.astimezone(timezone.utc)
    return naive.replace(tzinfo=tz).astimezone(timezone.utc)


def format_utc(moment: datetime) -> str:
    """Format an aware datetime the way the GitHub REST API expects."""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_timestamp(value: str) -> datetime:
    """
    Parse an RFC 3339 timestamp such as "2026-10-19T08:00:00Z".

    Raises:
        ValueError: If the value is not a timezone-aware timestamp
    """
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        raise ValueError(f"Timestamp has no UTC offset: {value!r}")
    return parsed


@dataclass(frozen=True)
class CommitWindows:
    """UTC instants bounding the commit buckets for one local day."""

    today_start: datetime
    today_end: datetime
    week_start: datetime
    month_start: datetime

    @property
    def fetch_since(self) -> datetime:
        """Earliest instant any bucket needs."""
        return min(self.week_start, self.month_start)


def commit_windows(today: date, tz: tzinfo | None = None) -> CommitWindows:
    """Build the UTC bucket boundaries for a local calendar day."""
    return CommitWindows(
        today_start=to_utc(today, time.min, tz),
        today_end=to_utc(today, END_OF_DAY, tz),
        week_start=to_utc(week_start(today), time.min, tz),
        month_start=to_utc(month_start(today), time.min, tz),
    )
