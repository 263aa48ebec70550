"""Classify activity timestamps by age for listings and filters."""

from datetime import datetime, timedelta, timezone
from enum import Enum


class ActivityLevel(str, Enum):
    HOT = "hot"          # within a day
    WARM = "warm"        # within a week
    COLD = "cold"        # within a month
    FROZEN = "frozen"    # older, or never active


def _now(now: datetime | None) -> datetime:
    return now if now is not None else datetime.now(timezone.utc)


def _age_in_days(timestamp: datetime, now: datetime) -> int:
    return (now - timestamp) // timedelta(days=1)


def get_activity_level(timestamp: datetime | None, now: datetime | None = None) -> ActivityLevel:
    if timestamp is None:
        return ActivityLevel.FROZEN
    days = _age_in_days(timestamp, _now(now))
    if days <= 1:
        return ActivityLevel.HOT
    if days <= 7:
        return ActivityLevel.WARM
    if days <= 30:
        return ActivityLevel.COLD
    return ActivityLevel.FROZEN


def format_relative_date(timestamp: datetime | None, now: datetime | None = None) -> str:
    """Human relative age: today, yesterday, 3d ago, 2w ago, 4mo ago."""
    if timestamp is None:
        return "never"
    days = _age_in_days(timestamp, _now(now))
    if days <= 0:
        return "today"
    if days == 1:
        return "yesterday"
    if days < 7:
        return f"{days}d ago"
    if days < 30:
        return f"{days // 7}w ago"
    return f"{days // 30}mo ago"


def filter_by_days(stats: list, days: int, now: datetime | None = None) -> list:
    """Keep statistics whose last activity falls within the last `days` days.

    Items without any activity are dropped.
    """
    cutoff = _now(now) - timedelta(days=days)
    return [s for s in stats if s.last_activity is not None and s.last_activity >= cutoff]


def week_start(day_key: str) -> str:
    """Monday of the week containing a YYYY-MM-DD day key."""
    day = datetime.strptime(day_key, "%Y-%m-%d").date()
    return (day - timedelta(days=day.weekday())).isoformat()
