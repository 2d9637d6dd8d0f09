"""
Streaks - consecutive calendar days with at least one report.
"""

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Iterable

from civic_leaderboard.models.activity import ActivityRecord


def _local_date(moment: datetime, tz: tzinfo) -> date:
    # Naive timestamps come from the report store in UTC
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(tz).date()


def activity_dates(records: Iterable[ActivityRecord], tz: tzinfo = timezone.utc) -> set[date]:
    """Distinct calendar days (in tz) that have activity"""
    return {_local_date(record.created_at, tz) for record in records}


def current_streak(records: Iterable[ActivityRecord], tz: tzinfo = timezone.utc) -> int:
    """
    Count consecutive days backwards from the most recent active day.

    This is the *current* streak, not the longest one: D, D-1, D-2 gives 3,
    D and D-2 gives 1.
    """
    days = activity_dates(records, tz)
    if not days:
        return 0

    streak = 0
    check = max(days)
    while check in days:
        streak += 1
        check -= timedelta(days=1)

    return streak


def longest_streak(records: Iterable[ActivityRecord], tz: tzinfo = timezone.utc) -> int:
    """Longest run of consecutive active days in the whole history"""
    days = sorted(activity_dates(records, tz))
    if not days:
        return 0

    best = run = 1
    for previous, current in zip(days, days[1:]):
        if current - previous == timedelta(days=1):
            run += 1
            best = max(best, run)
        else:
            run = 1

    return best
