"""
Activity streak calculation for the dashboard.

A streak is the number of consecutive calendar days, counting back from
today, with at least one completed task or completed pomodoro session.
Having nothing logged yet today does not reset the streak.
"""

from datetime import date, datetime, timedelta
from typing import Any, Optional, Set

from procrastinot.core.models import coerce_sessions, coerce_tasks
from procrastinot.core.windows import local_date, local_now

MAX_STREAK_DAYS = 365


def activity_dates(tasks: Any, sessions: Any, now: datetime) -> Set[date]:
    """
    Collect the local calendar days that contain qualifying activity.

    Args:
        tasks: Tasks (models or API dicts)
        sessions: Pomodoro sessions (models or API dicts)
        now: Reference datetime supplying the timezone

    Returns:
        Set of dates with at least one completed task or session
    """
    days = set()
    for task in coerce_tasks(tasks):
        if task.is_completed and task.completion_time is not None:
            days.add(local_date(task.completion_time, now))
    for session in coerce_sessions(sessions):
        if session.is_completed and session.created_at is not None:
            days.add(local_date(session.created_at, now))
    return days


def calculate_streak(
    tasks: Any,
    sessions: Any,
    now: Optional[datetime] = None,
    max_days: int = MAX_STREAK_DAYS,
) -> int:
    """
    Count consecutive active days walking backward from today.

    Today (offset 0) may be empty without breaking the streak; any other
    missing day ends the scan. At most ``max_days`` days are examined.

    Args:
        tasks: Tasks (models or API dicts)
        sessions: Pomodoro sessions (models or API dicts)
        now: Current datetime (defaults to local now)
        max_days: Scan limit

    Returns:
        Streak length in days
    """
    if now is None:
        now = local_now()

    days = activity_dates(tasks, sessions, now)
    today = now.date()

    streak = 0
    for offset in range(max_days):
        if today - timedelta(days=offset) in days:
            streak += 1
        elif offset > 0:
            break

    return streak
