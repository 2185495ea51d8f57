"""
Statistics calculation for the Procrastinot dashboard.

Reduces raw tasks and pomodoro sessions into flat statistics records:
- DashboardStats: counts, focus time, streak, level and productivity
- PomodoroStats: focus statistics for a named timeframe (today/week/month)

All functions are pure: inputs are never mutated and ``now`` is injectable.
"""

import logging
from dataclasses import asdict, dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from procrastinot.core.models import (
    PomodoroSession,
    TASK_IN_PROGRESS,
    TASK_PENDING,
    coerce_sessions,
    coerce_tasks,
)
from procrastinot.core.windows import (
    TIMEFRAMES,
    local_now,
    round_half_up,
    timeframe_window,
    today_window,
    trailing_window,
)
from procrastinot.dashboard.streak import MAX_STREAK_DAYS, calculate_streak

logger = logging.getLogger(__name__)

# Activities needed per level
ACTIVITIES_PER_LEVEL = 10

SECONDS_PER_HOUR = 3600


@dataclass
class DashboardStats:
    """Statistics for the dashboard."""
    tasks_completed: int = 0
    today_tasks_completed: int = 0
    weekly_tasks_completed: int = 0
    total_focus_time: float = 0.0  # hours
    today_focus_time: float = 0.0  # hours
    total_sessions: int = 0
    today_sessions: int = 0
    weekly_sessions: int = 0
    streak: int = 0
    level: int = 1
    productivity_score: int = 100
    pending_tasks: int = 0
    in_progress_tasks: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class PomodoroStats:
    """Focus statistics over one timeframe."""
    timeframe: str
    total_sessions: int = 0
    total_focus_time: float = 0.0  # hours
    average_session_length: int = 0  # seconds
    productivity_score: int = 0
    sessions: List[PomodoroSession] = field(default_factory=list)


def focus_hours(sessions: List[PomodoroSession]) -> float:
    """Summed session duration in hours, one decimal, halves rounded up"""
    total_seconds = sum(s.duration for s in sessions)
    return round_half_up(total_seconds / SECONDS_PER_HOUR, 1)


def calculate_level(tasks_completed: int, sessions_completed: int) -> int:
    """One level per ten completed activities, starting at level 1"""
    return (tasks_completed + sessions_completed) // ACTIVITIES_PER_LEVEL + 1


def calculate_dashboard_stats(
    tasks: Any,
    sessions: Any,
    now: Optional[datetime] = None,
    streak_max_days: int = MAX_STREAK_DAYS,
) -> DashboardStats:
    """
    Calculate dashboard statistics.

    Args:
        tasks: Tasks (models or API dicts)
        sessions: Pomodoro sessions (models or API dicts)
        now: Current datetime (defaults to local now)
        streak_max_days: Scan limit for the streak

    Returns:
        DashboardStats for the given records
    """
    if now is None:
        now = local_now()

    tasks = coerce_tasks(tasks)
    sessions = coerce_sessions(sessions)

    today = today_window(now)
    week = trailing_window(now, days=7)

    # Task statistics
    completed_tasks = [t for t in tasks if t.is_completed]
    today_completed = today.filter(completed_tasks, lambda t: t.completion_time)
    weekly_completed = week.filter(completed_tasks, lambda t: t.completion_time)

    # Pomodoro statistics
    completed_sessions = [s for s in sessions if s.is_completed]
    today_sessions = today.filter(completed_sessions, lambda s: s.created_at)
    weekly_sessions = week.filter(completed_sessions, lambda s: s.created_at)

    # Productivity: completed vs created this week
    weekly_created = week.filter(tasks, lambda t: t.created_at)
    if weekly_created:
        productivity_score = round_half_up(
            len(weekly_completed) / len(weekly_created) * 100
        )
    else:
        productivity_score = 100

    return DashboardStats(
        tasks_completed=len(completed_tasks),
        today_tasks_completed=len(today_completed),
        weekly_tasks_completed=len(weekly_completed),
        total_focus_time=focus_hours(completed_sessions),
        today_focus_time=focus_hours(today_sessions),
        total_sessions=len(completed_sessions),
        today_sessions=len(today_sessions),
        weekly_sessions=len(weekly_sessions),
        streak=calculate_streak(tasks, sessions, now, max_days=streak_max_days),
        level=calculate_level(len(completed_tasks), len(completed_sessions)),
        productivity_score=productivity_score,
        pending_tasks=sum(1 for t in tasks if t.status == TASK_PENDING),
        in_progress_tasks=sum(1 for t in tasks if t.status == TASK_IN_PROGRESS),
    )


def calculate_pomodoro_stats(
    sessions: Any,
    timeframe: str = "today",
    now: Optional[datetime] = None,
) -> PomodoroStats:
    """
    Calculate focus statistics for a timeframe.

    Productivity here is the share of sessions started in the timeframe
    that were completed (0 when nothing was started).

    Args:
        sessions: Pomodoro sessions (models or API dicts)
        timeframe: 'today', 'week' or 'month'
        now: Current datetime (defaults to local now)

    Returns:
        PomodoroStats for the timeframe
    """
    if now is None:
        now = local_now()

    if timeframe not in TIMEFRAMES:
        logger.warning("Unknown timeframe %r, using 'today'", timeframe)
        timeframe = "today"

    window = timeframe_window(timeframe, now)
    in_window = window.filter(coerce_sessions(sessions), lambda s: s.created_at)
    completed = [s for s in in_window if s.is_completed]

    total = len(completed)
    total_seconds = sum(s.duration for s in completed)
    average = round_half_up(total_seconds / total) if total else 0
    productivity = round_half_up(total / len(in_window) * 100) if in_window else 0

    return PomodoroStats(
        timeframe=timeframe,
        total_sessions=total,
        total_focus_time=focus_hours(completed),
        average_session_length=average,
        productivity_score=productivity,
        sessions=completed,
    )


def build_task_pomodoro_update(task: Any, session_duration: float) -> Dict[str, int]:
    """
    Counter update for a task after one of its sessions completes.

    Args:
        task: The task (model or API dict)
        session_duration: Completed session length in seconds

    Returns:
        Partial task document with the new pomodoroCount and actualTime
    """
    tasks = coerce_tasks([task])
    pomodoro_count = tasks[0].pomodoro_count if tasks else 0
    actual_time = tasks[0].actual_time if tasks else 0
    return {
        "pomodoroCount": pomodoro_count + 1,
        "actualTime": actual_time + round_half_up(session_duration / 60),
    }
