"""
Recent activity feed for the dashboard.

Merges completed tasks, completed pomodoro sessions and freshly created
pending tasks into one list, newest first.
"""

import logging
from datetime import datetime
from typing import Any, List, Optional

from procrastinot.core.models import (
    ActivityEntry,
    TASK_PENDING,
    coerce_sessions,
    coerce_tasks,
)
from procrastinot.core.windows import local_now, round_half_up, to_local, trailing_window

logger = logging.getLogger(__name__)

DEFAULT_FEED_LIMIT = 10

# Pending tasks older than this are left out of the feed
NEW_TASK_HOURS = 24


def build_activity_feed(
    tasks: Any,
    sessions: Any,
    now: Optional[datetime] = None,
    limit: Optional[int] = DEFAULT_FEED_LIMIT,
) -> List[ActivityEntry]:
    """
    Build the recent activity feed.

    Args:
        tasks: Tasks (models or API dicts)
        sessions: Pomodoro sessions (models or API dicts)
        now: Current datetime (defaults to local now)
        limit: Maximum number of entries (None means the default)

    Returns:
        ActivityEntry list sorted by timestamp, most recent first
    """
    if now is None:
        now = local_now()
    if limit is None:
        limit = DEFAULT_FEED_LIMIT

    tasks = coerce_tasks(tasks)
    sessions = coerce_sessions(sessions)
    activities = []
    skipped = 0

    for task in tasks:
        if not task.is_completed:
            continue
        if task.completion_time is None:
            skipped += 1
            continue
        activities.append(ActivityEntry(
            id=task.id,
            type="task_completed",
            title=task.title,
            description=f"Completed task: {task.title}",
            timestamp=to_local(task.completion_time, now),
            icon="check",
            color="green",
        ))

    for session in sessions:
        if not session.is_completed:
            continue
        if session.created_at is None:
            skipped += 1
            continue
        minutes = round_half_up(session.duration / 60)
        activities.append(ActivityEntry(
            id=session.id,
            type="pomodoro_completed",
            title="Focus Session Completed",
            description=f"Completed {minutes} minute focus session",
            timestamp=to_local(session.created_at, now),
            icon="timer",
            color="blue",
        ))

    recent = trailing_window(now, hours=NEW_TASK_HOURS)
    for task in tasks:
        if task.status != TASK_PENDING or not recent.contains(task.created_at):
            continue
        activities.append(ActivityEntry(
            id=task.id,
            type="task_created",
            title="New Task Created",
            description=f"Created task: {task.title}",
            timestamp=to_local(task.created_at, now),
            icon="plus",
            color="purple",
        ))

    if skipped:
        logger.warning("Skipped %d completed records without a timestamp", skipped)

    activities.sort(key=lambda a: a.timestamp, reverse=True)
    return activities[:max(limit, 0)]
