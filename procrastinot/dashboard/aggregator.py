"""
Data aggregation module for the Procrastinot dashboard.

Fetches tasks, pomodoro sessions and the user profile concurrently and
combines them into a unified DashboardData structure for display.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from procrastinot.core.config import Config
from procrastinot.core.models import ActivityEntry, PomodoroSession, coerce_sessions
from procrastinot.dashboard.activity import build_activity_feed
from procrastinot.dashboard.stats import (
    DashboardStats,
    PomodoroStats,
    build_task_pomodoro_update,
    calculate_dashboard_stats,
    calculate_pomodoro_stats,
)
from procrastinot.integrations.api_client import ProcrastinotClient, RecordFetchError

logger = logging.getLogger(__name__)


@dataclass
class QuickStats:
    """Compact numbers for dashboard widgets."""
    tasks_completed: int
    focus_time: str
    streak: int
    level: int


@dataclass
class DashboardData:
    """Complete dashboard data structure."""
    generated_at: datetime
    user: Dict[str, Any]
    stats: DashboardStats
    recent_activities: List[ActivityEntry]
    tasks: List[Dict[str, Any]]
    pomodoro_sessions: List[Dict[str, Any]]


class DashboardAggregator:
    """
    Central data aggregation for the dashboard.

    Queries the backend API and combines the records into a unified
    DashboardData structure. All derived numbers are recomputed per call.
    """

    def __init__(self, client: ProcrastinotClient, config: Optional[Config] = None):
        """
        Initialize aggregator.

        Args:
            client: Backend API client
            config: Configuration (creates default if not provided)
        """
        self.client = client
        self.config = config if config else Config()

    def _now(self, now: Optional[datetime]) -> datetime:
        return now if now is not None else self.config.now()

    def _feed_limit(self, limit: Optional[int]) -> int:
        if limit is not None:
            return limit
        return int(self.config.get("activity_feed_limit", "preferences", 10))

    async def fetch_records(
        self,
        user_id: str
    ) -> Tuple[List[Dict[str, Any]], List[Dict[str, Any]], Dict[str, Any]]:
        """
        Fetch tasks, sessions and profile in parallel.

        Any failing request fails the whole fetch.

        Args:
            user_id: User to load

        Returns:
            Tuple of (tasks, sessions, user)
        """
        tasks, sessions, user = await asyncio.gather(
            self.client.get_user_tasks(user_id),
            self.client.get_user_sessions(user_id),
            self.client.get_user_profile(user_id),
        )
        logger.info(
            "Fetched %d tasks and %d sessions for user %s",
            len(tasks), len(sessions), user_id
        )
        return tasks, sessions, user

    def compute(
        self,
        tasks: Any,
        sessions: Any,
        now: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> Tuple[DashboardStats, List[ActivityEntry]]:
        """
        Compute stats and the activity feed from already-fetched records.

        Args:
            tasks: Tasks (models or API dicts)
            sessions: Pomodoro sessions (models or API dicts)
            now: Current datetime (defaults to configured timezone)
            limit: Activity feed size (defaults to preference)

        Returns:
            Tuple of (stats, recent_activities)
        """
        now = self._now(now)
        stats = calculate_dashboard_stats(
            tasks,
            sessions,
            now,
            streak_max_days=int(self.config.get("streak_max_days", "preferences", 365)),
        )
        activities = build_activity_feed(tasks, sessions, now, limit=self._feed_limit(limit))
        return stats, activities

    async def aggregate(
        self,
        user_id: str,
        now: Optional[datetime] = None,
        limit: Optional[int] = None,
    ) -> DashboardData:
        """
        Aggregate all data for the dashboard.

        Main entry point for collecting all dashboard data.

        Args:
            user_id: User to load
            now: Current datetime (defaults to configured timezone)
            limit: Activity feed size

        Returns:
            Complete DashboardData structure
        """
        now = self._now(now)
        tasks, sessions, user = await self.fetch_records(user_id)
        stats, activities = self.compute(tasks, sessions, now, limit)

        return DashboardData(
            generated_at=now,
            user=user,
            stats=stats,
            recent_activities=activities,
            tasks=tasks,
            pomodoro_sessions=sessions,
        )

    async def get_quick_stats(self, user_id: str, now: Optional[datetime] = None) -> QuickStats:
        """Widget numbers: today's completions, today's focus, streak and level"""
        data = await self.aggregate(user_id, now)
        return QuickStats(
            tasks_completed=data.stats.today_tasks_completed,
            focus_time=f"{data.stats.today_focus_time}h",
            streak=data.stats.streak,
            level=data.stats.level,
        )

    async def get_pomodoro_stats(
        self,
        user_id: str,
        timeframe: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> PomodoroStats:
        """
        Get focus statistics for a timeframe.

        Args:
            user_id: User to load
            timeframe: 'today', 'week' or 'month' (defaults to preference)
            now: Current datetime

        Returns:
            PomodoroStats
        """
        if timeframe is None:
            timeframe = self.config.get("default_timeframe", "preferences", "today")
        sessions = await self.client.get_user_sessions(user_id)
        return calculate_pomodoro_stats(sessions, timeframe, self._now(now))

    async def get_today_sessions(
        self,
        user_id: str,
        now: Optional[datetime] = None
    ) -> List[PomodoroSession]:
        """Completed sessions started today"""
        stats = await self.get_pomodoro_stats(user_id, "today", now)
        return stats.sessions

    async def record_completed_session(self, session: Any) -> bool:
        """
        Bump the linked task's pomodoro counters for a completed session.

        Failures are logged, not raised: the session itself is already
        complete and matters more than the counters.

        Args:
            session: Completed session (model or API dict)

        Returns:
            True if a linked task was updated
        """
        sessions = coerce_sessions([session])
        if not sessions or not sessions[0].task_id:
            return False

        completed = sessions[0]
        try:
            task = await self.client.get_task(completed.task_id)
            update = build_task_pomodoro_update(task, completed.duration)
            await self.client.update_task(completed.task_id, update)
        except RecordFetchError as e:
            logger.error("Failed to update task pomodoro stats for %s: %s", completed.task_id, e)
            return False

        logger.info("Task %s now has %d pomodoros", completed.task_id, update["pomodoroCount"])
        return True
