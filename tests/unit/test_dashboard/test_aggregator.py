"""
Unit tests for the aggregator module.
Tests the DashboardAggregator class for data collection and aggregation.
"""

import asyncio
import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, MagicMock

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from procrastinot.core.config import Config
from procrastinot.dashboard.aggregator import DashboardAggregator, DashboardData
from procrastinot.integrations.api_client import RecordFetchError


NOW = datetime(2025, 1, 15, 14, 0, tzinfo=timezone.utc)


def make_client(tasks=None, sessions=None, user=None):
    """Mock API client with canned responses."""
    client = MagicMock()
    client.get_user_tasks = AsyncMock(return_value=tasks if tasks is not None else [])
    client.get_user_sessions = AsyncMock(return_value=sessions if sessions is not None else [])
    client.get_user_profile = AsyncMock(return_value=user if user is not None else {})
    client.get_task = AsyncMock(return_value={})
    client.update_task = AsyncMock(return_value={})
    return client


@pytest.fixture
def config(tmp_path):
    return Config(tmp_path)


@pytest.fixture
def records():
    tasks = [
        {"_id": "t1", "title": "Write report", "status": "Completed",
         "createdAt": (NOW - timedelta(days=1)).isoformat(),
         "completedAt": (NOW - timedelta(hours=1)).isoformat()},
        {"_id": "t2", "title": "Plan week", "status": "Pending",
         "createdAt": (NOW - timedelta(hours=2)).isoformat()},
    ]
    sessions = [
        {"_id": "s1", "status": "Completed", "duration": 3600,
         "createdAt": (NOW - timedelta(hours=3)).isoformat()},
        {"_id": "s2", "status": "Completed", "duration": 1800,
         "createdAt": (NOW - timedelta(hours=4)).isoformat()},
    ]
    return tasks, sessions


class TestAggregate:
    """Tests for aggregate()."""

    def test_returns_dashboard_data(self, config, records):
        tasks, sessions = records
        client = make_client(tasks, sessions, {"name": "Ada"})
        aggregator = DashboardAggregator(client, config)

        data = asyncio.run(aggregator.aggregate("u1", now=NOW))

        assert isinstance(data, DashboardData)
        assert data.generated_at == NOW
        assert data.user == {"name": "Ada"}
        assert data.tasks == tasks
        assert data.pomodoro_sessions == sessions
        assert data.stats.today_tasks_completed == 1
        assert data.stats.today_sessions == 2
        assert [a.type for a in data.recent_activities] == [
            "task_completed", "task_created", "pomodoro_completed", "pomodoro_completed",
        ]

    def test_fetches_each_resource_once(self, config):
        client = make_client()
        aggregator = DashboardAggregator(client, config)

        asyncio.run(aggregator.aggregate("u1", now=NOW))

        client.get_user_tasks.assert_awaited_once_with("u1")
        client.get_user_sessions.assert_awaited_once_with("u1")
        client.get_user_profile.assert_awaited_once_with("u1")

    def test_one_failed_fetch_fails_everything(self, config):
        client = make_client()
        client.get_user_sessions = AsyncMock(side_effect=RecordFetchError("down", 500))
        aggregator = DashboardAggregator(client, config)

        with pytest.raises(RecordFetchError):
            asyncio.run(aggregator.aggregate("u1", now=NOW))

    def test_feed_limit_from_preferences(self, config, records):
        tasks, sessions = records
        config.set("activity_feed_limit", 2, "preferences")
        aggregator = DashboardAggregator(make_client(tasks, sessions), config)

        data = asyncio.run(aggregator.aggregate("u1", now=NOW))

        assert len(data.recent_activities) == 2

    def test_explicit_limit_wins(self, config, records):
        tasks, sessions = records
        aggregator = DashboardAggregator(make_client(tasks, sessions), config)

        data = asyncio.run(aggregator.aggregate("u1", now=NOW, limit=1))

        assert len(data.recent_activities) == 1


class TestCompute:
    """Tests for compute() on already-fetched records."""

    def test_no_client_calls(self, config, records):
        tasks, sessions = records
        client = make_client()
        aggregator = DashboardAggregator(client, config)

        stats, activities = aggregator.compute(tasks, sessions, now=NOW)

        assert stats.tasks_completed == 1
        assert stats.total_focus_time == 1.5
        assert len(activities) == 4
        client.get_user_tasks.assert_not_awaited()

    def test_streak_limit_from_preferences(self, config):
        sessions = [
            {"status": "Completed", "duration": 60, "createdAt": (NOW - timedelta(days=d)).isoformat()}
            for d in range(10)
        ]
        config.set("streak_max_days", 3, "preferences")
        aggregator = DashboardAggregator(make_client(), config)

        stats, _ = aggregator.compute([], sessions, now=NOW)

        assert stats.streak == 3


class TestQuickStats:
    """Tests for get_quick_stats()."""

    def test_widget_numbers(self, config, records):
        tasks, sessions = records
        aggregator = DashboardAggregator(make_client(tasks, sessions), config)

        quick = asyncio.run(aggregator.get_quick_stats("u1", now=NOW))

        assert quick.tasks_completed == 1
        assert quick.focus_time == "1.5h"
        assert quick.streak == 1
        assert quick.level == 1


class TestPomodoroStats:
    """Tests for get_pomodoro_stats() and get_today_sessions()."""

    def test_default_timeframe_from_preferences(self, config, records):
        _, sessions = records
        config.set("default_timeframe", "week", "preferences")
        aggregator = DashboardAggregator(make_client(sessions=sessions), config)

        stats = asyncio.run(aggregator.get_pomodoro_stats("u1", now=NOW))

        assert stats.timeframe == "week"
        assert stats.total_sessions == 2

    def test_only_sessions_fetched(self, config):
        client = make_client()
        aggregator = DashboardAggregator(client, config)

        asyncio.run(aggregator.get_pomodoro_stats("u1", "month", now=NOW))

        client.get_user_sessions.assert_awaited_once_with("u1")
        client.get_user_tasks.assert_not_awaited()

    def test_today_sessions(self, config, records):
        _, sessions = records
        aggregator = DashboardAggregator(make_client(sessions=sessions), config)

        today = asyncio.run(aggregator.get_today_sessions("u1", now=NOW))

        assert [s.id for s in today] == ["s1", "s2"]


class TestRecordCompletedSession:
    """Tests for record_completed_session()."""

    def test_updates_linked_task(self, config):
        client = make_client()
        client.get_task = AsyncMock(return_value={"_id": "t1", "pomodoroCount": 1, "actualTime": 25})
        aggregator = DashboardAggregator(client, config)

        updated = asyncio.run(aggregator.record_completed_session(
            {"_id": "s1", "status": "Completed", "duration": 1500, "taskId": "t1"}
        ))

        assert updated is True
        client.update_task.assert_awaited_once_with("t1", {"pomodoroCount": 2, "actualTime": 50})

    def test_session_without_task(self, config):
        client = make_client()
        aggregator = DashboardAggregator(client, config)

        updated = asyncio.run(aggregator.record_completed_session({"status": "Completed", "duration": 1500}))

        assert updated is False
        client.get_task.assert_not_awaited()

    def test_fetch_failure_is_logged_not_raised(self, config):
        client = make_client()
        client.get_task = AsyncMock(side_effect=RecordFetchError("Task not found", 404))
        aggregator = DashboardAggregator(client, config)

        updated = asyncio.run(aggregator.record_completed_session(
            {"status": "Completed", "duration": 1500, "taskId": "gone"}
        ))

        assert updated is False
        client.update_task.assert_not_awaited()
