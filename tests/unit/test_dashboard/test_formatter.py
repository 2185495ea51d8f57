"""
Unit tests for the Rich dashboard formatter.
"""

from datetime import datetime, timedelta, timezone

from rich.console import Console

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

from procrastinot.core.models import ActivityEntry
from procrastinot.dashboard.aggregator import DashboardData
from procrastinot.dashboard.formatter import DashboardFormatter
from procrastinot.dashboard.stats import DashboardStats, PomodoroStats


NOW = datetime(2025, 1, 15, 14, 0, tzinfo=timezone.utc)


def render(renderable) -> str:
    console = Console(record=True, width=100)
    console.print(renderable)
    return console.export_text()


def entry(minutes_ago, description="Completed task: Write report"):
    return ActivityEntry(
        id="t1",
        type="task_completed",
        title="Write report",
        description=description,
        timestamp=NOW - timedelta(minutes=minutes_ago),
        icon="check",
        color="green",
    )


class TestRelativeTime:
    """Tests for _format_relative_time()."""

    def test_buckets(self):
        formatter = DashboardFormatter(Console())

        assert formatter._format_relative_time(NOW, NOW) == "just now"
        assert formatter._format_relative_time(NOW - timedelta(minutes=5), NOW) == "5m ago"
        assert formatter._format_relative_time(NOW - timedelta(hours=3), NOW) == "3h ago"
        assert formatter._format_relative_time(NOW - timedelta(days=2), NOW) == "2d ago"


class TestPanels:
    """Tests for individual panels."""

    def test_stats_table(self):
        stats = DashboardStats(tasks_completed=12, today_tasks_completed=2, total_focus_time=3.5)
        text = render(DashboardFormatter().format_stats(stats))

        assert "Tasks completed" in text
        assert "12" in text
        assert "3.5h" in text

    def test_progress_bar(self):
        formatter = DashboardFormatter()

        assert "3 days streak" in formatter.format_progress_bar(DashboardStats(streak=3, level=2))
        assert "1 day streak" in formatter.format_progress_bar(DashboardStats(streak=1))
        assert "No streak yet" in formatter.format_progress_bar(DashboardStats())
        assert "Level 2" in formatter.format_progress_bar(DashboardStats(level=2))

    def test_empty_feed(self):
        text = render(DashboardFormatter().format_activity_feed([], NOW))
        assert "No recent activity" in text

    def test_feed_rows(self):
        text = render(DashboardFormatter().format_activity_feed([entry(5), entry(120)], NOW))

        assert "Recent Activity (2)" in text
        assert "5m ago" in text
        assert "2h ago" in text

    def test_long_descriptions_truncated(self):
        long = "Completed task: " + "x" * 80
        text = render(DashboardFormatter().format_activity_feed([entry(1, long)], NOW))

        assert "..." in text
        assert "x" * 60 not in text

    def test_pomodoro_panel(self):
        stats = PomodoroStats(
            timeframe="week",
            total_sessions=4,
            total_focus_time=1.7,
            average_session_length=1500,
            productivity_score=80,
        )
        text = render(DashboardFormatter().format_pomodoro_stats(stats))

        assert "Focus (week)" in text
        assert "1.7h" in text
        assert "25m" in text
        assert "80%" in text


class TestRenderDashboard:
    """Tests for render_dashboard()."""

    def test_full_render(self):
        console = Console(record=True, width=100)
        data = DashboardData(
            generated_at=NOW,
            user={"name": "Ada"},
            stats=DashboardStats(streak=2),
            recent_activities=[entry(10)],
            tasks=[],
            pomodoro_sessions=[],
        )

        DashboardFormatter(console).render_dashboard(data)
        text = console.export_text()

        assert "Welcome back, Ada!" in text
        assert "Wednesday, January 15, 2025" in text
        assert "Completed task: Write report" in text
        assert "2 days streak" in text

    def test_missing_name(self):
        data = DashboardData(NOW, {}, DashboardStats(), [], [], [])
        text = render(DashboardFormatter().format_header(data))

        assert "Welcome back, there!" in text
