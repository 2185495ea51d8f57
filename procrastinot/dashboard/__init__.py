"""
Dashboard module for the Procrastinot dashboard engine.

Provides statistics, streak calculation, the activity feed, data
aggregation and CLI formatting for the dashboard.
"""

from .streak import calculate_streak
from .stats import (
    DashboardStats,
    PomodoroStats,
    calculate_dashboard_stats,
    calculate_pomodoro_stats,
    build_task_pomodoro_update,
)
from .activity import build_activity_feed
from .aggregator import (
    DashboardAggregator,
    DashboardData,
    QuickStats,
)
from .formatter import DashboardFormatter

__all__ = [
    # Calculations
    'calculate_streak',
    'calculate_dashboard_stats',
    'calculate_pomodoro_stats',
    'build_task_pomodoro_update',
    'build_activity_feed',
    'DashboardStats',
    'PomodoroStats',
    # Aggregator
    'DashboardAggregator',
    'DashboardData',
    'QuickStats',
    # Formatter
    'DashboardFormatter',
]
