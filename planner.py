#!/usr/bin/env python3
"""
Procrastinot Dashboard - Command Line Interface
Shows dashboard stats, streaks and focus statistics in the terminal
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import asyncio
import json
from typing import Optional

import typer
from rich.console import Console

from procrastinot.core import Config
from procrastinot.dashboard import DashboardAggregator, DashboardData, DashboardFormatter
from procrastinot.integrations import ProcrastinotClient, RecordFetchError

# Initialize CLI app and console
app = typer.Typer(help="Procrastinot - dashboard stats for your tasks and focus sessions")

console = Console()


def get_aggregator() -> DashboardAggregator:
    """Build an aggregator backed by the configured API."""
    config = Config()
    return DashboardAggregator(ProcrastinotClient(config), config)


@app.command()
def today(
    user_id: str = typer.Argument(..., help="User ID to load"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Number of activity entries"),
):
    """
    Show the dashboard for a user

    Displays:
    - Tasks completed and focus time (today, this week, all time)
    - Recent activity feed
    - Streak, level and productivity score
    """
    try:
        aggregator = get_aggregator()
        data = asyncio.run(aggregator.aggregate(user_id, limit=limit))

        formatter = DashboardFormatter(console)
        formatter.render_dashboard(data)

    except RecordFetchError as e:
        console.print(f"[red]Error loading dashboard: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def stats(
    user_id: str = typer.Argument(..., help="User ID to load"),
    timeframe: str = typer.Option("today", "--timeframe", "-t", help="today, week or month"),
):
    """
    Show focus statistics

    Examples:
      planner stats 64f1c2 --timeframe week
    """
    if timeframe not in ("today", "week", "month"):
        console.print(f"[red]Unknown timeframe: {timeframe}[/red]")
        raise typer.Exit(1)

    try:
        aggregator = get_aggregator()
        pomodoro_stats = asyncio.run(aggregator.get_pomodoro_stats(user_id, timeframe))
        console.print(DashboardFormatter(console).format_pomodoro_stats(pomodoro_stats))

    except RecordFetchError as e:
        console.print(f"[red]Error fetching statistics: {e.message}[/red]")
        raise typer.Exit(1)


@app.command()
def offline(
    export_file: Path = typer.Argument(..., help="JSON export with 'tasks' and 'sessions' lists"),
    limit: Optional[int] = typer.Option(None, "--limit", "-n", help="Number of activity entries"),
):
    """
    Render a dashboard from an exported JSON file, without the API

    Example:
      planner offline export.json
    """
    try:
        with open(export_file, 'r') as f:
            export = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Error reading {export_file}: {e}[/red]")
        raise typer.Exit(1)

    if not isinstance(export, dict):
        console.print("[red]Export must be a JSON object with 'tasks' and 'sessions'[/red]")
        raise typer.Exit(1)

    config = Config()
    aggregator = DashboardAggregator(ProcrastinotClient(config), config)
    now = config.now()
    tasks = export.get("tasks") or []
    sessions = export.get("sessions") or []
    dashboard_stats, activities = aggregator.compute(tasks, sessions, now, limit)

    data = DashboardData(
        generated_at=now,
        user=export.get("user") or {},
        stats=dashboard_stats,
        recent_activities=activities,
        tasks=tasks,
        pomodoro_sessions=sessions,
    )
    DashboardFormatter(console).render_dashboard(data)


if __name__ == "__main__":
    app()
