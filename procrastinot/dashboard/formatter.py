"""
Rich formatter module for the Procrastinot dashboard.

Handles all Rich-based CLI formatting for the dashboard display.
"""

from datetime import datetime
from typing import List, Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from procrastinot.core.models import ActivityEntry
from procrastinot.dashboard.aggregator import DashboardData
from procrastinot.dashboard.stats import DashboardStats, PomodoroStats


# Feed icons by entry icon name
ACTIVITY_ICONS = {
    "check": "✓",
    "timer": "◷",
    "plus": "+",
}


class DashboardFormatter:
    """
    Rich-based formatter for the dashboard.

    Renders stats, streak/level and the activity feed as panels.
    """

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize formatter.

        Args:
            console: Rich Console instance (creates default if not provided)
        """
        self.console = console or Console()

    def _format_relative_time(self, timestamp: datetime, now: datetime) -> str:
        """Format how long ago something happened."""
        minutes = int((now - timestamp).total_seconds() // 60)
        if minutes < 1:
            return "just now"
        if minutes < 60:
            return f"{minutes}m ago"
        hours = minutes // 60
        if hours < 24:
            return f"{hours}h ago"
        days = hours // 24
        return f"{days}d ago"

    def format_header(self, data: DashboardData) -> Panel:
        """
        Create header panel with the user's name and date.

        Args:
            data: Dashboard data

        Returns:
            Rich Panel with header content
        """
        name = data.user.get("name") or data.user.get("username") or "there"
        content = Text()
        content.append(f"Welcome back, {name}!\n", style="bold")
        content.append(data.generated_at.strftime("%A, %B %d, %Y"), style="dim")

        return Panel(
            content,
            title="[bold]Procrastinot[/bold]",
            title_align="center",
            border_style="blue",
            padding=(0, 2),
        )

    def format_stats(self, stats: DashboardStats) -> Panel:
        """
        Create panel with task and focus statistics.

        Args:
            stats: Dashboard statistics

        Returns:
            Rich Panel with a two-column stats table
        """
        table = Table(show_header=True, box=None, padding=(0, 2), expand=True)
        table.add_column("", ratio=1)
        table.add_column("Today", justify="right")
        table.add_column("This week", justify="right")
        table.add_column("All time", justify="right")

        table.add_row(
            "Tasks completed",
            str(stats.today_tasks_completed),
            str(stats.weekly_tasks_completed),
            str(stats.tasks_completed),
        )
        table.add_row(
            "Focus sessions",
            str(stats.today_sessions),
            str(stats.weekly_sessions),
            str(stats.total_sessions),
        )
        table.add_row(
            "Focus time",
            f"{stats.today_focus_time}h",
            "",
            f"{stats.total_focus_time}h",
        )

        return Panel(
            table,
            title="[bold]Stats[/bold]",
            border_style="cyan",
            padding=(0, 1),
        )

    def format_progress_bar(self, stats: DashboardStats) -> str:
        """
        Create the streak/level/productivity line.

        Args:
            stats: Dashboard statistics

        Returns:
            Formatted status string
        """
        parts = []

        if stats.streak > 0:
            day_word = "day" if stats.streak == 1 else "days"
            parts.append(f"[yellow]🔥 {stats.streak} {day_word} streak[/yellow]")
        else:
            parts.append("[dim]No streak yet[/dim]")

        parts.append(f"[magenta]Level {stats.level}[/magenta]")

        if stats.productivity_score >= 75:
            parts.append(f"[green]{stats.productivity_score}% productive[/green]")
        else:
            parts.append(f"[white]{stats.productivity_score}% productive[/white]")

        parts.append(f"[dim]○ {stats.pending_tasks} pending ◐ {stats.in_progress_tasks} in progress[/dim]")

        return " │ ".join(parts)

    def format_activity_feed(
        self,
        activities: List[ActivityEntry],
        now: datetime
    ) -> Panel:
        """
        Create panel with recent activity.

        Args:
            activities: Feed entries, newest first
            now: Reference time for relative timestamps

        Returns:
            Rich Panel with the feed
        """
        if not activities:
            return Panel(
                Text("No recent activity", style="dim", justify="center"),
                title="[bold]Recent Activity[/bold]",
                border_style="green",
                padding=(0, 1),
            )

        table = Table(show_header=False, box=None, padding=(0, 1), expand=True)
        table.add_column("Icon", width=2)
        table.add_column("Activity", ratio=1)
        table.add_column("When", width=10, justify="right")

        for entry in activities:
            icon = ACTIVITY_ICONS.get(entry.icon, "•")
            description = entry.description
            if len(description) > 50:
                description = description[:50] + "..."
            table.add_row(
                f"[{entry.color}]{icon}[/{entry.color}]",
                description,
                f"[dim]{self._format_relative_time(entry.timestamp, now)}[/dim]",
            )

        return Panel(
            table,
            title=f"[bold]Recent Activity ({len(activities)})[/bold]",
            border_style="green",
            padding=(0, 1),
        )

    def format_pomodoro_stats(self, stats: PomodoroStats) -> Panel:
        """
        Create panel with focus statistics for one timeframe.

        Args:
            stats: Pomodoro statistics

        Returns:
            Rich Panel
        """
        average_minutes = stats.average_session_length // 60
        lines = [
            f"Sessions      [cyan]{stats.total_sessions}[/cyan] completed",
            f"Focus time    [cyan]{stats.total_focus_time}h[/cyan]",
            f"Average       [cyan]{average_minutes}m[/cyan] per session",
            f"Completion    [cyan]{stats.productivity_score}%[/cyan] of started sessions",
        ]

        return Panel(
            "\n".join(lines),
            title=f"[bold]Focus ({stats.timeframe})[/bold]",
            border_style="magenta",
            padding=(0, 1),
        )

    def render_dashboard(self, data: DashboardData) -> None:
        """
        Render the complete dashboard to console.

        Args:
            data: Complete dashboard data
        """
        self.console.print(self.format_header(data))
        self.console.print()

        self.console.print(self.format_stats(data.stats))
        self.console.print()

        self.console.print(self.format_activity_feed(data.recent_activities, data.generated_at))
        self.console.print()

        self.console.print("─" * 60)
        self.console.print(self.format_progress_bar(data.stats), justify="center")
        self.console.print("─" * 60)
