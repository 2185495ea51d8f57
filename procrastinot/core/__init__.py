"""
Core module for the Procrastinot dashboard engine
Contains configuration, model definitions and time-window helpers
"""

from .config import Config
from .models import Task, PomodoroSession, ActivityEntry
from .windows import TimeWindow

__all__ = ['Config', 'Task', 'PomodoroSession', 'ActivityEntry', 'TimeWindow']
