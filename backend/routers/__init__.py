"""
API routers for the Procrastinot dashboard backend.

Each router handles a specific domain:
- dashboard: Aggregated stats and activity feed
- pomodoro: Focus statistics per timeframe
"""

from .dashboard import router as dashboard_router
from .pomodoro import router as pomodoro_router

__all__ = [
    'dashboard_router',
    'pomodoro_router',
]
