"""
Pydantic schemas for API request/response validation.

These schemas provide:
- Type safety for API inputs and outputs
- Automatic validation and error messages
- OpenAPI documentation generation
"""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Error response for API errors."""
    detail: str
    code: Optional[str] = None


# Documented error bodies for the dashboard and pomodoro routes
ERROR_RESPONSES = {
    500: {"model": ErrorResponse, "description": "Unexpected failure"},
    502: {"model": ErrorResponse, "description": "Upstream API failure"},
}


# =============================================================================
# Dashboard Schemas
# =============================================================================

class DashboardStatsSchema(BaseModel):
    """Dashboard statistics."""
    tasks_completed: int
    today_tasks_completed: int
    weekly_tasks_completed: int
    total_focus_time: float  # hours
    today_focus_time: float  # hours
    total_sessions: int
    today_sessions: int
    weekly_sessions: int
    streak: int
    level: int
    productivity_score: int
    pending_tasks: int
    in_progress_tasks: int

    class Config:
        from_attributes = True


class ActivityItem(BaseModel):
    """Recent activity item."""
    id: Optional[str] = None
    type: str  # task_completed, pomodoro_completed, task_created
    title: str
    description: str
    timestamp: str
    icon: str
    color: str


class DashboardResponse(BaseModel):
    """Complete dashboard data."""
    user: Dict[str, Any] = {}
    stats: DashboardStatsSchema
    recent_activities: List[ActivityItem]
    generated_at: str


class QuickStatsResponse(BaseModel):
    """Widget-sized stats."""
    tasks_completed: int
    focus_time: str
    streak: int
    level: int

    class Config:
        from_attributes = True


class ComputeRequest(BaseModel):
    """Raw records to compute a dashboard from, without fetching."""
    tasks: List[Dict[str, Any]] = []
    sessions: List[Dict[str, Any]] = []
    now: Optional[datetime] = None
    limit: int = Field(default=10, ge=0, le=100)


class ComputeResponse(BaseModel):
    """Stats and feed computed from a ComputeRequest."""
    stats: DashboardStatsSchema
    recent_activities: List[ActivityItem]


# =============================================================================
# Pomodoro Schemas
# =============================================================================

class PomodoroSessionSummary(BaseModel):
    """Completed pomodoro session."""
    id: Optional[str] = None
    duration: float
    created_at: Optional[str] = None
    task_id: Optional[str] = None


class PomodoroStatsResponse(BaseModel):
    """Focus statistics for one timeframe."""
    timeframe: str
    total_sessions: int
    total_focus_time: float  # hours
    average_session_length: int  # seconds
    productivity_score: int
    sessions: List[PomodoroSessionSummary]
