"""
Pomodoro statistics API endpoints.
"""

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.dependencies import get_dashboard_aggregator
from backend.schemas import ERROR_RESPONSES, PomodoroSessionSummary, PomodoroStatsResponse
from procrastinot.dashboard.aggregator import DashboardAggregator
from procrastinot.integrations.api_client import RecordFetchError

router = APIRouter(prefix="/pomodoro", tags=["pomodoro"], responses=ERROR_RESPONSES)


@router.get("/{user_id}/stats", response_model=PomodoroStatsResponse)
async def get_pomodoro_stats(
    user_id: str,
    timeframe: str = Query("today", pattern="^(today|week|month)$"),
    aggregator: DashboardAggregator = Depends(get_dashboard_aggregator),
):
    """
    Get focus statistics for today, the last 7 days or this month.
    """
    try:
        stats = await aggregator.get_pomodoro_stats(user_id, timeframe)
    except RecordFetchError as e:
        raise HTTPException(status_code=502, detail=e.message)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load pomodoro stats: {str(e)}")

    return PomodoroStatsResponse(
        timeframe=stats.timeframe,
        total_sessions=stats.total_sessions,
        total_focus_time=stats.total_focus_time,
        average_session_length=stats.average_session_length,
        productivity_score=stats.productivity_score,
        sessions=[
            PomodoroSessionSummary(
                id=s.id,
                duration=s.duration,
                created_at=s.created_at.isoformat() if s.created_at else None,
                task_id=s.task_id,
            )
            for s in stats.sessions
        ],
    )
