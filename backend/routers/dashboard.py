"""
Dashboard data aggregation API endpoints.

Provides dashboard statistics and the activity feed by aggregating the
user's tasks and pomodoro sessions with the DashboardAggregator.
"""

import logging
from dataclasses import asdict
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from backend.dependencies import get_dashboard_aggregator
from backend.schemas import (
    ActivityItem,
    ComputeRequest,
    ComputeResponse,
    DashboardResponse,
    DashboardStatsSchema,
    ERROR_RESPONSES,
    QuickStatsResponse,
)
from procrastinot.core.models import ActivityEntry
from procrastinot.dashboard.aggregator import DashboardAggregator
from procrastinot.dashboard.stats import DashboardStats
from procrastinot.integrations.api_client import RecordFetchError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/dashboard", tags=["dashboard"], responses=ERROR_RESPONSES)


def _stats_response(stats: DashboardStats) -> DashboardStatsSchema:
    return DashboardStatsSchema(**stats.to_dict())


def _activity_items(activities: List[ActivityEntry]) -> List[ActivityItem]:
    return [ActivityItem(**entry.to_dict()) for entry in activities]


def _upstream_error(e: RecordFetchError) -> HTTPException:
    return HTTPException(status_code=502, detail=e.message)


@router.post("/compute", response_model=ComputeResponse)
async def compute_dashboard(
    request: ComputeRequest,
    aggregator: DashboardAggregator = Depends(get_dashboard_aggregator),
):
    """
    Compute stats and activity feed from records in the request body.

    No upstream fetch; useful when the caller already holds the records.
    """
    stats, activities = aggregator.compute(
        request.tasks,
        request.sessions,
        now=request.now,
        limit=request.limit,
    )
    return ComputeResponse(
        stats=_stats_response(stats),
        recent_activities=_activity_items(activities),
    )


@router.get("/{user_id}", response_model=DashboardResponse)
async def get_dashboard(
    user_id: str,
    limit: Optional[int] = Query(None, ge=0, le=100, description="Activity feed size"),
    aggregator: DashboardAggregator = Depends(get_dashboard_aggregator),
):
    """
    Get unified dashboard data for a user.

    Aggregates:
    - Task and focus statistics (today, this week, all time)
    - Streak, level and productivity score
    - Recent activity feed
    """
    try:
        data = await aggregator.aggregate(user_id, limit=limit)
    except RecordFetchError as e:
        raise _upstream_error(e)
    except Exception as e:
        logger.exception("Dashboard failed for user %s", user_id)
        raise HTTPException(status_code=500, detail=f"Failed to load dashboard: {str(e)}")

    return DashboardResponse(
        user=data.user,
        stats=_stats_response(data.stats),
        recent_activities=_activity_items(data.recent_activities),
        generated_at=data.generated_at.isoformat(),
    )


@router.get("/{user_id}/stats", response_model=DashboardStatsSchema)
async def get_dashboard_stats(
    user_id: str,
    aggregator: DashboardAggregator = Depends(get_dashboard_aggregator),
):
    """
    Get just the statistics portion of the dashboard.
    """
    try:
        data = await aggregator.aggregate(user_id)
    except RecordFetchError as e:
        raise _upstream_error(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load stats: {str(e)}")

    return _stats_response(data.stats)


@router.get("/{user_id}/quick-stats", response_model=QuickStatsResponse)
async def get_quick_stats(
    user_id: str,
    aggregator: DashboardAggregator = Depends(get_dashboard_aggregator),
):
    """Lighter-weight numbers for widgets."""
    try:
        quick = await aggregator.get_quick_stats(user_id)
    except RecordFetchError as e:
        raise _upstream_error(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load quick stats: {str(e)}")

    return QuickStatsResponse(**asdict(quick))


@router.get("/{user_id}/activity", response_model=List[ActivityItem])
async def get_recent_activity(
    user_id: str,
    limit: Optional[int] = Query(None, ge=0, le=100),
    aggregator: DashboardAggregator = Depends(get_dashboard_aggregator),
):
    """Recent activity feed, newest first."""
    try:
        data = await aggregator.aggregate(user_id, limit=limit)
    except RecordFetchError as e:
        raise _upstream_error(e)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to load activity: {str(e)}")

    return _activity_items(data.recent_activities)
