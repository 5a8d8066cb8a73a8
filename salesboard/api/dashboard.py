from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from salesboard.api.dependencies import get_leaderboard_service
from salesboard.schemas.leaderboard import DashboardFilters, LeaderboardResponse
from salesboard.services.leaderboard_service import LeaderboardService
from salesboard.shared.response import ResponseEnvelope, build_meta
from salesboard.shared.time import TIME_WINDOW_PATTERN

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def get_dashboard_filters(
    time_period: str = Query(default="monthly", pattern=TIME_WINDOW_PATTERN),
) -> DashboardFilters:
    return DashboardFilters(time_period=time_period)


@router.get("")
def dashboard(
    filters: DashboardFilters = Depends(get_dashboard_filters),
    service: LeaderboardService = Depends(get_leaderboard_service),
) -> ResponseEnvelope[LeaderboardResponse]:
    data = service.get_dashboard(filters.time_period)
    return ResponseEnvelope(data=data, meta=build_meta(filters.time_period))
