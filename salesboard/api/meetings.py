from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Query

from salesboard.api.dependencies import get_meetings_service
from salesboard.schemas.meetings import (
    MeetingLinkRequest,
    MeetingLinkResult,
    MeetingMatchFilters,
    MeetingMatchResponse,
    MeetingStatsResponse,
)
from salesboard.services.meetings_service import MeetingsService
from salesboard.shared.response import ResponseEnvelope, build_meta
from salesboard.shared.time import TIME_WINDOW_PATTERN

router = APIRouter(prefix="/meetings", tags=["meetings"])


def get_meeting_match_filters(
    salesperson: str = Query(min_length=1),
    customer: str = Query(min_length=1),
    lookback_days: Optional[int] = Query(default=None, ge=0, le=3650),
) -> MeetingMatchFilters:
    return MeetingMatchFilters(salesperson=salesperson, customer=customer, lookback_days=lookback_days)


@router.get("/match")
def match_meetings(
    filters: MeetingMatchFilters = Depends(get_meeting_match_filters),
    service: MeetingsService = Depends(get_meetings_service),
) -> ResponseEnvelope[MeetingMatchResponse]:
    data = service.find_matches(filters)
    window = f"{filters.lookback_days if filters.lookback_days is not None else service.lookback_days}d"
    return ResponseEnvelope(data=data, meta=build_meta(window))


@router.post("/link")
def link_meeting(
    request: MeetingLinkRequest,
    service: MeetingsService = Depends(get_meetings_service),
) -> ResponseEnvelope[MeetingLinkResult]:
    data = service.link_meeting(request.meeting_id, request.order_id)
    return ResponseEnvelope(data=data, meta=build_meta("now"))


@router.get("/stats")
def meeting_stats(
    time_period: str = Query(default="monthly", pattern=TIME_WINDOW_PATTERN),
    service: MeetingsService = Depends(get_meetings_service),
) -> ResponseEnvelope[MeetingStatsResponse]:
    return ResponseEnvelope(data=service.get_stats(time_period), meta=build_meta(time_period))
