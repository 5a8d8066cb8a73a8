from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import ConfigDict, Field

from salesboard.shared.base import BaseSchema
from salesboard.shared.time import TIME_WINDOW_PATTERN


class MeetingMatchFilters(BaseSchema):
    # Keep query parameter names in snake_case for API contract consistency.
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    salesperson: str = Field(min_length=1)
    customer: str = Field(min_length=1)
    lookback_days: Optional[int] = Field(default=None, ge=0, le=3650)


class MeetingCandidate(BaseSchema):
    meeting_id: int
    date: dt.date
    salesperson: str
    customer_name: str
    match_score: float
    confidence: str
    converted: bool = False


class MeetingMatchResponse(BaseSchema):
    salesperson: str
    customer: str
    matches: List[MeetingCandidate]
    has_matches: bool
    best_match: Optional[MeetingCandidate] = None


class MeetingLinkRequest(BaseSchema):
    meeting_id: int = Field(ge=2)
    order_id: str = Field(min_length=1, pattern=r"\S")


class MeetingLinkResult(BaseSchema):
    meeting_id: int
    order_id: str
    linked: bool
    previous_order_id: Optional[str] = None
    message: str


class MeetingStatsRow(BaseSchema):
    name: str
    meetings: int
    converted: int
    conversion_rate: float


class MeetingStatsResponse(BaseSchema):
    time_period: str
    people: List[MeetingStatsRow]
    total_meetings: int
    total_converted: int
    conversion_rate: float
