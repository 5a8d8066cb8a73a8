from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import Field

from salesboard.schemas.meetings import MeetingLinkResult
from salesboard.shared.base import BaseSchema


class SaleSubmission(BaseSchema):
    date: dt.date
    salesperson: str = Field(min_length=1)
    order_id: Optional[str] = None
    db: float = Field(default=0.0, ge=0)
    is_meeting: bool = False
    is_retention: bool = False
    customer_name: Optional[str] = None
    meeting_id: Optional[int] = Field(default=None, ge=2)


class SaleSubmissionResult(BaseSchema):
    success: bool
    salesperson: str
    order_id: str
    meeting_link: Optional[MeetingLinkResult] = None
    warnings: List[str] = Field(default_factory=list)


class RecentSale(BaseSchema):
    row_number: int
    date: dt.date
    salesperson: str
    order_id: Optional[str] = None
    db: float
    is_meeting: bool
    is_retention: bool
    customer_name: Optional[str] = None
