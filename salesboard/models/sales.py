from __future__ import annotations

import datetime as dt
from typing import FrozenSet, Optional

from pydantic import BaseModel, ConfigDict

MEETING_ORDER_MARKER = "MØDE"


class SaleRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    row_number: int
    date: dt.date
    raw_seller_name: str
    order_id: Optional[str] = None
    amount: float = 0.0
    is_meeting: bool = False
    is_retention: bool = False
    customer_name: Optional[str] = None
    linked_order_id: Optional[str] = None

    @property
    def is_meeting_log(self) -> bool:
        return self.is_meeting and self.amount == 0

    @property
    def converted(self) -> bool:
        return bool(self.linked_order_id)


class CanonicalSalesperson(BaseModel):
    model_config = ConfigDict(frozen=True)

    display_name: str
    aliases: FrozenSet[str]


class GoalRecord(BaseModel):
    row_number: int
    salesperson: str
    amount: float
