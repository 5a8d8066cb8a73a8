from __future__ import annotations

from datetime import date
from typing import Generic, Optional, TypeVar

from salesboard.shared.base import BaseSchema


T = TypeVar("T")

CALCULATION_VERSION = "v1"
SHEET_SOURCE = "google_sheets"


class Meta(BaseSchema):
    as_of_date: str
    source: str
    time_window: str
    calculation_version: str = CALCULATION_VERSION
    currency: Optional[str] = "DKK"
    generated_at: Optional[str] = None


class ResponseEnvelope(BaseSchema, Generic[T]):
    data: T
    meta: Optional[Meta] = None


def build_meta(time_window: str, source: str = SHEET_SOURCE, as_of: Optional[date] = None) -> Meta:
    return Meta(
        as_of_date=(as_of or date.today()).isoformat(),
        source=source,
        time_window=time_window,
    )
