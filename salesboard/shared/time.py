from __future__ import annotations

import math
from datetime import date, timedelta
from typing import Any, Optional

from salesboard.core.errors import BadRequestError

TIME_WINDOW_PATTERN = "^(daily|monthly|yearly)$"

UNIX_EPOCH = date(1970, 1, 1)
# Day count between the spreadsheet epoch (1899-12-30) and the Unix epoch.
SHEET_UNIX_OFFSET_DAYS = 25569


def resolve_window_start(window: str, today: date) -> date:
    if window == "daily":
        return today
    if window == "monthly":
        return today.replace(day=1)
    if window == "yearly":
        return date(today.year, 1, 1)
    raise BadRequestError("Unsupported time window format")


def serial_to_date(serial: float) -> date:
    return UNIX_EPOCH + timedelta(days=math.floor(serial) - SHEET_UNIX_OFFSET_DAYS)


def date_to_serial(value: date) -> int:
    return (value - UNIX_EPOCH).days + SHEET_UNIX_OFFSET_DAYS


def parse_sheet_date(value: Any) -> Optional[date]:
    """Read a date cell as either a serial day count or ``DD-MM-YYYY`` text.

    ISO ``YYYY-MM-DD`` text is accepted too, since the entry form submits
    dates in that shape. Anything else yields ``None``.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        if not math.isfinite(value):
            return None
        try:
            return serial_to_date(value)
        except OverflowError:
            return None
    if not isinstance(value, str):
        return None
    parts = value.strip().split("-")
    if len(parts) != 3:
        return None
    try:
        first, month, last = (int(part) for part in parts)
        if len(parts[0].strip()) == 4:
            return date(first, month, last)
        return date(last, month, first)
    except ValueError:
        return None


def format_sheet_date(value: date) -> str:
    return value.strftime("%d-%m-%Y")
