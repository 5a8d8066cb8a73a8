from __future__ import annotations

import math
import re
from typing import Any

_CURRENCY_MARKER = re.compile(r"^\s*kr\.?\s*", re.IGNORECASE)
_THOUSANDS_SEPARATORS = re.compile(r"[.\s ]")


def format_danish_currency(amount: float) -> str:
    """Render an amount the way the sheet stores it, e.g. ``kr 1.234,50``."""
    english = f"{amount:,.2f}"
    danish = english.replace(",", "\x00").replace(".", ",").replace("\x00", ".")
    return f"kr {danish}"


def parse_danish_currency(text: str) -> float:
    cleaned = _CURRENCY_MARKER.sub("", text)
    cleaned = _THOUSANDS_SEPARATORS.sub("", cleaned).replace(",", ".", 1)
    try:
        amount = float(cleaned)
    except ValueError:
        return 0.0
    return amount if math.isfinite(amount) else 0.0


def to_amount(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        return parse_danish_currency(value)
    return 0.0
