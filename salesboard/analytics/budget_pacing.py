from __future__ import annotations

import math
from datetime import date

from salesboard.analytics.workdays import workdays_elapsed, workdays_in_month
from salesboard.core.errors import BadRequestError
from salesboard.schemas.budget import BudgetSnapshot


def round_currency(value: float) -> float:
    """Half-up rounding to whole currency units."""
    return float(math.floor(value + 0.5))


def pace(actual: float, goal: float, today: date) -> BudgetSnapshot:
    """Compare month-to-date DB against a linear pro-ration of the monthly goal.

    The goal is spread evenly over the Monday-Friday workdays of ``today``'s
    month; today counts as elapsed. With no workdays left the required run
    rate is the raw remaining shortfall.
    """
    if goal <= 0:
        raise BadRequestError("Goal must be greater than zero")
    if actual < 0:
        raise BadRequestError("Actual must not be negative")

    total_workdays = workdays_in_month(today.year, today.month)
    elapsed = workdays_elapsed(today.year, today.month, today.day)
    remaining = max(total_workdays - elapsed, 0)

    daily_target = goal / total_workdays if total_workdays else 0.0
    expected_to_date = daily_target * elapsed
    variance = actual - expected_to_date
    shortfall = goal - actual
    required_daily_run_rate = shortfall / remaining if remaining else shortfall

    return BudgetSnapshot(
        goal=goal,
        actual=actual,
        workdays_in_month=total_workdays,
        workdays_elapsed=elapsed,
        workdays_remaining=remaining,
        daily_target=round_currency(daily_target),
        expected_to_date=round_currency(expected_to_date),
        variance=round_currency(variance),
        is_under_pace=variance < 0,
        required_daily_run_rate=round_currency(required_daily_run_rate),
    )
