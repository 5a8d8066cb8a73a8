from __future__ import annotations

from salesboard.shared.base import BaseSchema


class BudgetSnapshot(BaseSchema):
    goal: float
    actual: float
    workdays_in_month: int
    workdays_elapsed: int
    workdays_remaining: int
    daily_target: float
    expected_to_date: float
    variance: float
    is_under_pace: bool
    required_daily_run_rate: float
