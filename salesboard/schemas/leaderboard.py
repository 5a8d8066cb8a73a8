from __future__ import annotations

from typing import List

from pydantic import ConfigDict, Field

from salesboard.schemas.budget import BudgetSnapshot
from salesboard.shared.base import BaseSchema
from salesboard.shared.time import TIME_WINDOW_PATTERN


class DashboardFilters(BaseSchema):
    # Keep query parameter names in snake_case for API contract consistency.
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    time_period: str = Field(default="monthly", pattern=TIME_WINDOW_PATTERN)


class LeaderboardRow(BaseSchema):
    name: str
    db: float
    meetings: int
    retention: float
    goal: float
    goal_progress: float
    budget: BudgetSnapshot


class LeaderboardTotals(BaseSchema):
    db: float
    meetings: int
    retention: float


class LeaderboardResponse(BaseSchema):
    time_period: str
    leaderboard: List[LeaderboardRow]
    totals: LeaderboardTotals
