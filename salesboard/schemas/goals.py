from __future__ import annotations

from typing import Dict, List

from pydantic import Field

from salesboard.schemas.budget import BudgetSnapshot
from salesboard.shared.base import BaseSchema


class GoalUpdateRequest(BaseSchema):
    name: str = Field(min_length=1)
    goal: float


class SalespersonGoal(BaseSchema):
    name: str
    current_goal: float
    current_db: float
    is_default: bool
    budget_info: BudgetSnapshot


class GoalsResponse(BaseSchema):
    goals: List[SalespersonGoal]
    raw_goals: Dict[str, float]


class GoalUpdateResult(BaseSchema):
    name: str
    goal: float
