from __future__ import annotations

import logging
from datetime import date
from typing import Callable

from salesboard.analytics.leaderboard import aggregate_leaderboard
from salesboard.analytics.name_matching import AliasTable
from salesboard.core.errors import BadRequestError
from salesboard.repositories.goals_repository import GoalsRepository
from salesboard.repositories.sales_sheet_repository import SalesSheetRepository
from salesboard.schemas.goals import GoalsResponse, GoalUpdateRequest, GoalUpdateResult, SalespersonGoal

logger = logging.getLogger(__name__)


class GoalsService:
    def __init__(
        self,
        sales_repository: SalesSheetRepository,
        goals_repository: GoalsRepository,
        alias_table: AliasTable,
        default_goal: float,
        today_provider: Callable[[], date] = date.today,
    ) -> None:
        self.sales_repository = sales_repository
        self.goals_repository = goals_repository
        self.alias_table = alias_table
        self.default_goal = default_goal
        self.today_provider = today_provider

    def get_goals(self) -> GoalsResponse:
        raw_goals = self.goals_repository.list_goals()
        leaderboard = aggregate_leaderboard(
            self.sales_repository.list_records(),
            window="monthly",
            today=self.today_provider(),
            alias_table=self.alias_table,
            goals_by_person=raw_goals,
            default_goal=self.default_goal,
        )
        goals = [
            SalespersonGoal(
                name=row.name,
                current_goal=row.goal,
                current_db=row.db,
                is_default=row.name not in raw_goals,
                budget_info=row.budget,
            )
            for row in leaderboard.leaderboard
        ]
        return GoalsResponse(goals=goals, raw_goals=raw_goals)

    def update_goal(self, request: GoalUpdateRequest) -> GoalUpdateResult:
        if request.goal <= 0:
            raise BadRequestError("Goal must be greater than zero")
        person = self.alias_table.canonicalize(request.name)
        if person is None:
            raise BadRequestError(f"Unknown salesperson {request.name}")
        self.goals_repository.upsert_goal(person.display_name, request.goal)
        logger.info("Monthly goal for %s set to %s", person.display_name, request.goal)
        return GoalUpdateResult(name=person.display_name, goal=request.goal)
