from __future__ import annotations

from datetime import date
from typing import Callable

from salesboard.analytics.leaderboard import aggregate_leaderboard
from salesboard.analytics.name_matching import AliasTable
from salesboard.repositories.goals_repository import GoalsRepository
from salesboard.repositories.sales_sheet_repository import SalesSheetRepository
from salesboard.schemas.leaderboard import LeaderboardResponse


class LeaderboardService:
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

    def get_dashboard(self, time_period: str = "monthly") -> LeaderboardResponse:
        records = self.sales_repository.list_records()
        goals = self.goals_repository.list_goals()
        return aggregate_leaderboard(
            records,
            window=time_period,
            today=self.today_provider(),
            alias_table=self.alias_table,
            goals_by_person=goals,
            default_goal=self.default_goal,
        )
