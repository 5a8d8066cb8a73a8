from __future__ import annotations

from functools import lru_cache

from salesboard.analytics.name_matching import AliasTable
from salesboard.core.config import get_settings
from salesboard.core.order_portal import OrderPortalClient
from salesboard.repositories.goals_repository import GoalsRepository
from salesboard.repositories.sales_sheet_repository import SalesSheetRepository
from salesboard.services.goals_service import GoalsService
from salesboard.services.leaderboard_service import LeaderboardService
from salesboard.services.meetings_service import MeetingsService
from salesboard.services.orders_service import OrdersService
from salesboard.services.sales_service import SalesService


@lru_cache
def get_alias_table() -> AliasTable:
    return AliasTable.from_mapping(get_settings().salespeople)


@lru_cache
def get_sales_sheet_repository() -> SalesSheetRepository:
    return SalesSheetRepository()


@lru_cache
def get_goals_repository() -> GoalsRepository:
    return GoalsRepository()


@lru_cache
def get_order_portal_client() -> OrderPortalClient:
    return OrderPortalClient()


def get_leaderboard_service() -> LeaderboardService:
    return LeaderboardService(
        sales_repository=get_sales_sheet_repository(),
        goals_repository=get_goals_repository(),
        alias_table=get_alias_table(),
        default_goal=get_settings().default_monthly_goal,
    )


def get_goals_service() -> GoalsService:
    return GoalsService(
        sales_repository=get_sales_sheet_repository(),
        goals_repository=get_goals_repository(),
        alias_table=get_alias_table(),
        default_goal=get_settings().default_monthly_goal,
    )


def get_meetings_service() -> MeetingsService:
    settings = get_settings()
    return MeetingsService(
        sales_repository=get_sales_sheet_repository(),
        alias_table=get_alias_table(),
        lookback_days=settings.meeting_lookback_days,
        match_threshold=settings.meeting_match_threshold,
    )


def get_sales_service() -> SalesService:
    return SalesService(
        sales_repository=get_sales_sheet_repository(),
        meetings_service=get_meetings_service(),
        alias_table=get_alias_table(),
    )


def get_orders_service() -> OrdersService:
    return OrdersService(
        portal_client=get_order_portal_client(),
        sales_repository=get_sales_sheet_repository(),
        alias_table=get_alias_table(),
        lookup_delay_seconds=get_settings().sync_lookup_delay_seconds,
    )
