from __future__ import annotations

import logging
from datetime import date
from typing import Dict, List, Optional

import pytest

from salesboard.analytics.name_matching import AliasTable
from salesboard.core.errors import BadRequestError, UpstreamError
from salesboard.models.orders import OrderDetails, OrderListItem
from salesboard.schemas.goals import GoalUpdateRequest
from salesboard.schemas.meetings import MeetingMatchFilters
from salesboard.schemas.sales import SaleSubmission
from salesboard.services.goals_service import GoalsService
from salesboard.services.leaderboard_service import LeaderboardService
from salesboard.services.meetings_service import MeetingsService
from salesboard.services.orders_service import OrdersService
from salesboard.services.sales_service import SalesService
from tests.factories import TODAY, InMemoryGoalsRepository, InMemorySalesRepository


def _meetings_service(repository: InMemorySalesRepository, alias_table: AliasTable) -> MeetingsService:
    return MeetingsService(repository, alias_table, today_provider=lambda: TODAY)


class StubOrderPortal:
    def __init__(self, orders: List[OrderListItem], details: Dict[str, Optional[OrderDetails]]) -> None:
        self.orders = orders
        self.details = details
        self.lookups: List[str] = []

    def fetch_recent_orders(self) -> List[OrderListItem]:
        return self.orders

    def lookup_order(self, order_id: str) -> Optional[OrderDetails]:
        self.lookups.append(order_id)
        detail = self.details.get(order_id)
        if isinstance(detail, Exception):
            raise detail
        return detail


def test_leaderboard_service_reads_goals(
    sales_repository: InMemorySalesRepository,
    goals_repository: InMemoryGoalsRepository,
    alias_table: AliasTable,
) -> None:
    service = LeaderboardService(
        sales_repository, goals_repository, alias_table, 100000.0, today_provider=lambda: TODAY
    )

    result = service.get_dashboard("monthly")

    assert result.time_period == "monthly"
    assert result.leaderboard[0].name == "Robert"
    assert result.leaderboard[0].goal == 80000


def test_find_matches_uses_configured_lookback(
    sales_repository: InMemorySalesRepository, alias_table: AliasTable
) -> None:
    service = _meetings_service(sales_repository, alias_table)

    response = service.find_matches(MeetingMatchFilters(salesperson="Robert", customer="Acme A/S"))
    assert response.has_matches is True
    assert response.best_match is not None
    assert response.best_match.meeting_id == 6

    narrow = service.find_matches(
        MeetingMatchFilters(salesperson="Robert", customer="Acme A/S", lookback_days=5)
    )
    assert narrow.has_matches is False
    assert narrow.best_match is None


def test_link_meeting_twice_is_idempotent(
    sales_repository: InMemorySalesRepository, alias_table: AliasTable
) -> None:
    service = _meetings_service(sales_repository, alias_table)

    first = service.link_meeting(6, "2001")
    state_after_first = sales_repository.get_record(6)
    second = service.link_meeting(6, "2001")

    assert first.linked is True
    assert first.previous_order_id is None
    assert second.linked is True
    assert second.previous_order_id == "2001"
    assert sales_repository.get_record(6) == state_after_first
    assert sales_repository.get_record(6).linked_order_id == "2001"


def test_linked_meeting_leaves_candidate_list(
    sales_repository: InMemorySalesRepository, alias_table: AliasTable
) -> None:
    service = _meetings_service(sales_repository, alias_table)
    service.link_meeting(6, "2001")

    response = service.find_matches(MeetingMatchFilters(salesperson="Robert", customer="Acme A/S"))

    assert [match.meeting_id for match in response.matches] == [4]


def test_relinking_logs_warning(
    sales_repository: InMemorySalesRepository,
    alias_table: AliasTable,
    caplog: pytest.LogCaptureFixture,
) -> None:
    service = _meetings_service(sales_repository, alias_table)

    with caplog.at_level(logging.WARNING):
        result = service.link_meeting(7, "2002")

    assert result.linked is True
    assert result.previous_order_id == "999"
    assert "relinked" in caplog.text


def test_link_meeting_refuses_non_meeting_rows(
    sales_repository: InMemorySalesRepository, alias_table: AliasTable
) -> None:
    service = _meetings_service(sales_repository, alias_table)

    assert service.link_meeting(10, "2001").linked is False
    assert service.link_meeting(404, "2001").linked is False
    assert sales_repository.link_writes == []


def test_meeting_stats(sales_repository: InMemorySalesRepository, alias_table: AliasTable) -> None:
    stats = _meetings_service(sales_repository, alias_table).get_stats("monthly")

    assert stats.total_meetings == 4
    assert stats.total_converted == 1


def _sales_service(repository: InMemorySalesRepository, alias_table: AliasTable) -> SalesService:
    return SalesService(repository, _meetings_service(repository, alias_table), alias_table)


def test_record_sale_appends_canonical_row(
    sales_repository: InMemorySalesRepository, alias_table: AliasTable
) -> None:
    service = _sales_service(sales_repository, alias_table)

    result = service.record_sale(
        SaleSubmission(
            date=date(2024, 3, 21),
            salesperson="robert",
            order_id=" 3001 ",
            db=1500,
            is_retention=True,
            customer_name="Acme A/S",
        )
    )

    assert result.success is True
    assert result.salesperson == "Robert"
    assert result.order_id == "3001"
    assert result.meeting_link is None
    row = sales_repository.appended[0]
    assert row[:3] == ["21-03-2024", "Robert", "3001"]
    assert row[10] == "kr 1.500,00"
    assert row[12:15] == ["NEJ", "JA", "Acme A/S"]


def test_record_meeting_without_order_uses_marker(
    sales_repository: InMemorySalesRepository, alias_table: AliasTable
) -> None:
    service = _sales_service(sales_repository, alias_table)

    result = service.record_sale(
        SaleSubmission(
            date=date(2024, 3, 21), salesperson="Niels", db=999, is_meeting=True, customer_name="Globex"
        )
    )

    assert result.order_id == "MØDE"
    row = sales_repository.appended[0]
    assert row[2] == "MØDE"
    assert row[10] == "kr 0,00"
    assert row[12] == "JA"


def test_record_sale_requires_order_id(
    sales_repository: InMemorySalesRepository, alias_table: AliasTable
) -> None:
    service = _sales_service(sales_repository, alias_table)

    with pytest.raises(BadRequestError):
        service.record_sale(SaleSubmission(date=TODAY, salesperson="Robert", db=100))
    assert sales_repository.appended == []


def test_record_sale_rejects_unknown_salesperson(
    sales_repository: InMemorySalesRepository, alias_table: AliasTable
) -> None:
    service = _sales_service(sales_repository, alias_table)

    with pytest.raises(BadRequestError):
        service.record_sale(SaleSubmission(date=TODAY, salesperson="Ukendt", order_id="1", db=100))


def test_record_sale_links_meeting(sales_repository: InMemorySalesRepository, alias_table: AliasTable) -> None:
    service = _sales_service(sales_repository, alias_table)

    result = service.record_sale(
        SaleSubmission(date=TODAY, salesperson="Robert", order_id="3002", db=2000, meeting_id=6)
    )

    assert result.meeting_link is not None
    assert result.meeting_link.linked is True
    assert result.warnings == []
    assert sales_repository.link_writes == [(6, "3002")]


def test_record_sale_keeps_row_when_link_fails(
    sales_repository: InMemorySalesRepository, alias_table: AliasTable
) -> None:
    sales_repository.fail_links = True
    service = _sales_service(sales_repository, alias_table)

    result = service.record_sale(
        SaleSubmission(date=TODAY, salesperson="Robert", order_id="3003", db=2000, meeting_id=6)
    )

    assert result.success is True
    assert len(sales_repository.appended) == 1
    assert result.meeting_link is None
    assert len(result.warnings) == 1
    assert "meeting 6" in result.warnings[0]


def test_record_sale_warns_when_meeting_missing(
    sales_repository: InMemorySalesRepository, alias_table: AliasTable
) -> None:
    service = _sales_service(sales_repository, alias_table)

    result = service.record_sale(
        SaleSubmission(date=TODAY, salesperson="Robert", order_id="3004", db=2000, meeting_id=10)
    )

    assert result.meeting_link is not None
    assert result.meeting_link.linked is False
    assert result.warnings == ["No meeting found at row 10"]


def test_list_recent_returns_newest_first(
    sales_repository: InMemorySalesRepository, alias_table: AliasTable
) -> None:
    recent = _sales_service(sales_repository, alias_table).list_recent(2)

    assert [sale.row_number for sale in recent] == [10, 9]


def _goals_service(
    sales_repository: InMemorySalesRepository,
    goals_repository: InMemoryGoalsRepository,
    alias_table: AliasTable,
) -> GoalsService:
    return GoalsService(sales_repository, goals_repository, alias_table, 100000.0, today_provider=lambda: TODAY)


def test_get_goals_flags_defaults(
    sales_repository: InMemorySalesRepository,
    goals_repository: InMemoryGoalsRepository,
    alias_table: AliasTable,
) -> None:
    response = _goals_service(sales_repository, goals_repository, alias_table).get_goals()
    goals = {goal.name: goal for goal in response.goals}

    assert response.raw_goals == {"Robert": 80000.0}
    assert goals["Robert"].is_default is False
    assert goals["Robert"].current_goal == 80000
    assert goals["Robert"].current_db == 40000
    assert goals["Niels Larsen"].is_default is True
    assert goals["Niels Larsen"].current_goal == 100000


def test_update_goal_uses_display_name(
    sales_repository: InMemorySalesRepository,
    goals_repository: InMemoryGoalsRepository,
    alias_table: AliasTable,
) -> None:
    service = _goals_service(sales_repository, goals_repository, alias_table)

    result = service.update_goal(GoalUpdateRequest(name="niels", goal=150000))

    assert result.name == "Niels Larsen"
    assert goals_repository.goals["Niels Larsen"] == 150000


def test_update_goal_rejects_bad_input(
    sales_repository: InMemorySalesRepository,
    goals_repository: InMemoryGoalsRepository,
    alias_table: AliasTable,
) -> None:
    service = _goals_service(sales_repository, goals_repository, alias_table)

    with pytest.raises(BadRequestError):
        service.update_goal(GoalUpdateRequest(name="Robert", goal=0))
    with pytest.raises(BadRequestError):
        service.update_goal(GoalUpdateRequest(name="Ukendt", goal=1000))
    assert goals_repository.goals == {"Robert": 80000.0}


def test_lookup_order(sales_repository: InMemorySalesRepository, alias_table: AliasTable) -> None:
    portal = StubOrderPortal(
        orders=[],
        details={"2001": OrderDetails(order_id="2001", customer="Acme A/S", db="kr 1.000,00", salesrep="Robert")},
    )
    service = OrdersService(portal, sales_repository, alias_table)

    found = service.lookup_order(" 2001 ")
    missing = service.lookup_order("9999")

    assert found.found is True
    assert found.order is not None
    assert found.order.db == 1000.0
    assert missing.found is False
    assert missing.order is None


def test_sync_new_orders(sales_repository: InMemorySalesRepository, alias_table: AliasTable) -> None:
    portal = StubOrderPortal(
        orders=[
            OrderListItem(order_id="1001", date="05-03-2024"),
            OrderListItem(order_id="2001", date="20.03.2024 14:02"),
            OrderListItem(order_id="2002", date=""),
            OrderListItem(order_id="2002", date=""),
            OrderListItem(order_id="2003", date="21/03/2024"),
            OrderListItem(order_id="2004", date="21-03-2024"),
        ],
        details={
            "2001": OrderDetails(order_id="2001", customer="Acme A/S", db=1500, salesrep="Robert Hansen"),
            "2002": OrderDetails(order_id="2002", customer="Globex", db="kr 750,00", salesrep="Jens Hansen"),
            "2003": UpstreamError("Order portal lookup failed"),
            "2004": None,
        },
    )
    delays: List[float] = []
    service = OrdersService(
        portal,
        sales_repository,
        alias_table,
        lookup_delay_seconds=2.0,
        today_provider=lambda: TODAY,
        sleep=delays.append,
    )

    result = service.sync_new_orders()

    assert portal.lookups == ["2001", "2002", "2003", "2004"]
    assert delays == [2.0, 2.0, 2.0]
    assert result.success is True
    assert result.message == "Synced 2 new orders"
    assert result.stats.portal_orders == 6
    assert result.stats.new_orders == 4
    assert result.stats.synced_orders == 2
    assert result.stats.errors == 2
    assert result.errors == [
        "Order #2003: Order portal lookup failed",
        "Order #2004: details not found",
    ]
    first, second = sales_repository.appended
    assert first[:3] == ["20-03-2024", "Robert", "2001"]
    assert first[10] == "kr 1.500,00"
    assert first[14] == "Acme A/S"
    assert second[:3] == ["21-03-2024", "Jens Hansen", "2002"]


def test_sync_with_nothing_new(sales_repository: InMemorySalesRepository, alias_table: AliasTable) -> None:
    portal = StubOrderPortal(orders=[OrderListItem(order_id="1001")], details={})
    delays: List[float] = []
    service = OrdersService(portal, sales_repository, alias_table, sleep=delays.append)

    result = service.sync_new_orders()

    assert result.message == "No new orders to sync"
    assert result.stats.new_orders == 0
    assert portal.lookups == []
    assert delays == []


def test_link_meeting_rejects_blank_order_id(
    sales_repository: InMemorySalesRepository, alias_table: AliasTable
) -> None:
    service = _meetings_service(sales_repository, alias_table)

    with pytest.raises(BadRequestError):
        service.link_meeting(7, "   ")
    with pytest.raises(BadRequestError):
        service.link_meeting(6, "")

    assert sales_repository.link_writes == []
    assert sales_repository.get_record(7).linked_order_id == "999"
    assert sales_repository.get_record(7).converted is True


def test_sync_reports_failure_when_every_lookup_fails(
    sales_repository: InMemorySalesRepository, alias_table: AliasTable
) -> None:
    portal = StubOrderPortal(
        orders=[OrderListItem(order_id="2001"), OrderListItem(order_id="2002")],
        details={
            "2001": UpstreamError("Browserless returned an unreadable response"),
            "2002": None,
        },
    )
    service = OrdersService(portal, sales_repository, alias_table, sleep=lambda seconds: None)

    result = service.sync_new_orders()

    assert result.success is False
    assert result.stats.synced_orders == 0
    assert result.errors == [
        "Order #2001: Browserless returned an unreadable response",
        "Order #2002: details not found",
    ]
    assert sales_repository.appended == []
