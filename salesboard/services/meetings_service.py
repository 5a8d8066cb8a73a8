from __future__ import annotations

import logging
from datetime import date
from typing import Callable, Optional

from salesboard.analytics.meeting_reconciliation import (
    DEFAULT_LOOKBACK_DAYS,
    find_meeting_candidates,
    summarize_meeting_conversions,
)
from salesboard.analytics.name_matching import MATCH_THRESHOLD, AliasTable
from salesboard.core.errors import BadRequestError
from salesboard.repositories.sales_sheet_repository import SalesSheetRepository
from salesboard.schemas.meetings import (
    MeetingLinkResult,
    MeetingMatchFilters,
    MeetingMatchResponse,
    MeetingStatsResponse,
)

logger = logging.getLogger(__name__)


class MeetingsService:
    def __init__(
        self,
        sales_repository: SalesSheetRepository,
        alias_table: AliasTable,
        lookback_days: int = DEFAULT_LOOKBACK_DAYS,
        match_threshold: float = MATCH_THRESHOLD,
        today_provider: Callable[[], date] = date.today,
    ) -> None:
        self.sales_repository = sales_repository
        self.alias_table = alias_table
        self.lookback_days = lookback_days
        self.match_threshold = match_threshold
        self.today_provider = today_provider

    def find_matches(self, filters: MeetingMatchFilters) -> MeetingMatchResponse:
        lookback_days = filters.lookback_days if filters.lookback_days is not None else self.lookback_days
        matches = find_meeting_candidates(
            salesperson=filters.salesperson,
            customer_name=filters.customer,
            meetings=self.sales_repository.list_records(),
            alias_table=self.alias_table,
            today=self.today_provider(),
            lookback_days=lookback_days,
            threshold=self.match_threshold,
        )
        return MeetingMatchResponse(
            salesperson=filters.salesperson,
            customer=filters.customer,
            matches=matches,
            has_matches=bool(matches),
            best_match=matches[0] if matches else None,
        )

    def link_meeting(self, meeting_id: int, order_id: str) -> MeetingLinkResult:
        """Write ``order_id`` onto the meeting row, converting the meeting.

        Linking is last-write-wins: there is no lock between reading the row
        and writing the link cell, so concurrent links to one meeting race.
        """
        order_id = order_id.strip()
        if not order_id:
            raise BadRequestError("Order ID must not be blank")
        meeting = self.sales_repository.get_record(meeting_id)
        if meeting is None or not meeting.is_meeting_log:
            return MeetingLinkResult(
                meeting_id=meeting_id,
                order_id=order_id,
                linked=False,
                message=f"No meeting found at row {meeting_id}",
            )

        previous_order_id: Optional[str] = meeting.linked_order_id
        if previous_order_id and previous_order_id != order_id:
            logger.warning(
                "Meeting row %s relinked from order %s to %s", meeting_id, previous_order_id, order_id
            )
        self.sales_repository.set_linked_order(meeting_id, order_id)
        return MeetingLinkResult(
            meeting_id=meeting_id,
            order_id=order_id,
            linked=True,
            previous_order_id=previous_order_id,
            message=f"Sale {order_id} linked to meeting at row {meeting_id}",
        )

    def get_stats(self, time_period: str = "monthly") -> MeetingStatsResponse:
        return summarize_meeting_conversions(
            self.sales_repository.list_records(),
            window=time_period,
            today=self.today_provider(),
            alias_table=self.alias_table,
        )
