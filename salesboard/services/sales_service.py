from __future__ import annotations

import logging
from typing import List

from salesboard.analytics.name_matching import AliasTable
from salesboard.core.errors import AppError, BadRequestError
from salesboard.models.sales import MEETING_ORDER_MARKER
from salesboard.repositories.sales_sheet_repository import SalesSheetRepository, build_sale_row
from salesboard.schemas.meetings import MeetingLinkResult
from salesboard.schemas.sales import RecentSale, SaleSubmission, SaleSubmissionResult
from salesboard.services.meetings_service import MeetingsService
from salesboard.shared.currency import format_danish_currency
from salesboard.shared.time import format_sheet_date

logger = logging.getLogger(__name__)


class SalesService:
    def __init__(
        self,
        sales_repository: SalesSheetRepository,
        meetings_service: MeetingsService,
        alias_table: AliasTable,
    ) -> None:
        self.sales_repository = sales_repository
        self.meetings_service = meetings_service
        self.alias_table = alias_table

    def record_sale(self, submission: SaleSubmission) -> SaleSubmissionResult:
        person = self.alias_table.canonicalize(submission.salesperson)
        if person is None:
            raise BadRequestError(f"Unknown salesperson {submission.salesperson}")

        order_id = (submission.order_id or "").strip()
        db = submission.db
        if not order_id:
            if not submission.is_meeting:
                raise BadRequestError("Order ID is required unless the entry is a meeting")
            order_id = MEETING_ORDER_MARKER
            db = 0.0

        row = build_sale_row(
            sale_date=format_sheet_date(submission.date),
            seller=person.display_name,
            order_id=order_id,
            db_text=format_danish_currency(db),
            is_meeting=submission.is_meeting,
            is_retention=submission.is_retention,
            customer_name=(submission.customer_name or "").strip() or None,
        )
        self.sales_repository.append_sale(row)
        logger.info("Recorded row for %s (order %s)", person.display_name, order_id)

        warnings: List[str] = []
        meeting_link: MeetingLinkResult | None = None
        if submission.meeting_id is not None and order_id != MEETING_ORDER_MARKER:
            # The sale row is already written; a failed link never undoes it.
            try:
                meeting_link = self.meetings_service.link_meeting(submission.meeting_id, order_id)
            except AppError as exc:
                logger.warning(
                    "Sale %s recorded but linking meeting row %s failed: %s",
                    order_id,
                    submission.meeting_id,
                    exc.message,
                )
                warnings.append(
                    f"Sale recorded, but linking meeting {submission.meeting_id} failed: {exc.message}"
                )
            else:
                if not meeting_link.linked:
                    warnings.append(meeting_link.message)

        return SaleSubmissionResult(
            success=True,
            salesperson=person.display_name,
            order_id=order_id,
            meeting_link=meeting_link,
            warnings=warnings,
        )

    def list_recent(self, limit: int = 10) -> List[RecentSale]:
        records = self.sales_repository.list_records()
        recent = list(reversed(records))[:limit]
        return [
            RecentSale(
                row_number=record.row_number,
                date=record.date,
                salesperson=record.raw_seller_name,
                order_id=record.order_id,
                db=record.amount,
                is_meeting=record.is_meeting,
                is_retention=record.is_retention,
                customer_name=record.customer_name,
            )
            for record in recent
        ]
