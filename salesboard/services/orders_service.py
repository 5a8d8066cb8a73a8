from __future__ import annotations

import logging
import time
from datetime import date
from typing import Callable, List

from salesboard.analytics.name_matching import AliasTable
from salesboard.core.errors import AppError
from salesboard.core.order_portal import OrderPortalClient
from salesboard.models.orders import OrderListItem
from salesboard.repositories.sales_sheet_repository import SalesSheetRepository, build_sale_row
from salesboard.schemas.orders import Order, OrderLookupResponse, OrderSyncResult, OrderSyncStats
from salesboard.shared.currency import format_danish_currency
from salesboard.shared.time import format_sheet_date, parse_sheet_date

logger = logging.getLogger(__name__)


class OrdersService:
    def __init__(
        self,
        portal_client: OrderPortalClient,
        sales_repository: SalesSheetRepository,
        alias_table: AliasTable,
        lookup_delay_seconds: float = 2.0,
        today_provider: Callable[[], date] = date.today,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.portal_client = portal_client
        self.sales_repository = sales_repository
        self.alias_table = alias_table
        self.lookup_delay_seconds = lookup_delay_seconds
        self.today_provider = today_provider
        self.sleep = sleep

    def lookup_order(self, order_id: str) -> OrderLookupResponse:
        order_id = order_id.strip()
        details = self.portal_client.lookup_order(order_id)
        if details is None:
            return OrderLookupResponse(
                order_id=order_id, found=False, message=f"Order {order_id} not found"
            )
        return OrderLookupResponse(
            order_id=order_id,
            found=True,
            order=Order(
                order_id=details.order_id,
                customer=details.customer,
                db=details.db,
                salesrep=details.salesrep,
            ),
        )

    def sync_new_orders(self) -> OrderSyncResult:
        """Append portal orders that the sheet does not know about yet.

        Each order is looked up on its own; one failing lookup is recorded in
        ``errors`` and the run moves on to the next order.
        """
        started = time.monotonic()
        existing_order_ids = self.sales_repository.list_order_ids()
        portal_orders = self.portal_client.fetch_recent_orders()
        new_orders = self._new_orders(portal_orders, existing_order_ids)
        logger.info(
            "Order sync: %s existing, %s in portal, %s new",
            len(existing_order_ids),
            len(portal_orders),
            len(new_orders),
        )

        synced = 0
        errors: List[str] = []
        for index, order in enumerate(new_orders):
            if index and self.lookup_delay_seconds:
                self.sleep(self.lookup_delay_seconds)
            try:
                details = self.portal_client.lookup_order(order.order_id)
                if details is None:
                    errors.append(f"Order #{order.order_id}: details not found")
                    continue
                person = self.alias_table.canonicalize(details.salesrep)
                row = build_sale_row(
                    sale_date=format_sheet_date(self._order_date(order)),
                    seller=person.display_name if person else details.salesrep,
                    order_id=details.order_id,
                    db_text=format_danish_currency(details.db),
                    is_meeting=False,
                    is_retention=False,
                    customer_name=details.customer,
                )
                self.sales_repository.append_sale(row)
                synced += 1
                logger.info("Synced order %s for %s", details.order_id, details.salesrep)
            except AppError as exc:
                logger.warning("Order sync failed for %s: %s", order.order_id, exc.message)
                errors.append(f"Order #{order.order_id}: {exc.message}")

        stats = OrderSyncStats(
            existing_orders=len(existing_order_ids),
            portal_orders=len(portal_orders),
            new_orders=len(new_orders),
            synced_orders=synced,
            errors=len(errors),
            duration_seconds=round(time.monotonic() - started, 1),
        )
        message = f"Synced {synced} new orders" if new_orders else "No new orders to sync"
        return OrderSyncResult(
            success=not errors or synced > 0,
            message=message,
            stats=stats,
            errors=errors,
        )

    @staticmethod
    def _new_orders(orders: List[OrderListItem], existing_order_ids: set[str]) -> List[OrderListItem]:
        seen = set(existing_order_ids)
        new_orders: List[OrderListItem] = []
        for order in orders:
            if order.order_id in seen:
                continue
            seen.add(order.order_id)
            new_orders.append(order)
        return new_orders

    def _order_date(self, order: OrderListItem) -> date:
        # Portal dates may carry a time part and use dots or slashes.
        day_part = (order.date.split() or [""])[0]
        normalized = day_part.replace(".", "-").replace("/", "-")
        return parse_sheet_date(normalized) or self.today_provider()
