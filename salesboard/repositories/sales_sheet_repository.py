from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence, Set

from salesboard.core.config import get_settings
from salesboard.core.sheets import SheetsClient, quote_range
from salesboard.models.sales import SaleRecord
from salesboard.shared.currency import to_amount
from salesboard.shared.time import parse_sheet_date

logger = logging.getLogger(__name__)

FIRST_DATA_ROW = 2
ROW_WIDTH = 16
DATE_COLUMN = 0
SELLER_COLUMN = 1
ORDER_ID_COLUMN = 2
DB_COLUMN = 10
MEETING_COLUMN = 12
RETENTION_COLUMN = 13
CUSTOMER_COLUMN = 14
LINKED_ORDER_COLUMN = 15
LINKED_ORDER_COLUMN_LETTER = "P"
YES = "JA"
NO = "NEJ"


def _cell(row: Sequence[Any], index: int) -> Any:
    return row[index] if index < len(row) else None


def cell_text(value: Any) -> Optional[str]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    text = str(value).strip()
    return text or None


def is_yes(value: Any) -> bool:
    return isinstance(value, str) and value.strip().upper() == YES


def parse_sale_row(row: Sequence[Any], row_number: int) -> Optional[SaleRecord]:
    """Turn one raw sheet row into a record, or ``None`` if it is unusable."""
    if not any(cell not in (None, "") for cell in row):
        return None
    record_date = parse_sheet_date(_cell(row, DATE_COLUMN))
    if record_date is None:
        logger.debug("Skipping row %s with unreadable date %r", row_number, _cell(row, DATE_COLUMN))
        return None
    return SaleRecord(
        row_number=row_number,
        date=record_date,
        raw_seller_name=cell_text(_cell(row, SELLER_COLUMN)) or "",
        order_id=cell_text(_cell(row, ORDER_ID_COLUMN)),
        amount=to_amount(_cell(row, DB_COLUMN)),
        is_meeting=is_yes(_cell(row, MEETING_COLUMN)),
        is_retention=is_yes(_cell(row, RETENTION_COLUMN)),
        customer_name=cell_text(_cell(row, CUSTOMER_COLUMN)),
        linked_order_id=cell_text(_cell(row, LINKED_ORDER_COLUMN)),
    )


def build_sale_row(
    sale_date: str,
    seller: str,
    order_id: str,
    db_text: str,
    is_meeting: bool,
    is_retention: bool,
    customer_name: Optional[str] = None,
) -> List[Any]:
    row: List[Any] = [""] * ROW_WIDTH
    row[DATE_COLUMN] = sale_date
    row[SELLER_COLUMN] = seller
    row[ORDER_ID_COLUMN] = order_id
    row[DB_COLUMN] = db_text
    row[MEETING_COLUMN] = YES if is_meeting else NO
    row[RETENTION_COLUMN] = YES if is_retention else NO
    row[CUSTOMER_COLUMN] = customer_name or ""
    return row


class SalesSheetRepository:
    def __init__(self, client: Optional[SheetsClient] = None) -> None:
        self.client = client or SheetsClient()
        self.tab = get_settings().sales_sheet_tab

    def list_records(self) -> List[SaleRecord]:
        rows = self.client.get_values(quote_range(self.tab, f"A{FIRST_DATA_ROW}:P"))
        records: List[SaleRecord] = []
        for offset, row in enumerate(rows):
            record = parse_sale_row(row, FIRST_DATA_ROW + offset)
            if record is not None:
                records.append(record)
        return records

    def get_record(self, row_number: int) -> Optional[SaleRecord]:
        if row_number < FIRST_DATA_ROW:
            return None
        rows = self.client.get_values(quote_range(self.tab, f"A{row_number}:P{row_number}"))
        if not rows:
            return None
        return parse_sale_row(rows[0], row_number)

    def list_order_ids(self) -> Set[str]:
        rows = self.client.get_values(quote_range(self.tab, f"C{FIRST_DATA_ROW}:C"))
        order_ids: Set[str] = set()
        for row in rows:
            order_id = cell_text(_cell(row, 0))
            if order_id:
                order_ids.add(order_id)
        return order_ids

    def append_sale(self, row: List[Any]) -> None:
        self.client.append_row(quote_range(self.tab, "A:P"), row)

    def set_linked_order(self, row_number: int, order_id: str) -> None:
        cell = f"{LINKED_ORDER_COLUMN_LETTER}{row_number}"
        self.client.update_values(quote_range(self.tab, cell), [[order_id]])
