from __future__ import annotations

from typing import List, Optional

from salesboard.shared.base import BaseSchema


class Order(BaseSchema):
    order_id: str
    customer: str
    db: float
    salesrep: str


class OrderLookupResponse(BaseSchema):
    order_id: str
    found: bool
    order: Optional[Order] = None
    message: Optional[str] = None


class OrderSyncStats(BaseSchema):
    existing_orders: int
    portal_orders: int
    new_orders: int
    synced_orders: int
    errors: int
    duration_seconds: float


class OrderSyncResult(BaseSchema):
    success: bool
    message: str
    stats: OrderSyncStats
    errors: List[str]
