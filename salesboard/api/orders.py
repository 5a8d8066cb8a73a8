from __future__ import annotations

from fastapi import APIRouter, Depends

from salesboard.api.dependencies import get_orders_service
from salesboard.schemas.orders import OrderLookupResponse
from salesboard.services.orders_service import OrdersService
from salesboard.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/orders", tags=["orders"])


@router.get("/{order_id}")
def lookup_order(
    order_id: str,
    service: OrdersService = Depends(get_orders_service),
) -> ResponseEnvelope[OrderLookupResponse]:
    data = service.lookup_order(order_id)
    return ResponseEnvelope(data=data, meta=build_meta("now", source="webmerc"))
