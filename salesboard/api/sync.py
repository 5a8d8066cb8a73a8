from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, Header

from salesboard.api.dependencies import get_orders_service
from salesboard.core.config import get_settings
from salesboard.core.errors import UnauthorizedError
from salesboard.schemas.orders import OrderSyncResult
from salesboard.services.orders_service import OrdersService
from salesboard.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/sync", tags=["sync"])


def verify_cron_secret(authorization: Optional[str] = Header(default=None)) -> None:
    cron_secret = get_settings().cron_secret
    if cron_secret and authorization != f"Bearer {cron_secret}":
        raise UnauthorizedError("Invalid or missing cron secret")


@router.post("", dependencies=[Depends(verify_cron_secret)])
def sync_orders(
    service: OrdersService = Depends(get_orders_service),
) -> ResponseEnvelope[OrderSyncResult]:
    data = service.sync_new_orders()
    return ResponseEnvelope(data=data, meta=build_meta("now", source="webmerc,google_sheets"))
