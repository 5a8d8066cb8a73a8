from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, Query

from salesboard.api.dependencies import get_sales_service
from salesboard.schemas.sales import RecentSale, SaleSubmission, SaleSubmissionResult
from salesboard.services.sales_service import SalesService
from salesboard.shared.response import ResponseEnvelope, build_meta

router = APIRouter(prefix="/sales", tags=["sales"])


@router.post("")
def submit_sale(
    submission: SaleSubmission,
    service: SalesService = Depends(get_sales_service),
) -> ResponseEnvelope[SaleSubmissionResult]:
    return ResponseEnvelope(data=service.record_sale(submission), meta=build_meta("now"))


@router.get("/recent")
def recent_sales(
    limit: int = Query(default=10, ge=1, le=200),
    service: SalesService = Depends(get_sales_service),
) -> ResponseEnvelope[List[RecentSale]]:
    return ResponseEnvelope(data=service.list_recent(limit), meta=build_meta("recent"))
