from __future__ import annotations

from fastapi import APIRouter

from salesboard.core.config import get_settings
from salesboard.shared.response import ResponseEnvelope, build_meta


router = APIRouter(tags=["health"])


@router.get("/health")
def health_check() -> ResponseEnvelope[dict]:
    settings = get_settings()
    data = {
        "status": "ok",
        "sheetsConfigured": bool(
            settings.sales_sheet_id
            and settings.google_service_account_email
            and settings.google_service_account_private_key
        ),
        "orderPortalConfigured": bool(
            settings.browserless_api_key and settings.webmerc_username and settings.webmerc_password
        ),
    }
    return ResponseEnvelope(data=data, meta=build_meta("now", source="system"))


@router.get("/healthz")
def health_check_liveness() -> ResponseEnvelope[dict]:
    return ResponseEnvelope(data={"status": "ok"}, meta=build_meta("now", source="system"))
