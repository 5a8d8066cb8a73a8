from __future__ import annotations

from functools import lru_cache
from typing import Dict, List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_SALESPEOPLE: Dict[str, List[str]] = {
    "Niels Larsen": ["niels larsen", "niels"],
    "Robert": ["robert"],
    "Søgaard": ["søgaard", "sogaard"],
    "Frank": ["frank"],
    "Jeppe": ["jeppe"],
    "Kristofer": ["kristofer", "kristoffer"],
}


class Settings(BaseSettings):
    # Ignore unrelated env keys so local/dev .env can include frontend settings.
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    app_name: str = "Sales Leaderboard Backend"
    environment: str = "development"
    api_prefix: str = "/api/v1"
    cors_allow_origins: str = "http://localhost:3000,http://127.0.0.1:3000"
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    google_service_account_email: Optional[str] = Field(
        default=None, alias="GOOGLE_SERVICE_ACCOUNT_EMAIL"
    )
    google_service_account_private_key: Optional[str] = Field(
        default=None, alias="GOOGLE_SERVICE_ACCOUNT_PRIVATE_KEY"
    )
    sales_sheet_id: Optional[str] = Field(default=None, alias="SALES_SHEET_ID")
    sales_sheet_tab: str = Field(default="SALG (INPUT) v2", alias="SALES_SHEET_TAB")
    goals_sheet_tab: str = Field(default="MÅL", alias="GOALS_SHEET_TAB")

    browserless_api_key: Optional[str] = Field(default=None, alias="BROWSERLESS_API_KEY")
    browserless_url: str = Field(
        default="https://production-sfo.browserless.io", alias="BROWSERLESS_URL"
    )
    webmerc_base_url: str = Field(default="https://admin.webmercs.com", alias="WEBMERC_BASE_URL")
    webmerc_company: str = Field(default="Sprinter", alias="WEBMERC_COMPANY")
    webmerc_username: Optional[str] = Field(default=None, alias="WEBMERC_USERNAME")
    webmerc_password: Optional[str] = Field(default=None, alias="WEBMERC_PASSWORD")
    order_lookup_timeout_seconds: float = Field(default=60.0, alias="ORDER_LOOKUP_TIMEOUT_SECONDS")

    default_monthly_goal: float = Field(default=100000.0, gt=0, alias="DEFAULT_MONTHLY_GOAL")
    meeting_lookback_days: int = Field(default=90, ge=0, alias="MEETING_LOOKBACK_DAYS")
    meeting_match_threshold: float = Field(
        default=0.3, ge=0, le=1, alias="MEETING_MATCH_THRESHOLD"
    )
    # JSON object of display name -> alias fragments; key order is match order.
    salespeople: Dict[str, List[str]] = Field(
        default_factory=lambda: dict(DEFAULT_SALESPEOPLE), alias="SALESPEOPLE"
    )
    sync_lookup_delay_seconds: float = Field(default=2.0, ge=0, alias="SYNC_LOOKUP_DELAY_SECONDS")
    cron_secret: Optional[str] = Field(default=None, alias="CRON_SECRET")


@lru_cache
def get_settings() -> Settings:
    return Settings()


def get_cors_origins() -> list[str]:
    settings = get_settings()
    return [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]
