from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from salesboard.shared.currency import to_amount


class OrderListItem(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: str = Field(alias="orderId")
    customer: str = ""
    db: float = 0.0
    date: str = ""

    @field_validator("db", mode="before")
    @classmethod
    def _parse_db(cls, value: Any) -> float:
        return to_amount(value)


class OrderDetails(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    order_id: str = Field(alias="orderId")
    customer: str = ""
    db: float = 0.0
    salesrep: str = ""

    @field_validator("db", mode="before")
    @classmethod
    def _parse_db(cls, value: Any) -> float:
        return to_amount(value)
