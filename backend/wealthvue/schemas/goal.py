"""Pydantic schemas for the financial goal."""

from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, Field, field_validator

from wealthvue.schemas.common import CURRENCY_PATTERN, CamelModel, Money


class GoalUpdate(CamelModel):
    target_amount: Money = Field(..., gt=Decimal("0"))
    currency: str = Field("USD", pattern=CURRENCY_PATTERN)

    @field_validator("currency", mode="before")
    @classmethod
    def upper_currency(cls, value: str) -> str:
        return value.strip().upper() if isinstance(value, str) else value


class Goal(CamelModel):
    model_config = ConfigDict(from_attributes=True)

    target_amount: Money
    currency: str
    updated_at: datetime | None = None
