"""Pydantic schemas for exchange rate endpoints."""

from datetime import datetime

from pydantic import Field

from wealthvue.schemas.common import CamelModel, Money


class FxRatesResponse(CamelModel):
    """USD-relative rate table; ``rates["USD"]`` is always 1."""

    base: str = "USD"
    rates: dict[str, Money]
    fetched_at: datetime


class ConversionResponse(CamelModel):
    amount: Money
    from_currency: str
    to_currency: str
    converted: Money = Field(..., description="Amount in to_currency")
