"""Pydantic schemas for live quote endpoints."""

from pydantic import Field

from wealthvue.schemas.common import CamelModel, Money


class QuoteResponse(CamelModel):
    symbol: str
    regular_market_price: Money = Field(..., description="Latest traded price")
    currency: str | None = None
