"""Exchange rates API router."""

from decimal import Decimal

from fastapi import APIRouter, Depends, Query

from wealthvue.dependencies.services import get_rate_cache
from wealthvue.schemas.fx import ConversionResponse, FxRatesResponse
from wealthvue.services.fx.converter import convert_currency
from wealthvue.services.fx.rate_cache import FxRateCache

router = APIRouter(prefix="/api/fx", tags=["fx"])


@router.get("/rates", response_model=FxRatesResponse)
def get_rates(rate_cache: FxRateCache = Depends(get_rate_cache)):
    """Current USD-relative exchange rates (cached for an hour)."""
    snapshot = rate_cache.get_rates()
    return FxRatesResponse(rates=snapshot.rates, fetched_at=snapshot.fetched_at)


@router.get("/convert", response_model=ConversionResponse)
def convert(
    amount: Decimal,
    from_currency: str = Query(..., pattern="^[A-Z]{3}$"),
    to_currency: str = Query(..., pattern="^[A-Z]{3}$"),
    rate_cache: FxRateCache = Depends(get_rate_cache),
):
    """Convert an amount between two currencies via USD."""
    rates = rate_cache.get_rates().rates
    return ConversionResponse(
        amount=amount,
        from_currency=from_currency,
        to_currency=to_currency,
        converted=convert_currency(amount, from_currency, to_currency, rates),
    )
