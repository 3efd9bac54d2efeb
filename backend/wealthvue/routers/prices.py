"""Prices API router - live quotes."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from wealthvue.dependencies.services import get_quote_client
from wealthvue.schemas.market_data import QuoteResponse
from wealthvue.services.market_data.yfinance_client import YFinanceClient

router = APIRouter(prefix="/api/prices", tags=["prices"])


@router.get("/quote", response_model=QuoteResponse)
def get_quote(
    ticker: str | None = Query(None, max_length=50, description="Yahoo symbol, e.g. AAPL or BTC-USD"),
    client: YFinanceClient = Depends(get_quote_client),
):
    """Latest market price for a ticker."""
    if not ticker or not ticker.strip():
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Ticker is required")

    quote = client.get_quote(ticker.strip().upper())
    if quote is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"No quote found for {ticker}"
        )
    return QuoteResponse(
        symbol=quote.symbol,
        regular_market_price=quote.regular_market_price,
        currency=quote.currency,
    )
