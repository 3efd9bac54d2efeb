"""YFinance client wrapper for live quotes.

yfinance has its own HTTP handling, so this doesn't inherit from HTTPClient,
but follows the same logging and error conventions: failures are logged and
reported as None rather than raised.
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from decimal import Decimal

import yfinance as yf

logger = logging.getLogger(__name__)


@dataclass
class LiveQuote:
    """Latest market price for a ticker."""

    symbol: str
    regular_market_price: Decimal
    currency: str | None
    fetched_at: datetime


class YFinanceClient:
    """Wrapper around yfinance quote lookups.

    Usage:
        client = YFinanceClient()
        quote = client.get_quote("AAPL")
    """

    def get_quote(self, symbol: str) -> LiveQuote | None:
        """Get the current market price for a symbol.

        Args:
            symbol: Yahoo ticker (e.g., "AAPL", "BTC-USD")

        Returns:
            LiveQuote or None if no price is available
        """
        try:
            info = yf.Ticker(symbol).info
        except Exception as e:
            logger.error("Error fetching quote for %s: %s", symbol, e)
            return None

        price = info.get("regularMarketPrice") if info else None
        if price is None:
            logger.warning("No price found for %s", symbol)
            return None

        return LiveQuote(
            symbol=symbol,
            regular_market_price=Decimal(str(price)),
            currency=info.get("currency"),
            fetched_at=datetime.now(UTC),
        )
