"""Live market data.

- YFinanceClient: quotes from Yahoo Finance
- PriceRefreshService: concurrent refresh of ticker-backed assets
"""

from .price_refresh_service import PriceRefreshResult, PriceRefreshService, quote_symbol_for
from .yfinance_client import LiveQuote, YFinanceClient

__all__ = [
    "LiveQuote",
    "PriceRefreshResult",
    "PriceRefreshService",
    "YFinanceClient",
    "quote_symbol_for",
]
