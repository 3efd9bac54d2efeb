"""Currency conversion and exchange rate caching.

Usage:
    from wealthvue.services.fx import FxRateCache, convert_currency

    snapshot = FxRateCache(store).get_rates()
    value = convert_currency(amount, "EUR", "USD", snapshot.rates)
"""

from .cache_store import FxCacheStore, FxSnapshot, InMemoryFxCacheStore
from .converter import convert_currency, normalize_rates
from .frankfurter_client import FrankfurterClient, FxSourceError
from .rate_cache import FxRateCache, default_snapshot

__all__ = [
    "FrankfurterClient",
    "FxCacheStore",
    "FxRateCache",
    "FxSnapshot",
    "FxSourceError",
    "InMemoryFxCacheStore",
    "convert_currency",
    "default_snapshot",
    "normalize_rates",
]
