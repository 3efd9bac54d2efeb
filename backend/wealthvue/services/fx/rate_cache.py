"""Exchange rate cache with a one-hour freshness window.

Portfolio math must never stop for lack of FX data: when the upstream
fetch fails, the last stored snapshot is served (even if stale), and with
nothing stored every currency is treated as equal to USD.
"""

import logging
from collections.abc import Callable
from datetime import UTC, datetime
from decimal import Decimal

from wealthvue.constants import REFERENCE_CURRENCY
from wealthvue.services.fx.cache_store import FxCacheStore, FxSnapshot
from wealthvue.services.fx.frankfurter_client import FrankfurterClient
from wealthvue.services.shared.http_client import HTTPClientError

logger = logging.getLogger(__name__)


def default_snapshot(now: datetime | None = None) -> FxSnapshot:
    """Degenerate rate table used before any successful fetch."""
    return FxSnapshot(rates={REFERENCE_CURRENCY: Decimal("1")}, fetched_at=now or datetime.now(UTC))


class FxRateCache:
    """Serves FX snapshots from an injected store, refreshing when stale."""

    def __init__(
        self,
        store: FxCacheStore,
        fetch_rates: Callable[[], dict[str, Decimal]] | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._store = store
        self._fetch_rates = fetch_rates or self._fetch_from_frankfurter
        self._clock = clock or (lambda: datetime.now(UTC))

    @staticmethod
    def _fetch_from_frankfurter() -> dict[str, Decimal]:
        with FrankfurterClient() as client:
            return client.fetch_latest_rates()

    def get_rates(self) -> FxSnapshot:
        """Return a usable rate snapshot.

        Returns:
            The cached snapshot if fresh, else a freshly fetched one, else the
            stale cached snapshot, else ``{"USD": 1}``.
        """
        now = self._clock()
        cached = self._store.get()
        if cached is not None and not self._store.is_stale(cached, now):
            logger.debug("FX cache hit (fetched at %s)", cached.fetched_at)
            return cached

        try:
            rates = self._fetch_rates()
        except HTTPClientError as e:
            logger.warning("FX rate fetch failed, using %s: %s", _fallback_name(cached), e)
            return cached if cached is not None else default_snapshot(now)

        rates[REFERENCE_CURRENCY] = Decimal("1")
        snapshot = FxSnapshot(rates=rates, fetched_at=now)
        self._store.set(snapshot)
        return snapshot


def _fallback_name(cached: FxSnapshot | None) -> str:
    return "stale cache" if cached is not None else "USD-only default rates"
