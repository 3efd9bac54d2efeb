"""Frankfurter exchange rate API client."""

import logging
from decimal import Decimal

from wealthvue.config import settings
from wealthvue.constants import REFERENCE_CURRENCY
from wealthvue.services.fx.converter import normalize_rates
from wealthvue.services.shared.http_client import HTTPClient, HTTPClientError

logger = logging.getLogger(__name__)


class FxSourceError(HTTPClientError):
    """Raised when the rate source returns an unusable payload."""


class FrankfurterClient(HTTPClient):
    """Fetches the latest USD-based exchange rates from frankfurter.app.

    Rate lookups fall back to cached or default rates, so failures are
    reported after a single attempt instead of being retried.
    """

    max_attempts = 1

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        super().__init__(
            base_url=base_url or settings.fx_api_url,
            timeout=timeout if timeout is not None else settings.fx_fetch_timeout_seconds,
        )

    def fetch_latest_rates(self) -> dict[str, Decimal]:
        """Fetch units of each currency per 1 USD.

        Returns:
            Rate mapping including ``USD: 1``

        Raises:
            HTTPClientError: On network or HTTP failure
            FxSourceError: When the payload has no rates table
        """
        payload = self.get_json("/latest", params={"from": REFERENCE_CURRENCY})

        raw_rates = payload.get("rates") if isinstance(payload, dict) else None
        if not isinstance(raw_rates, dict):
            raise FxSourceError("Rate source response has no rates table")

        try:
            rates = normalize_rates(raw_rates)
        except (ArithmeticError, ValueError, TypeError) as e:
            raise FxSourceError(f"Rate source returned non-numeric rates: {e}") from e

        logger.info("Fetched %d exchange rates from %s", len(rates), self.base_url)
        return rates
