"""Live price refresh for ticker-backed assets.

Quotes are fetched concurrently with a bounded thread pool, then applied in a
single batched update. A failed quote leaves its asset untouched.
"""

import logging
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field
from datetime import UTC, datetime

from sqlalchemy.orm import Session

from wealthvue.config import settings
from wealthvue.constants import LIVE_PRICED_TYPES, AssetType, ValueSource
from wealthvue.models import Asset
from wealthvue.services.market_data.yfinance_client import LiveQuote, YFinanceClient
from wealthvue.services.repositories.asset_repository import AssetRepository

logger = logging.getLogger(__name__)


@dataclass
class PriceRefreshResult:
    """Outcome of one refresh pass."""

    checked: int = 0
    updated: int = 0
    unchanged: int = 0
    failed: int = 0
    updated_ids: list[str] = field(default_factory=list)


def needs_live_price(asset: Asset) -> bool:
    return bool(asset.ticker) and AssetType.parse(asset.asset_type) in LIVE_PRICED_TYPES


def quote_symbol_for(asset: Asset) -> str:
    """Yahoo symbol for an asset; bare crypto tickers are quoted against USD."""
    ticker = asset.ticker.strip().upper()
    if AssetType.parse(asset.asset_type) == AssetType.CRYPTO and "-" not in ticker:
        return f"{ticker}-USD"
    return ticker


def apply_quote(asset: Asset, quote: LiveQuote) -> bool:
    """Update an asset from a quote. Returns False when the price is unchanged."""
    price = quote.regular_market_price
    if not price or price == asset.unit_price:
        return False

    currency = quote.currency or asset.unit_price_currency
    asset.unit_price = price
    asset.total_value = price * asset.quantity
    asset.unit_price_currency = currency
    asset.total_value_currency = currency
    asset.value_source = ValueSource.LIVE_PRICE
    asset.last_refreshed = quote.fetched_at or datetime.now(UTC)
    return True


class PriceRefreshService:
    """Refreshes unit prices and totals from live quotes."""

    def __init__(
        self,
        db: Session,
        client: YFinanceClient | None = None,
        max_workers: int | None = None,
    ) -> None:
        self._repo = AssetRepository(db)
        self._client = client or YFinanceClient()
        self._max_workers = max_workers or settings.price_refresh_workers

    def refresh_all(self) -> PriceRefreshResult:
        return self.refresh_assets(self._repo.find_all())

    def refresh_assets(self, assets: Sequence[Asset]) -> PriceRefreshResult:
        """Fetch quotes for eligible assets and persist the changed ones.

        Args:
            assets: Assets to consider; only stock/etf/crypto with a ticker are quoted

        Returns:
            PriceRefreshResult with per-outcome counts
        """
        result = PriceRefreshResult()
        targets = [asset for asset in assets if needs_live_price(asset)]
        if not targets:
            return result

        quotes: dict[str, LiveQuote | None] = {}
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(targets))) as executor:
            futures = {
                executor.submit(self._client.get_quote, quote_symbol_for(asset)): asset
                for asset in targets
            }
            for future in as_completed(futures):
                asset = futures[future]
                try:
                    quotes[asset.id] = future.result()
                except Exception:
                    logger.exception("Auto-refresh failed for %s", asset.ticker)
                    quotes[asset.id] = None

        changed: list[Asset] = []
        for asset in targets:
            result.checked += 1
            quote = quotes.get(asset.id)
            if quote is None:
                result.failed += 1
                continue
            if apply_quote(asset, quote):
                changed.append(asset)
                result.updated += 1
                result.updated_ids.append(asset.id)
            else:
                result.unchanged += 1

        if changed:
            self._repo.save_all(changed)

        logger.info(
            "Price refresh: %d checked, %d updated, %d unchanged, %d failed",
            result.checked,
            result.updated,
            result.unchanged,
            result.failed,
        )
        return result
