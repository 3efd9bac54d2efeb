"""Dashboard summary and refresh.

Composes the analytics core: FX rates from the cache, aggregation in the
display currency, period change against NAV history, classification of the
positive allocation, and progress toward the financial goal.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from wealthvue.constants import AssetSort, ChangePeriod
from wealthvue.models import NAVHistoryEntry
from wealthvue.services.fx.cache_store import FxSnapshot
from wealthvue.services.fx.converter import convert_currency
from wealthvue.services.fx.rate_cache import FxRateCache
from wealthvue.services.market_data.price_refresh_service import (
    PriceRefreshResult,
    PriceRefreshService,
)
from wealthvue.services.market_data.yfinance_client import YFinanceClient
from wealthvue.services.portfolio.aggregation import aggregate_portfolio
from wealthvue.services.portfolio.classification import classify_portfolio
from wealthvue.services.portfolio.history import calculate_change
from wealthvue.services.portfolio.nav_history_service import NavHistoryService
from wealthvue.services.portfolio.valuation_types import (
    ChangeResult,
    PortfolioAggregate,
    PortfolioProfile,
)
from wealthvue.services.repositories.asset_repository import AssetRepository
from wealthvue.services.repositories.fx_cache_repository import FxCacheRepository
from wealthvue.services.repositories.goal_repository import GoalRepository


@dataclass
class GoalProgress:
    target_amount: Decimal
    currency: str
    nav_in_goal_currency: Decimal
    progress_pct: Decimal


@dataclass
class DashboardSummary:
    aggregate: PortfolioAggregate
    period: str
    change: ChangeResult
    profile: PortfolioProfile
    goal: GoalProgress | None
    rates_fetched_at: datetime


@dataclass
class RefreshOutcome:
    prices: PriceRefreshResult
    snapshot: NAVHistoryEntry
    snapshot_created: bool


class DashboardService:
    """Builds the dashboard view over the current asset set."""

    def __init__(self, db: Session, rate_cache: FxRateCache | None = None) -> None:
        self._db = db
        self._assets = AssetRepository(db)
        self._history = NavHistoryService(db)
        self._goals = GoalRepository(db)
        self._rate_cache = rate_cache or FxRateCache(FxCacheRepository(db))

    def get_rates(self) -> FxSnapshot:
        return self._rate_cache.get_rates()

    def build_summary(
        self,
        display_currency: str,
        period: str = ChangePeriod.ONE_DAY,
        sort: str = AssetSort.VALUE_DESC,
        today: date | None = None,
    ) -> DashboardSummary:
        snapshot = self.get_rates()
        rates = snapshot.rates

        aggregate = aggregate_portfolio(self._assets.find_all(), display_currency, rates, sort)
        change = calculate_change(
            self._history.list_history(), period, aggregate.total_nav, display_currency, rates, today
        )

        return DashboardSummary(
            aggregate=aggregate,
            period=period,
            change=change,
            profile=classify_portfolio(aggregate.type_percentages),
            goal=self._goal_progress(aggregate.total_nav, display_currency, rates),
            rates_fetched_at=snapshot.fetched_at,
        )

    def _goal_progress(
        self, total_nav: Decimal, display_currency: str, rates: Mapping[str, Decimal]
    ) -> GoalProgress | None:
        goal = self._goals.find()
        if goal is None:
            return None

        nav = convert_currency(total_nav, display_currency, goal.currency, rates)
        progress = nav / goal.target_amount * 100 if goal.target_amount > 0 else Decimal("0")
        return GoalProgress(
            target_amount=goal.target_amount,
            currency=goal.currency,
            nav_in_goal_currency=nav,
            progress_pct=max(Decimal("0"), progress),
        )

    def refresh(
        self,
        display_currency: str,
        price_client: YFinanceClient | None = None,
        today: date | None = None,
    ) -> RefreshOutcome:
        """Refresh live prices, then record today's NAV snapshot if missing."""
        rates = self.get_rates().rates
        prices = PriceRefreshService(self._db, client=price_client).refresh_all()
        entry, created = self._history.record_daily_snapshot(
            self._assets.find_all(), rates, display_currency, today
        )
        return RefreshOutcome(prices=prices, snapshot=entry, snapshot_created=created)

    def reset_history(self) -> int:
        return self._history.reset()
