"""Dashboard API router."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from wealthvue.config import settings
from wealthvue.constants import AssetSort, ChangePeriod
from wealthvue.database import get_db
from wealthvue.dependencies.services import (
    get_extraction_service,
    get_quote_client,
    get_rate_cache,
)
from wealthvue.routers.extraction import FAILURE_RESPONSES, failure_response
from wealthvue.schemas.dashboard import (
    ArchetypeResponse,
    DashboardRefreshResponse,
    DashboardSummaryResponse,
    DiversificationResponse,
    GoalProgressResponse,
    GroupTotal,
    HistoryResetResponse,
    NavHistoryEntryResponse,
    PeriodChange,
    PortfolioAnalysisResponse,
    PortfolioProfileResponse,
    PriceRefreshSummary,
    RiskResponse,
)
from wealthvue.services.extraction.extraction_service import AssetExtractionService
from wealthvue.services.fx.rate_cache import FxRateCache
from wealthvue.services.market_data.yfinance_client import YFinanceClient
from wealthvue.services.portfolio.dashboard_service import DashboardService, DashboardSummary
from wealthvue.services.portfolio.nav_history_service import NavHistoryService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


def _summary_response(summary: DashboardSummary) -> DashboardSummaryResponse:
    aggregate = summary.aggregate
    change = summary.change
    profile = summary.profile
    goal = summary.goal

    return DashboardSummaryResponse(
        display_currency=aggregate.display_currency,
        total_nav=aggregate.total_nav,
        liabilities_total=aggregate.liabilities_total,
        positive_total=aggregate.positive_total,
        holdings_count=aggregate.holdings_count,
        has_liabilities=aggregate.has_liabilities,
        change=PeriodChange(
            period=summary.period,
            change=change.change,
            change_percent=change.change_percent,
            anchor_date=change.anchor.date if change.anchor else None,
            anchor_nav=change.converted_anchor_nav,
        ),
        by_type=[
            GroupTotal(key=g.key, value=g.value, percentage=g.percentage) for g in aggregate.type_groups
        ],
        by_account=[
            GroupTotal(key=g.key, value=g.value, percentage=g.percentage) for g in aggregate.account_groups
        ],
        profile=PortfolioProfileResponse(
            archetype=ArchetypeResponse(
                title=profile.archetype.title, subtitle=profile.archetype.subtitle
            ),
            risk=RiskResponse(
                label=profile.risk.label, value=profile.risk.value, score=profile.risk.score
            ),
            diversification=DiversificationResponse(
                score=profile.diversification.score,
                label=profile.diversification.label,
                hhi=profile.diversification.hhi,
            ),
        ),
        goal=GoalProgressResponse(
            target_amount=goal.target_amount,
            currency=goal.currency,
            nav_in_goal_currency=goal.nav_in_goal_currency,
            progress_pct=goal.progress_pct,
        )
        if goal
        else None,
        rates_fetched_at=summary.rates_fetched_at,
    )


@router.get("/summary", response_model=DashboardSummaryResponse)
def get_dashboard_summary(
    display_currency: str = Query(
        settings.default_display_currency,
        description="Currency for displaying values",
        pattern="^[A-Z]{3}$",
    ),
    period: ChangePeriod = Query(ChangePeriod.ONE_DAY, description="1D, 1W, 1M or All"),
    sort: AssetSort = Query(AssetSort.VALUE_DESC, description="Order of grouped totals"),
    db: Session = Depends(get_db),
    rate_cache: FxRateCache = Depends(get_rate_cache),
):
    """
    Get portfolio dashboard summary.

    Returns:
        - Net asset value including liabilities
        - Change over the selected period
        - Allocation by asset type and by account
        - Investor archetype, risk level and diversification score
        - Progress toward the financial goal, when one is set
    """
    summary = DashboardService(db, rate_cache=rate_cache).build_summary(
        display_currency, period, sort
    )
    return _summary_response(summary)


@router.get("/history", response_model=list[NavHistoryEntryResponse])
async def get_nav_history(db: Session = Depends(get_db)):
    """Daily NAV snapshots, oldest first. Values are in USD."""
    return NavHistoryService(db).list_history()


@router.post("/refresh", response_model=DashboardRefreshResponse)
def refresh_dashboard(
    display_currency: str = Query(settings.default_display_currency, pattern="^[A-Z]{3}$"),
    db: Session = Depends(get_db),
    rate_cache: FxRateCache = Depends(get_rate_cache),
    quote_client: YFinanceClient = Depends(get_quote_client),
):
    """
    Refresh live prices and record today's NAV snapshot.

    Ticker-backed stock, ETF and crypto assets are re-quoted; the daily
    snapshot is only written when today has none yet.
    """
    outcome = DashboardService(db, rate_cache=rate_cache).refresh(
        display_currency, price_client=quote_client
    )
    prices = outcome.prices
    return DashboardRefreshResponse(
        prices=PriceRefreshSummary(
            checked=prices.checked,
            updated=prices.updated,
            unchanged=prices.unchanged,
            failed=prices.failed,
            updated_ids=prices.updated_ids,
        ),
        snapshot=NavHistoryEntryResponse.model_validate(outcome.snapshot),
        snapshot_created=outcome.snapshot_created,
    )


@router.post(
    "/analysis", response_model=PortfolioAnalysisResponse, responses=FAILURE_RESPONSES
)
def analyze_portfolio(
    display_currency: str = Query(settings.default_display_currency, pattern="^[A-Z]{3}$"),
    db: Session = Depends(get_db),
    rate_cache: FxRateCache = Depends(get_rate_cache),
    extraction: AssetExtractionService = Depends(get_extraction_service),
) -> PortfolioAnalysisResponse | JSONResponse:
    """
    AI summary of the current allocation with rebalancing suggestions.

    Failures map like extraction: 429 with Retry-After on quota, 503 when
    no API key is configured, 502 otherwise.
    """
    summary = DashboardService(db, rate_cache=rate_cache).build_summary(display_currency)
    if summary.aggregate.holdings_count == 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No assets to analyze"
        )

    result = extraction.analyze_portfolio(summary.aggregate, summary.profile, display_currency)
    if not result.ok:
        return failure_response(result.failure)

    analysis = result.items[0]
    return PortfolioAnalysisResponse(
        display_currency=display_currency, summary=analysis.summary, advice=analysis.advice
    )


@router.delete("/history", response_model=HistoryResetResponse)
async def reset_nav_history(db: Session = Depends(get_db)):
    """Delete all NAV history."""
    deleted = NavHistoryService(db).reset()
    logger.info("NAV history reset via API")
    return HistoryResetResponse(deleted=deleted)
