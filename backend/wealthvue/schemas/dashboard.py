"""Pydantic schemas for dashboard endpoints."""

from datetime import datetime

from pydantic import ConfigDict, Field

from wealthvue.schemas.common import CamelModel, Money


class GroupTotal(CamelModel):
    """One bucket of a grouped breakdown."""

    key: str
    value: Money
    percentage: Money = Field(..., description="Share of positive holdings, 0-100")


class PeriodChange(CamelModel):
    period: str
    change: Money
    change_percent: Money
    anchor_date: str | None = None
    anchor_nav: Money | None = Field(None, description="Anchor NAV in display currency")


class ArchetypeResponse(CamelModel):
    title: str
    subtitle: str


class RiskResponse(CamelModel):
    label: str
    value: int = Field(..., ge=1, le=3)
    score: Money


class DiversificationResponse(CamelModel):
    score: int = Field(..., ge=0, le=100)
    label: str
    hhi: Money


class PortfolioProfileResponse(CamelModel):
    archetype: ArchetypeResponse
    risk: RiskResponse
    diversification: DiversificationResponse


class GoalProgressResponse(CamelModel):
    target_amount: Money
    currency: str
    nav_in_goal_currency: Money
    progress_pct: Money


class DashboardSummaryResponse(CamelModel):
    """Everything the dashboard shows for one display currency."""

    display_currency: str
    total_nav: Money
    liabilities_total: Money
    positive_total: Money
    holdings_count: int
    has_liabilities: bool
    change: PeriodChange
    by_type: list[GroupTotal]
    by_account: list[GroupTotal]
    profile: PortfolioProfileResponse
    goal: GoalProgressResponse | None = None
    rates_fetched_at: datetime


class NavHistoryEntryResponse(CamelModel):
    """Daily NAV snapshot; total_nav is in USD."""

    model_config = ConfigDict(from_attributes=True)

    date: str
    total_nav: Money
    display_currency: str


class PriceRefreshSummary(CamelModel):
    checked: int
    updated: int
    unchanged: int
    failed: int
    updated_ids: list[str] = Field(default_factory=list)


class DashboardRefreshResponse(CamelModel):
    prices: PriceRefreshSummary
    snapshot: NavHistoryEntryResponse
    snapshot_created: bool


class HistoryResetResponse(CamelModel):
    deleted: int


class PortfolioAnalysisResponse(CamelModel):
    """AI commentary on the allocation. Not financial advice."""

    display_currency: str
    summary: str
    advice: list[str] = Field(default_factory=list)
