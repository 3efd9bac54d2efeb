"""Pydantic schemas for API validation."""

from wealthvue.schemas.asset import (
    Asset,
    AssetCreate,
    AssetDraft,
    AssetUpdate,
    BulkDeleteRequest,
    BulkDeleteResponse,
)
from wealthvue.schemas.common import CamelModel, ErrorResponse, Money
from wealthvue.schemas.dashboard import (
    DashboardRefreshResponse,
    DashboardSummaryResponse,
    GroupTotal,
    HistoryResetResponse,
    NavHistoryEntryResponse,
    PortfolioAnalysisResponse,
)
from wealthvue.schemas.extraction import (
    ConfirmDraftsRequest,
    DraftsResponse,
    ReestimateRequest,
    ScreenshotExtractionRequest,
    TextExtractionRequest,
)
from wealthvue.schemas.fx import ConversionResponse, FxRatesResponse
from wealthvue.schemas.goal import Goal, GoalUpdate
from wealthvue.schemas.market_data import QuoteResponse

__all__ = [
    "Asset",
    "AssetCreate",
    "AssetDraft",
    "AssetUpdate",
    "BulkDeleteRequest",
    "BulkDeleteResponse",
    "CamelModel",
    "ConfirmDraftsRequest",
    "ConversionResponse",
    "DashboardRefreshResponse",
    "DashboardSummaryResponse",
    "DraftsResponse",
    "ErrorResponse",
    "FxRatesResponse",
    "Goal",
    "GoalUpdate",
    "GroupTotal",
    "HistoryResetResponse",
    "Money",
    "NavHistoryEntryResponse",
    "PortfolioAnalysisResponse",
    "QuoteResponse",
    "ReestimateRequest",
    "ScreenshotExtractionRequest",
    "TextExtractionRequest",
]
