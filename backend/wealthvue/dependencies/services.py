"""FastAPI dependencies for services that talk to external providers.

Routers take these through ``Depends`` so tests can swap in fakes via
``app.dependency_overrides``.
"""

from fastapi import Depends
from sqlalchemy.orm import Session

from wealthvue.database import get_db
from wealthvue.services.extraction.extraction_service import AssetExtractionService
from wealthvue.services.fx.rate_cache import FxRateCache
from wealthvue.services.market_data.yfinance_client import YFinanceClient
from wealthvue.services.repositories.fx_cache_repository import FxCacheRepository


def get_rate_cache(db: Session = Depends(get_db)) -> FxRateCache:
    return FxRateCache(FxCacheRepository(db))


def get_quote_client() -> YFinanceClient:
    return YFinanceClient()


def get_extraction_service() -> AssetExtractionService:
    return AssetExtractionService()
