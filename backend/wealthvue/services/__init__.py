"""Services layer - business logic and external integrations.

This module is organized into domain-based subpackages:
- extraction/: Asset extraction from text and screenshots
- fx/: Currency conversion and the FX rate cache
- market_data/: Live quotes and price refresh
- portfolio/: Aggregation, history and classification
- repositories/: Data access layer
- shared/: Shared utilities

Common imports for convenience:
    from wealthvue.services import AssetRepository, NotFoundError
"""

from wealthvue.services.repositories import (
    AssetRepository,
    NotFoundError,
    RepositoryError,
)

__all__ = [
    "AssetRepository",
    "NotFoundError",
    "RepositoryError",
]
