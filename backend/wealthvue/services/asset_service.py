"""Asset management - manual entry, edits, deletion and re-estimates."""

import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from decimal import Decimal

from sqlalchemy.orm import Session

from wealthvue.constants import AssetSort, InputMethod, ValueSource
from wealthvue.models import Asset
from wealthvue.schemas.asset import AssetCreate, AssetUpdate
from wealthvue.services.extraction.extraction_service import ValueEstimate
from wealthvue.services.portfolio.aggregation import sort_assets
from wealthvue.services.repositories.asset_repository import AssetRepository

logger = logging.getLogger(__name__)


class AssetService:
    """Business rules around asset CRUD."""

    def __init__(self, db: Session) -> None:
        self._repo = AssetRepository(db)

    def list_assets(
        self,
        display_currency: str,
        rates: Mapping[str, Decimal],
        sort_by: str = AssetSort.VALUE_DESC,
    ) -> list[Asset]:
        return sort_assets(list(self._repo.find_all()), display_currency, rates, sort_by)

    def get_asset(self, asset_id: str) -> Asset:
        return self._repo.get_by_id(asset_id)

    def create_asset(self, data: AssetCreate) -> Asset:
        asset = Asset(
            **data.model_dump(),
            input_method=InputMethod.MANUAL,
            last_refreshed=datetime.now(UTC),
        )
        asset = self._repo.create(asset)
        logger.info("Created asset %s (%s)", asset.id, asset.name)
        return asset

    def update_asset(self, asset_id: str, data: AssetUpdate) -> Asset:
        """Apply a partial update.

        Changing quantity or unit price recomputes the total value unless the
        update also sets the total explicitly.
        """
        asset = self._repo.get_by_id(asset_id)
        changes = data.model_dump(exclude_unset=True)

        if ("quantity" in changes or "unit_price" in changes) and "total_value" not in changes:
            quantity = changes.get("quantity", asset.quantity)
            unit_price = changes.get("unit_price", asset.unit_price)
            if quantity is not None and unit_price is not None:
                changes["total_value"] = quantity * unit_price

        return self._repo.update(asset_id, changes)

    def delete_asset(self, asset_id: str) -> None:
        self._repo.delete(asset_id)
        logger.info("Deleted asset %s", asset_id)

    def delete_assets(self, asset_ids: Iterable[str]) -> int:
        return self._repo.delete_many(asset_ids)

    def apply_estimate(self, asset_id: str, estimate: ValueEstimate) -> Asset:
        """Store a model re-estimate on an asset."""
        return self._repo.update(
            asset_id,
            {
                "unit_price": estimate.unit_price,
                "unit_price_currency": estimate.unit_price_currency,
                "total_value": estimate.total_value,
                "total_value_currency": estimate.unit_price_currency,
                "value_source": ValueSource.AI_ESTIMATE,
                "ai_confidence": estimate.ai_confidence,
                "ai_rationale": estimate.ai_rationale,
                "last_refreshed": datetime.now(UTC),
            },
        )
