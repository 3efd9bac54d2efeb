"""Asset data access layer."""

import logging
from collections.abc import Iterable, Sequence
from datetime import UTC, datetime

from sqlalchemy import func
from sqlalchemy.orm import Session

from wealthvue.models import Asset
from wealthvue.services.repositories.exceptions import NotFoundError

logger = logging.getLogger(__name__)


class AssetRepository:
    """Centralized asset data access.

    Naming conventions:
    - find_* : Query that may return None or empty list
    - get_* : Query that raises NotFoundError if missing
    """

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_all(self) -> Sequence[Asset]:
        """All assets in insertion order."""
        return self._db.query(Asset).order_by(Asset.created_at, Asset.id).all()

    def find_by_id(self, asset_id: str) -> Asset | None:
        return self._db.get(Asset, asset_id)

    def get_by_id(self, asset_id: str) -> Asset:
        asset = self.find_by_id(asset_id)
        if asset is None:
            raise NotFoundError("Asset", asset_id)
        return asset

    def find_by_name_and_type(self, name: str, asset_type: str) -> Asset | None:
        """Find an asset by case-insensitive name within one type."""
        return (
            self._db.query(Asset)
            .filter(func.lower(Asset.name) == name.lower(), Asset.asset_type == asset_type)
            .first()
        )

    def create(self, asset: Asset) -> Asset:
        self._db.add(asset)
        self._db.commit()
        self._db.refresh(asset)
        return asset

    def update(self, asset_id: str, changes: dict) -> Asset:
        """Apply field changes to an existing asset."""
        asset = self.get_by_id(asset_id)
        for field_name, value in changes.items():
            setattr(asset, field_name, value)
        asset.updated_at = datetime.now(UTC)
        self._db.commit()
        self._db.refresh(asset)
        return asset

    def delete(self, asset_id: str) -> None:
        asset = self.get_by_id(asset_id)
        self._db.delete(asset)
        self._db.commit()

    def delete_many(self, asset_ids: Iterable[str]) -> int:
        """Delete assets by id, ignoring unknown ids. Returns the number deleted."""
        ids = list(set(asset_ids))
        if not ids:
            return 0
        deleted = (
            self._db.query(Asset).filter(Asset.id.in_(ids)).delete(synchronize_session=False)
        )
        self._db.commit()
        logger.info("Bulk deleted %d of %d requested assets", deleted, len(ids))
        return deleted

    def save_all(self, assets: Iterable[Asset]) -> None:
        """Persist a batch of new or modified assets in one commit."""
        self._db.add_all(list(assets))
        self._db.commit()
