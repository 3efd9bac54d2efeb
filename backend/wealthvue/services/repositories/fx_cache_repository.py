"""Database-backed FX cache store."""

from decimal import Decimal

from sqlalchemy.orm import Session

from wealthvue.models import FxRateSnapshot
from wealthvue.services.fx.cache_store import FxCacheStore, FxSnapshot

FX_CACHE_KEY = "latest"


class FxCacheRepository(FxCacheStore):
    """Keeps the latest FX snapshot in a single keyed row."""

    def __init__(self, db: Session, ttl_seconds: int | None = None) -> None:
        super().__init__(ttl_seconds)
        self._db = db

    def get(self) -> FxSnapshot | None:
        row = self._db.get(FxRateSnapshot, FX_CACHE_KEY)
        if row is None:
            return None
        return FxSnapshot(
            rates={code: Decimal(rate) for code, rate in row.rates.items()},
            fetched_at=row.fetched_at,
        )

    def set(self, snapshot: FxSnapshot) -> None:
        rates = {code: str(rate) for code, rate in snapshot.rates.items()}
        row = self._db.get(FxRateSnapshot, FX_CACHE_KEY)
        if row is None:
            self._db.add(FxRateSnapshot(key=FX_CACHE_KEY, rates=rates, fetched_at=snapshot.fetched_at))
        else:
            row.rates = rates
            row.fetched_at = snapshot.fetched_at
        self._db.commit()
