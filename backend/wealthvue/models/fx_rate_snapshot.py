"""FX rate snapshot model - the persisted exchange rate cache."""

from datetime import datetime

from sqlalchemy import JSON, DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from wealthvue.database import Base


class FxRateSnapshot(Base):
    """Cached USD-relative exchange rates, stored as a single keyed row.

    Rates are kept as strings so Decimal precision survives the JSON column.
    """

    __tablename__ = "fx_rate_snapshots"

    key: Mapped[str] = mapped_column(String(50), primary_key=True)
    rates: Mapped[dict[str, str]] = mapped_column(JSON)
    fetched_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))

    def __repr__(self) -> str:
        return f"<FxRateSnapshot(key={self.key}, currencies={len(self.rates or {})}, fetched_at={self.fetched_at})>"
