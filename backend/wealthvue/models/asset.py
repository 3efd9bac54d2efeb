"""Asset model - a single holding or liability."""

from datetime import datetime
from decimal import Decimal
from uuid import uuid4

from sqlalchemy import DateTime, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from wealthvue.constants import AssetType, InputMethod, ValueSource
from wealthvue.database import Base


class Asset(Base):
    """Asset model representing stocks, crypto, vehicles, property, cash and debts.

    ``total_value`` and ``total_value_currency`` are the authoritative amount;
    ``quantity * unit_price`` is kept for display and editing only. A negative
    ``total_value`` is a liability.
    """

    __tablename__ = "assets"
    __table_args__ = (
        Index("idx_assets_type", "asset_type"),
        Index("idx_assets_ticker", "ticker"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    name: Mapped[str] = mapped_column(String(200))
    description: Mapped[str] = mapped_column(Text, default="")
    asset_type: Mapped[str] = mapped_column(String(20), default=AssetType.OTHER)
    ticker: Mapped[str | None] = mapped_column(String(50))

    quantity: Mapped[Decimal] = mapped_column(Numeric(24, 8), default=Decimal("1"))
    unit_price: Mapped[Decimal] = mapped_column(Numeric(24, 8), default=Decimal("0"))
    unit_price_currency: Mapped[str] = mapped_column(String(10), default="USD")
    total_value: Mapped[Decimal] = mapped_column(Numeric(24, 8), default=Decimal("0"))
    total_value_currency: Mapped[str] = mapped_column(String(10), default="USD")

    value_source: Mapped[str] = mapped_column(String(20), default=ValueSource.MANUAL)
    source: Mapped[str | None] = mapped_column(String(200))  # Custodian / account label
    ai_confidence: Mapped[str | None] = mapped_column(String(10))
    ai_rationale: Mapped[str | None] = mapped_column(Text)
    input_method: Mapped[str] = mapped_column(String(20), default=InputMethod.MANUAL)

    last_refreshed: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    @property
    def is_liability(self) -> bool:
        return self.total_value < 0

    def __repr__(self) -> str:
        return f"<Asset(id={self.id}, name='{self.name}', type='{self.asset_type}')>"
