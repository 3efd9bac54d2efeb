"""NAV history model - one portfolio value snapshot per calendar day."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from wealthvue.database import Base


class NAVHistoryEntry(Base):
    """Daily NAV snapshot. ``total_nav`` is always in USD."""

    __tablename__ = "nav_history"

    # yyyy-MM-dd, lexicographically sortable
    date: Mapped[str] = mapped_column(String(10), primary_key=True)
    total_nav: Mapped[Decimal] = mapped_column(Numeric(24, 8))
    display_currency: Mapped[str] = mapped_column(String(10), default="USD")
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<NAVHistoryEntry(date={self.date}, total_nav={self.total_nav})>"
