"""Financial goal model - the user's net-worth target."""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from wealthvue.database import Base


class FinancialGoal(Base):
    """Single net-worth target, stored under a fixed key."""

    __tablename__ = "financial_goals"

    key: Mapped[str] = mapped_column(String(50), primary_key=True)
    target_amount: Mapped[Decimal] = mapped_column(Numeric(24, 2))
    currency: Mapped[str] = mapped_column(String(10))
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    def __repr__(self) -> str:
        return f"<FinancialGoal(target_amount={self.target_amount}, currency='{self.currency}')>"
