"""SQLAlchemy ORM models."""

from wealthvue.models.asset import Asset
from wealthvue.models.financial_goal import FinancialGoal
from wealthvue.models.fx_rate_snapshot import FxRateSnapshot
from wealthvue.models.nav_history import NAVHistoryEntry

__all__ = [
    "Asset",
    "FinancialGoal",
    "FxRateSnapshot",
    "NAVHistoryEntry",
]
