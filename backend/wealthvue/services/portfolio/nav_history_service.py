"""Daily NAV snapshot recording."""

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal

from sqlalchemy.orm import Session

from wealthvue.constants import REFERENCE_CURRENCY
from wealthvue.models import NAVHistoryEntry
from wealthvue.services.portfolio.aggregation import converted_value
from wealthvue.services.portfolio.history import utc_today
from wealthvue.services.portfolio.valuation_types import ValuedAsset
from wealthvue.services.repositories.nav_history_repository import NavHistoryRepository

logger = logging.getLogger(__name__)


class NavHistoryService:
    """Records one USD-denominated NAV snapshot per calendar day."""

    def __init__(self, db: Session) -> None:
        self._repo = NavHistoryRepository(db)

    def list_history(self) -> list[NAVHistoryEntry]:
        return list(self._repo.find_all())

    def record_daily_snapshot(
        self,
        assets: Iterable[ValuedAsset],
        rates: Mapping[str, Decimal],
        display_currency: str,
        today: date | None = None,
    ) -> tuple[NAVHistoryEntry, bool]:
        """Append today's snapshot unless one already exists.

        Returns:
            Tuple of (entry for today, whether it was created)
        """
        day = (today or utc_today()).isoformat()
        existing = self._repo.find_by_date(day)
        if existing is not None:
            return existing, False

        total_nav_usd = sum(
            (converted_value(asset, REFERENCE_CURRENCY, rates) for asset in assets),
            Decimal("0"),
        )
        entry = self._repo.append(
            NAVHistoryEntry(date=day, total_nav=total_nav_usd, display_currency=display_currency)
        )
        logger.info("Recorded NAV snapshot for %s: %s USD", day, total_nav_usd)
        return entry, True

    def reset(self) -> int:
        return self._repo.delete_all()
