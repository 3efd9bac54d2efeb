"""NAV history data access layer."""

import logging
from collections.abc import Sequence

from sqlalchemy.orm import Session

from wealthvue.models import NAVHistoryEntry

logger = logging.getLogger(__name__)


class NavHistoryRepository:
    """Append-only access to daily NAV snapshots."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_all(self) -> Sequence[NAVHistoryEntry]:
        """All entries, oldest first."""
        return self._db.query(NAVHistoryEntry).order_by(NAVHistoryEntry.date).all()

    def find_by_date(self, day: str) -> NAVHistoryEntry | None:
        return self._db.get(NAVHistoryEntry, day)

    def append(self, entry: NAVHistoryEntry) -> NAVHistoryEntry:
        self._db.add(entry)
        self._db.commit()
        return entry

    def delete_all(self) -> int:
        """Full history reset. Returns the number of entries removed."""
        deleted = self._db.query(NAVHistoryEntry).delete(synchronize_session=False)
        self._db.commit()
        logger.info("Reset NAV history (%d entries)", deleted)
        return deleted
