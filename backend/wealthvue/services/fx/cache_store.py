"""FX cache storage contract and an in-memory implementation."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from decimal import Decimal

from wealthvue.config import settings


def as_utc(moment: datetime) -> datetime:
    """Treat naive timestamps (as returned by SQLite) as UTC."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


@dataclass
class FxSnapshot:
    """A USD-relative rate table and when it was fetched."""

    rates: dict[str, Decimal]
    fetched_at: datetime = field(default_factory=lambda: datetime.now(UTC))


class FxCacheStore(ABC):
    """Storage for the most recent FX snapshot."""

    def __init__(self, ttl_seconds: int | None = None) -> None:
        self.ttl = timedelta(
            seconds=ttl_seconds if ttl_seconds is not None else settings.fx_cache_ttl_seconds
        )

    @abstractmethod
    def get(self) -> FxSnapshot | None:
        """Return the stored snapshot, fresh or stale, or None."""
        ...

    @abstractmethod
    def set(self, snapshot: FxSnapshot) -> None:
        """Replace the stored snapshot."""
        ...

    def is_stale(self, snapshot: FxSnapshot, now: datetime | None = None) -> bool:
        """Whether a snapshot is older than the freshness window."""
        now = as_utc(now or datetime.now(UTC))
        return as_utc(snapshot.fetched_at) <= now - self.ttl


class InMemoryFxCacheStore(FxCacheStore):
    """Process-local FX store, used in tests and for ephemeral runs."""

    def __init__(self, snapshot: FxSnapshot | None = None, ttl_seconds: int | None = None) -> None:
        super().__init__(ttl_seconds)
        self._snapshot = snapshot

    def get(self) -> FxSnapshot | None:
        return self._snapshot

    def set(self, snapshot: FxSnapshot) -> None:
        self._snapshot = snapshot
