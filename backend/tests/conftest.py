"""Shared test fixtures: in-memory database, FX rates and the API client."""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import wealthvue.models  # noqa: F401
from tests.factories import TEST_RATES
from wealthvue.database import Base, get_db
from wealthvue.dependencies.services import get_quote_client, get_rate_cache
from wealthvue.main import app
from wealthvue.services.fx.cache_store import FxSnapshot, InMemoryFxCacheStore
from wealthvue.services.fx.rate_cache import FxRateCache
from wealthvue.services.shared.http_client import HTTPClientError


@pytest.fixture
def engine():
    """In-memory SQLite engine shared across threads via StaticPool."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    Base.metadata.drop_all(engine)
    engine.dispose()


@pytest.fixture
def session_maker(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture
def db(session_maker):
    """Database session for service and repository tests."""
    session = session_maker()
    yield session
    session.close()


@pytest.fixture
def fx_store():
    """FX store pre-filled with fresh test rates."""
    return InMemoryFxCacheStore(FxSnapshot(rates=dict(TEST_RATES), fetched_at=datetime.now(UTC)))


def _offline_fetch():
    raise HTTPClientError("network disabled in tests")


@pytest.fixture
def quote_client():
    """Stand-in for YFinanceClient; tests set get_quote.side_effect/return_value."""
    client = MagicMock()
    client.get_quote.return_value = None
    return client


@pytest.fixture
def client(session_maker, fx_store, quote_client):
    """API client over the in-memory database, with no outbound network."""

    def override_get_db():
        session = session_maker()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_rate_cache] = lambda: FxRateCache(
        fx_store, fetch_rates=_offline_fetch
    )
    app.dependency_overrides[get_quote_client] = lambda: quote_client

    # Not used as a context manager, so the startup hook does not touch the real database
    yield TestClient(app)

    app.dependency_overrides.clear()
