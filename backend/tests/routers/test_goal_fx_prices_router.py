"""Tests for the goal, FX and prices routers."""

from datetime import UTC, datetime
from decimal import Decimal

from wealthvue.services.market_data.yfinance_client import LiveQuote


class TestGoalRouter:
    """Test /api/goal."""

    def test_goal_lifecycle(self, client):
        assert client.get("/api/goal").json() is None

        saved = client.put("/api/goal", json={"targetAmount": 250000, "currency": "gbp"}).json()
        assert saved["targetAmount"] == 250000
        assert saved["currency"] == "GBP"

        assert client.delete("/api/goal").status_code == 204
        assert client.delete("/api/goal").status_code == 404

    def test_target_must_be_positive(self, client):
        assert client.put("/api/goal", json={"targetAmount": 0}).status_code == 422


class TestFxRouter:
    """Test /api/fx."""

    def test_rates(self, client):
        data = client.get("/api/fx/rates").json()

        assert data["base"] == "USD"
        assert data["rates"]["USD"] == 1
        assert data["rates"]["ZAR"] == 20

    def test_convert(self, client):
        data = client.get(
            "/api/fx/convert", params={"amount": "80", "from_currency": "EUR", "to_currency": "GBP"}
        ).json()

        assert data["converted"] == 50

    def test_stale_cache_survives_fetch_failure(self, client, fx_store):
        fx_store.get().fetched_at = datetime(2000, 1, 1, tzinfo=UTC)

        data = client.get("/api/fx/rates").json()

        assert data["rates"]["EUR"] == 0.8


class TestPricesRouter:
    """Test /api/prices/quote."""

    def test_quote(self, client, quote_client):
        quote_client.get_quote.return_value = LiveQuote(
            symbol="AAPL",
            regular_market_price=Decimal("189.5"),
            currency="USD",
            fetched_at=datetime.now(UTC),
        )

        data = client.get("/api/prices/quote", params={"ticker": "aapl"}).json()

        assert data == {"symbol": "AAPL", "regularMarketPrice": 189.5, "currency": "USD"}
        quote_client.get_quote.assert_called_once_with("AAPL")

    def test_missing_ticker(self, client):
        assert client.get("/api/prices/quote").status_code == 400

    def test_no_quote(self, client):
        assert client.get("/api/prices/quote", params={"ticker": "NOPE"}).status_code == 404


class TestRoot:
    """Test root and health endpoints."""

    def test_health(self, client):
        assert client.get("/health").json() == {"status": "healthy"}
        assert client.get("/").json()["status"] == "running"
