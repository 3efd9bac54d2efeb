"""Tests for the dashboard router."""

from datetime import UTC, datetime
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from tests.factories import make_asset, make_history
from wealthvue.dependencies.services import get_extraction_service
from wealthvue.main import app
from wealthvue.services.extraction.extraction_service import PortfolioAnalysis
from wealthvue.services.extraction.types import ExtractionFailureReason, ExtractionResult
from wealthvue.services.market_data.yfinance_client import LiveQuote
from wealthvue.services.portfolio.history import utc_today


def _seed(session_maker, *objects):
    session = session_maker()
    session.add_all(objects)
    session.commit()
    session.close()


class TestDashboardSummary:
    """Test GET /api/dashboard/summary."""

    def test_empty_portfolio(self, client):
        data = client.get("/api/dashboard/summary").json()

        assert data["totalNav"] == 0
        assert data["byType"] == []
        assert data["change"]["change"] == 0
        assert data["change"]["anchorDate"] is None
        assert data["profile"]["archetype"]["title"] == "The Balanced Investor"
        assert data["profile"]["diversification"]["score"] == 8
        assert data["goal"] is None

    def test_stock_and_crypto_summary(self, client, session_maker):
        _seed(
            session_maker,
            make_asset("Index fund", "stock", 7000, source="Vanguard"),
            make_asset("Bitcoin", "crypto", 3000, source="Binance"),
        )

        data = client.get("/api/dashboard/summary", params={"display_currency": "USD"}).json()

        assert data["totalNav"] == 10000
        assert data["holdingsCount"] == 2
        assert [(g["key"], g["percentage"]) for g in data["byType"]] == [("stock", 70), ("crypto", 30)]
        assert [g["key"] for g in data["byAccount"]] == ["Vanguard", "Binance"]
        assert data["profile"]["archetype"]["title"] == "Equity Devotee"
        assert data["profile"]["risk"]["label"] == "High"

    def test_liabilities_and_display_currency(self, client, session_maker):
        _seed(
            session_maker,
            make_asset("Savings", "cash", 5000),
            make_asset("Loan", "other", -2000),
        )

        data = client.get("/api/dashboard/summary", params={"display_currency": "ZAR"}).json()

        assert data["totalNav"] == 60000
        assert data["liabilitiesTotal"] == -40000
        assert data["hasLiabilities"] is True
        assert data["byType"] == [{"key": "cash", "value": 100000, "percentage": 100}]

    def test_change_against_history(self, client, session_maker):
        _seed(
            session_maker,
            make_asset("Savings", "cash", 1200),
            *make_history(("2024-01-01", 1000), ("2024-01-02", 1100)),
        )

        data = client.get("/api/dashboard/summary", params={"period": "1D"}).json()

        assert data["change"]["anchorDate"] == "2024-01-01"
        assert data["change"]["change"] == 200
        assert data["change"]["changePercent"] == 20

    def test_goal_progress(self, client, session_maker):
        _seed(session_maker, make_asset("Savings", "cash", 2500))
        client.put("/api/goal", json={"targetAmount": 100000, "currency": "ZAR"})

        goal = client.get("/api/dashboard/summary").json()["goal"]

        assert goal["navInGoalCurrency"] == 50000
        assert goal["progressPct"] == 50

    def test_rejects_bad_period_and_currency(self, client):
        assert client.get("/api/dashboard/summary", params={"period": "1Y"}).status_code == 422
        assert client.get("/api/dashboard/summary", params={"display_currency": "usd"}).status_code == 422


class TestDashboardRefresh:
    """Test POST /api/dashboard/refresh and history endpoints."""

    def test_refresh_updates_prices_and_records_snapshot(self, client, session_maker, quote_client):
        _seed(
            session_maker,
            make_asset("Bitcoin", "crypto", 50000, ticker="BTC", unit_price=Decimal("50000")),
            make_asset("Euro cash", "cash", 800, currency="EUR"),
        )
        quote_client.get_quote.return_value = LiveQuote(
            symbol="BTC-USD",
            regular_market_price=Decimal("60000"),
            currency="USD",
            fetched_at=datetime.now(UTC),
        )

        data = client.post("/api/dashboard/refresh", params={"display_currency": "EUR"}).json()

        quote_client.get_quote.assert_called_once_with("BTC-USD")
        assert data["prices"]["updated"] == 1
        assert data["snapshotCreated"] is True
        assert data["snapshot"]["date"] == utc_today().isoformat()
        assert data["snapshot"]["totalNav"] == 61000
        assert data["snapshot"]["displayCurrency"] == "EUR"

        again = client.post("/api/dashboard/refresh").json()
        assert again["snapshotCreated"] is False

    def test_history_list_and_reset(self, client, session_maker):
        _seed(session_maker, *make_history(("2024-01-02", 110), ("2024-01-01", 100)))

        history = client.get("/api/dashboard/history").json()
        assert [h["date"] for h in history] == ["2024-01-01", "2024-01-02"]

        assert client.delete("/api/dashboard/history").json() == {"deleted": 2}
        assert client.get("/api/dashboard/history").json() == []


@pytest.fixture
def extraction():
    service = MagicMock()
    app.dependency_overrides[get_extraction_service] = lambda: service
    yield service
    app.dependency_overrides.pop(get_extraction_service, None)


class TestPortfolioAnalysis:
    """Test POST /api/dashboard/analysis."""

    def test_returns_summary_and_advice(self, client, session_maker, extraction):
        _seed(
            session_maker,
            make_asset("Index fund", "stock", 7000),
            make_asset("Bitcoin", "crypto", 3000),
        )
        extraction.analyze_portfolio.return_value = ExtractionResult.success(
            [PortfolioAnalysis(summary="Growth tilted.", advice=["Hold some cash"])]
        )

        response = client.post("/api/dashboard/analysis", params={"display_currency": "EUR"})

        assert response.status_code == 200
        assert response.json() == {
            "displayCurrency": "EUR",
            "summary": "Growth tilted.",
            "advice": ["Hold some cash"],
        }
        aggregate, profile, currency = extraction.analyze_portfolio.call_args.args
        assert aggregate.total_nav == Decimal("6400")
        assert profile.archetype.title == "Equity Devotee"
        assert currency == "EUR"

    def test_quota_exceeded(self, client, session_maker, extraction):
        _seed(session_maker, make_asset("Cash", "cash", 100))
        extraction.analyze_portfolio.return_value = ExtractionResult.failed(
            ExtractionFailureReason.QUOTA_EXCEEDED, "AI quota exceeded", retry_after=12.2
        )

        response = client.post("/api/dashboard/analysis")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "13"

    def test_invalid_response_is_bad_gateway(self, client, session_maker, extraction):
        _seed(session_maker, make_asset("Cash", "cash", 100))
        extraction.analyze_portfolio.return_value = ExtractionResult.failed(
            ExtractionFailureReason.INVALID_RESPONSE, "Model response had no summary"
        )

        assert client.post("/api/dashboard/analysis").status_code == 502

    def test_not_configured_is_unavailable(self, client, session_maker, extraction):
        _seed(session_maker, make_asset("Cash", "cash", 100))
        extraction.analyze_portfolio.return_value = ExtractionResult.failed(
            ExtractionFailureReason.NOT_CONFIGURED, "Asset extraction is not configured"
        )

        assert client.post("/api/dashboard/analysis").status_code == 503

    def test_empty_portfolio_rejected(self, client, extraction):
        response = client.post("/api/dashboard/analysis")

        assert response.status_code == 400
        assert response.json()["detail"] == "No assets to analyze"
        extraction.analyze_portfolio.assert_not_called()
