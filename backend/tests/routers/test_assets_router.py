"""Tests for the assets router."""

from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from wealthvue.dependencies.services import get_extraction_service
from wealthvue.main import app
from wealthvue.services.extraction.extraction_service import ValueEstimate
from wealthvue.services.extraction.types import ExtractionFailureReason, ExtractionResult


def _create(client, **fields):
    payload = {"name": "Apple", "assetType": "stock", "quantity": 10, "unitPrice": 150, "totalValue": 1500}
    payload.update(fields)
    response = client.post("/api/assets", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


class TestAssetsCrud:
    """Test asset CRUD endpoints."""

    def test_create_returns_camel_case(self, client):
        data = _create(client)

        assert data["name"] == "Apple"
        assert data["totalValue"] == 1500
        assert data["totalValueCurrency"] == "USD"
        assert data["inputMethod"] == "manual"
        assert data["valueSource"] == "manual"
        assert data["id"]

    def test_create_rejects_bad_currency(self, client):
        response = client.post(
            "/api/assets", json={"name": "X", "totalValue": 1, "totalValueCurrency": "DOLLARS"}
        )
        assert response.status_code == 422

    def test_unknown_type_stored_as_other(self, client):
        assert _create(client, assetType="art")["assetType"] == "other"

    def test_get_and_missing(self, client):
        created = _create(client)

        assert client.get(f"/api/assets/{created['id']}").json()["name"] == "Apple"
        assert client.get("/api/assets/nope").status_code == 404

    def test_list_sorted_by_converted_value(self, client):
        _create(client, name="Rand cash", assetType="cash", totalValue=1000, totalValueCurrency="ZAR")
        _create(client, name="Euro cash", assetType="cash", totalValue=100, totalValueCurrency="EUR")
        _create(client, name="Dollar cash", assetType="cash", totalValue=110)

        by_value = client.get("/api/assets").json()
        by_name = client.get("/api/assets", params={"sort_by": "name_asc"}).json()

        assert [a["name"] for a in by_value] == ["Euro cash", "Dollar cash", "Rand cash"]
        assert [a["name"] for a in by_name] == ["Dollar cash", "Euro cash", "Rand cash"]

    def test_update_quantity_recomputes_total(self, client):
        created = _create(client)

        response = client.put(f"/api/assets/{created['id']}", json={"quantity": 12})

        assert response.status_code == 200
        assert response.json()["totalValue"] == 1800

    def test_update_with_explicit_total_keeps_it(self, client):
        created = _create(client)

        data = client.put(
            f"/api/assets/{created['id']}", json={"unitPrice": 200, "totalValue": 1234}
        ).json()

        assert data["unitPrice"] == 200
        assert data["totalValue"] == 1234

    def test_update_missing_returns_404(self, client):
        assert client.put("/api/assets/nope", json={"name": "X"}).status_code == 404

    def test_delete(self, client):
        created = _create(client)

        assert client.delete(f"/api/assets/{created['id']}").status_code == 204
        assert client.delete(f"/api/assets/{created['id']}").status_code == 404

    def test_bulk_delete(self, client):
        ids = [_create(client, name=f"Asset {i}")["id"] for i in range(3)]

        response = client.post("/api/assets/bulk-delete", json={"assetIds": ids[:2] + ["unknown"]})

        assert response.json() == {"deleted": 2}
        assert len(client.get("/api/assets").json()) == 1


class TestReestimate:
    """Test POST /api/assets/{id}/reestimate."""

    @pytest.fixture
    def extraction(self):
        service = MagicMock()
        app.dependency_overrides[get_extraction_service] = lambda: service
        yield service
        app.dependency_overrides.pop(get_extraction_service, None)

    def test_applies_estimate(self, client, extraction):
        created = _create(client, name="Golf", assetType="vehicle", quantity=1, unitPrice=20000, totalValue=20000)
        extraction.reestimate_value.return_value = ExtractionResult.success(
            [
                ValueEstimate(
                    unit_price=Decimal("18500"),
                    unit_price_currency="EUR",
                    total_value=Decimal("18500"),
                    ai_confidence="medium",
                    ai_rationale="Comparable listings",
                )
            ]
        )

        data = client.post(f"/api/assets/{created['id']}/reestimate", json={"preferredCurrency": "EUR"}).json()

        assert data["totalValue"] == 18500
        assert data["totalValueCurrency"] == "EUR"
        assert data["valueSource"] == "ai_estimate"
        assert data["aiConfidence"] == "medium"

    def test_quota_failure_returns_429(self, client, extraction):
        created = _create(client)
        extraction.reestimate_value.return_value = ExtractionResult.failed(
            ExtractionFailureReason.QUOTA_EXCEEDED, "AI quota exceeded", retry_after=12.5
        )

        response = client.post(f"/api/assets/{created['id']}/reestimate")

        assert response.status_code == 429
        assert response.headers["Retry-After"] == "13"
        assert response.json()["error"] == "quota_exceeded"
