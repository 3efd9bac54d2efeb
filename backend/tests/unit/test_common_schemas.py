"""Tests for common schema types and the asset/goal request schemas."""

from datetime import UTC, datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError

from wealthvue.schemas.asset import AssetCreate, BulkDeleteRequest
from wealthvue.schemas.common import ErrorResponse
from wealthvue.schemas.goal import GoalUpdate


class TestMoney:
    """Decimals stay Decimal in Python and become numbers in JSON."""

    def test_python_dump_keeps_decimal(self):
        asset = AssetCreate(name="Gold", total_value="1234.50")
        assert asset.model_dump()["total_value"] == Decimal("1234.50")

    def test_json_dump_emits_number(self):
        asset = AssetCreate(name="Gold", total_value="1234.50")
        data = asset.model_dump(mode="json", by_alias=True)
        assert data["totalValue"] == 1234.5
        assert isinstance(data["totalValue"], float)


class TestCamelModel:
    def test_accepts_camel_case_input(self):
        request = BulkDeleteRequest(assetIds=["a", "b"])
        assert request.asset_ids == ["a", "b"]

    def test_accepts_snake_case_input(self):
        request = BulkDeleteRequest(asset_ids=["a"])
        assert request.asset_ids == ["a"]

    def test_empty_id_list_rejected(self):
        with pytest.raises(ValidationError):
            BulkDeleteRequest(assetIds=[])


class TestAssetCreate:
    def test_unknown_asset_type_folds_to_other(self):
        asset = AssetCreate(name="Painting", assetType="artwork")
        assert asset.asset_type == "other"

    def test_currency_is_uppercased(self):
        asset = AssetCreate(name="Cash", totalValueCurrency="zar", unitPriceCurrency=" eur ")
        assert asset.total_value_currency == "ZAR"
        assert asset.unit_price_currency == "EUR"

    def test_negative_total_allowed_for_debt(self):
        asset = AssetCreate(name="Mortgage", totalValue="-150000")
        assert asset.total_value == Decimal("-150000")

    def test_bad_currency_code_rejected(self):
        with pytest.raises(ValidationError):
            AssetCreate(name="Cash", totalValueCurrency="DOLLARS")


class TestGoalUpdate:
    def test_target_must_be_positive(self):
        with pytest.raises(ValidationError):
            GoalUpdate(targetAmount="0", currency="USD")

    def test_currency_normalized(self):
        goal = GoalUpdate(targetAmount="250000", currency="usd")
        assert goal.currency == "USD"


class TestErrorResponse:
    def test_required_fields(self):
        error = ErrorResponse(error="upstream_error", message="Gemini unavailable")
        assert error.retry_after is None
        assert error.timestamp.tzinfo is not None

    def test_missing_message_rejected(self):
        with pytest.raises(ValidationError):
            ErrorResponse(error="upstream_error")

    def test_serializes_retry_after(self):
        error = ErrorResponse(
            error="quota_exceeded",
            message="AI quota exceeded. Please try again later.",
            retry_after=12.5,
            timestamp=datetime(2024, 1, 1, tzinfo=UTC),
        )
        data = error.model_dump(mode="json")
        assert data["retry_after"] == 12.5
        assert data["timestamp"].startswith("2024-01-01")
