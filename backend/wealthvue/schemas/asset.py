"""Pydantic schemas for Asset records."""

from datetime import datetime
from decimal import Decimal

from pydantic import ConfigDict, Field, field_validator

from wealthvue.constants import AIConfidence, AssetType, InputMethod, ValueSource
from wealthvue.schemas.common import CURRENCY_PATTERN, CamelModel, Money


def _normalize_currency(value: str | None) -> str | None:
    return value.strip().upper() if isinstance(value, str) else value


class AssetBase(CamelModel):
    """Base Asset schema with common fields."""

    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    asset_type: str = Field(
        default=AssetType.OTHER,
        description="stock, etf, crypto, commodities, vehicle, property, cash or other",
    )
    ticker: str | None = Field(None, max_length=50)
    quantity: Money = Decimal("1")
    unit_price: Money = Field(Decimal("0"), description="Negative for debt")
    unit_price_currency: str = Field("USD", pattern=CURRENCY_PATTERN)
    total_value: Money = Field(Decimal("0"), description="Authoritative amount; negative for debt")
    total_value_currency: str = Field("USD", pattern=CURRENCY_PATTERN)
    value_source: ValueSource = ValueSource.MANUAL
    source: str | None = Field(None, max_length=200, description="Custodian or account name")
    ai_confidence: AIConfidence | None = None
    ai_rationale: str | None = None

    @field_validator("asset_type", mode="before")
    @classmethod
    def fold_unknown_type(cls, value: str | None) -> str:
        return AssetType.parse(value).value

    @field_validator("unit_price_currency", "total_value_currency", mode="before")
    @classmethod
    def upper_currency(cls, value: str | None) -> str | None:
        return _normalize_currency(value)


class AssetCreate(AssetBase):
    """Schema for creating an asset by hand."""

    pass


class AssetUpdate(CamelModel):
    """Schema for updating an existing asset."""

    name: str | None = Field(None, min_length=1, max_length=200)
    description: str | None = None
    asset_type: str | None = None
    ticker: str | None = Field(None, max_length=50)
    quantity: Money | None = None
    unit_price: Money | None = None
    unit_price_currency: str | None = Field(None, pattern=CURRENCY_PATTERN)
    total_value: Money | None = None
    total_value_currency: str | None = Field(None, pattern=CURRENCY_PATTERN)
    value_source: ValueSource | None = None
    source: str | None = Field(None, max_length=200)

    @field_validator("asset_type", mode="before")
    @classmethod
    def fold_unknown_type(cls, value: str | None) -> str | None:
        return AssetType.parse(value).value if value is not None else None

    @field_validator("unit_price_currency", "total_value_currency", mode="before")
    @classmethod
    def upper_currency(cls, value: str | None) -> str | None:
        return _normalize_currency(value)


class AssetDraft(AssetBase):
    """An extracted asset awaiting user confirmation."""

    id: str
    input_method: InputMethod = InputMethod.TEXT


class Asset(AssetBase):
    """Schema for Asset responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    input_method: InputMethod = InputMethod.MANUAL
    last_refreshed: datetime | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None


class BulkDeleteRequest(CamelModel):
    """Ids of assets to delete."""

    asset_ids: list[str] = Field(..., min_length=1)


class BulkDeleteResponse(CamelModel):
    deleted: int
