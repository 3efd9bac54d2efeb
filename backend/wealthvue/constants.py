"""Application constants to avoid magic strings."""

from enum import StrEnum


class AssetType(StrEnum):
    """Asset type buckets used for grouping and classification."""

    STOCK = "stock"
    ETF = "etf"
    CRYPTO = "crypto"
    COMMODITIES = "commodities"
    VEHICLE = "vehicle"
    PROPERTY = "property"
    CASH = "cash"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str | None) -> "AssetType":
        """Map a raw type string to an AssetType, falling back to OTHER."""
        if not value:
            return cls.OTHER
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER


class ValueSource(StrEnum):
    """Where an asset's value came from."""

    MANUAL = "manual"
    AI_ESTIMATE = "ai_estimate"
    LIVE_PRICE = "live_price"


class AIConfidence(StrEnum):
    """Confidence reported by the extraction model."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class InputMethod(StrEnum):
    """How an asset entered the portfolio."""

    TEXT = "text"
    SCREENSHOT = "screenshot"
    MANUAL = "manual"


class ChangePeriod(StrEnum):
    """Look-back periods for NAV change."""

    ONE_DAY = "1D"
    ONE_WEEK = "1W"
    ONE_MONTH = "1M"
    ALL = "All"


class AssetSort(StrEnum):
    """Sort orders for asset lists and grouped totals."""

    VALUE_DESC = "value_desc"
    VALUE_ASC = "value_asc"
    NAME_ASC = "name_asc"


# NAV history is always stored in this currency
REFERENCE_CURRENCY = "USD"

# Account label for assets without a source
UNASSIGNED_ACCOUNT = "Unassigned"

# Asset types that have live market quotes
LIVE_PRICED_TYPES = frozenset({AssetType.STOCK, AssetType.ETF, AssetType.CRYPTO})
