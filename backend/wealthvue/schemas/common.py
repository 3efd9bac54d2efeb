"""Common schema types and response shapes used across the API."""

from datetime import UTC, datetime
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

# Decimals are carried internally and emitted as JSON numbers
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

CURRENCY_PATTERN = "^[A-Z]{3}$"


class CamelModel(BaseModel):
    """Base model accepting and emitting camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ErrorResponse(BaseModel):
    """Standard error response format for API errors.

    Attributes:
        error: Error code (e.g., 'NotFound', 'QuotaExceeded')
        message: Human-readable error message
        retry_after: Seconds to wait before retrying, when known
        timestamp: When the error occurred
    """

    error: str = Field(..., description="Error code (e.g., 'NotFound', 'QuotaExceeded')")
    message: str = Field(..., description="Human-readable error message")
    retry_after: float | None = Field(None, description="Seconds to wait before retrying")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
