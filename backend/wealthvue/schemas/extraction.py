"""Pydantic schemas for asset extraction endpoints."""

from pydantic import Field, field_validator

from wealthvue.schemas.asset import AssetDraft
from wealthvue.schemas.common import CURRENCY_PATTERN, CamelModel


class _PreferredCurrency(CamelModel):
    preferred_currency: str = Field("USD", pattern=CURRENCY_PATTERN)

    @field_validator("preferred_currency", mode="before")
    @classmethod
    def upper_currency(cls, value: str) -> str:
        return value.strip().upper() if isinstance(value, str) else value


class TextExtractionRequest(_PreferredCurrency):
    text: str = Field(..., min_length=1, max_length=4000)


class ScreenshotExtractionRequest(_PreferredCurrency):
    image: str = Field(..., min_length=1, description="Base64 image or data URL")
    mime_type: str = "image/png"


class ReestimateRequest(_PreferredCurrency):
    pass


class DraftsResponse(CamelModel):
    drafts: list[AssetDraft]


class ConfirmDraftsRequest(CamelModel):
    drafts: list[AssetDraft] = Field(..., min_length=1)
