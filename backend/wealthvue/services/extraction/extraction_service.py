"""Asset extraction from free text and screenshots, plus portfolio analysis.

Wraps GeminiClient so callers only ever see an ExtractionResult: transport
errors, quota exhaustion and unparseable model output all come back as a
typed failure instead of an exception.
"""

import json
import logging
import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from wealthvue.constants import AIConfidence, InputMethod
from wealthvue.schemas.asset import AssetDraft
from wealthvue.services.extraction.draft_service import DraftService, to_decimal
from wealthvue.services.extraction.gemini_client import (
    GeminiClient,
    GeminiResponseError,
    is_quota_error,
    quota_retry_after,
)
from wealthvue.services.extraction.prompts import (
    SCREENSHOT_USER_PROMPT,
    portfolio_analysis_instruction,
    reestimate_instruction,
    screenshot_parser_instruction,
    text_parser_instruction,
)
from wealthvue.services.extraction.types import (
    ExtractionFailureReason,
    ExtractionResult,
    RawRecord,
)
from wealthvue.services.portfolio.valuation_types import PortfolioAggregate, PortfolioProfile
from wealthvue.services.shared.http_client import HTTPClientError

logger = logging.getLogger(__name__)

_FENCE_OPEN = re.compile(r"```json\n?")
_FENCE_CLOSE = re.compile(r"```\n?$")
_DATA_URL = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,", re.IGNORECASE)


@dataclass(frozen=True)
class ValueEstimate:
    """A refreshed valuation for an existing asset."""

    unit_price: Decimal
    unit_price_currency: str
    total_value: Decimal
    ai_confidence: AIConfidence | None
    ai_rationale: str | None


@dataclass(frozen=True)
class PortfolioAnalysis:
    """Model commentary on the current allocation."""

    summary: str
    advice: list[str]


def strip_json_fence(text: str) -> str:
    """Remove a ```json markdown fence around model output."""
    text = _FENCE_OPEN.sub("", text.strip(), count=1)
    return _FENCE_CLOSE.sub("", text).strip()


def split_data_url(image: str, default_mime_type: str) -> tuple[str, str]:
    """Split a base64 data URL into (mime_type, payload)."""
    match = _DATA_URL.match(image)
    if match:
        return match.group("mime"), image[match.end():]
    if image.startswith("data:") and "," in image:
        return default_mime_type, image.split(",", 1)[1]
    return default_mime_type, image


def describe_portfolio(
    aggregate: PortfolioAggregate, profile: PortfolioProfile, display_currency: str
) -> str:
    """Plain-text portfolio snapshot sent to the analysis model."""
    lines = [f"Total net worth: {aggregate.total_nav:.2f} {display_currency}"]
    if aggregate.has_liabilities:
        lines.append(f"Liabilities: {aggregate.liabilities_total:.2f} {display_currency}")
    lines.append("Allocation by asset type:")
    for group in aggregate.type_groups:
        lines.append(f"- {group.key}: {group.value:.2f} {display_currency} ({group.percentage:.1f}%)")
    lines.append(f"Investor archetype: {profile.archetype.title} ({profile.archetype.subtitle})")
    lines.append(f"Risk level: {profile.risk.label}")
    lines.append(
        f"Diversification: {profile.diversification.label} ({profile.diversification.score}/100)"
    )
    return "\n".join(lines)


class AssetExtractionService:
    """Turns user descriptions and screenshots into asset drafts."""

    def __init__(self, client: GeminiClient | None = None):
        self._client = client

    @property
    def client(self) -> GeminiClient:
        if self._client is None:
            self._client = GeminiClient()
        return self._client

    def _generate_json(
        self,
        parts: list[dict[str, Any]],
        system_instruction: str,
        use_search: bool = True,
    ) -> ExtractionResult[Any]:
        if not self.client.is_configured:
            return ExtractionResult.failed(
                ExtractionFailureReason.NOT_CONFIGURED, "Asset extraction is not configured"
            )

        try:
            text = self.client.generate(parts, system_instruction, use_search=use_search)
        except HTTPClientError as e:
            if is_quota_error(e):
                retry_after = quota_retry_after(e)
                logger.warning("Extraction quota exhausted (retry after %s s)", retry_after)
                return ExtractionResult.failed(
                    ExtractionFailureReason.QUOTA_EXCEEDED,
                    "AI quota exceeded. Please try again later.",
                    retry_after=retry_after,
                )
            logger.error("Extraction request failed: %s", e)
            return ExtractionResult.failed(ExtractionFailureReason.UPSTREAM_ERROR, str(e))
        except GeminiResponseError as e:
            logger.warning("Extraction returned no content: %s", e)
            return ExtractionResult.failed(ExtractionFailureReason.INVALID_RESPONSE, str(e))

        try:
            payload = json.loads(strip_json_fence(text))
        except json.JSONDecodeError as e:
            logger.warning("Extraction returned invalid JSON: %s", e)
            return ExtractionResult.failed(
                ExtractionFailureReason.INVALID_RESPONSE, "Model response was not valid JSON"
            )
        return ExtractionResult.success([payload])

    def _records(self, result: ExtractionResult[Any]) -> ExtractionResult[RawRecord]:
        if not result.ok:
            return result
        payload = result.items[0]
        records = payload if isinstance(payload, list) else [payload]
        return ExtractionResult.success([r for r in records if isinstance(r, dict)])

    def parse_text(self, text: str, preferred_currency: str = "USD") -> ExtractionResult[AssetDraft]:
        """Extract one asset from a plain-language description."""
        result = self._records(
            self._generate_json([{"text": text}], text_parser_instruction(preferred_currency))
        )
        if not result.ok:
            return result
        return self._drafts(result.items, InputMethod.TEXT, preferred_currency)

    def parse_screenshot(
        self,
        image_b64: str,
        preferred_currency: str = "USD",
        mime_type: str = "image/png",
    ) -> ExtractionResult[AssetDraft]:
        """Extract every visible asset from a base64 screenshot (raw or data URL)."""
        mime_type, data = split_data_url(image_b64, mime_type)
        parts = [
            {"inlineData": {"mimeType": mime_type, "data": data}},
            {"text": SCREENSHOT_USER_PROMPT},
        ]
        result = self._records(
            self._generate_json(parts, screenshot_parser_instruction(preferred_currency))
        )
        if not result.ok:
            return result
        return self._drafts(result.items, InputMethod.SCREENSHOT, preferred_currency)

    def reestimate_value(self, asset: Any, preferred_currency: str = "USD") -> ExtractionResult[ValueEstimate]:
        """Ask for a fresh market value of an existing asset."""
        instruction = reestimate_instruction(
            asset.name, asset.asset_type, asset.description or "", preferred_currency
        )
        result = self._records(
            self._generate_json([{"text": f"Re-estimate the value of {asset.name}"}], instruction)
        )
        if not result.ok:
            return result
        if not result.items:
            return ExtractionResult.failed(
                ExtractionFailureReason.INVALID_RESPONSE, "Model response had no estimate"
            )

        record = result.items[0]
        quantity = to_decimal(asset.quantity) or Decimal("1")
        unit_price = to_decimal(record.get("unitPrice"))
        total_value = to_decimal(record.get("totalValue")) or unit_price * quantity
        try:
            confidence = AIConfidence(str(record.get("aiConfidence")).lower())
        except ValueError:
            confidence = None

        currency = str(record.get("unitPriceCurrency") or preferred_currency).upper()
        return ExtractionResult.success(
            [
                ValueEstimate(
                    unit_price=unit_price,
                    unit_price_currency=currency,
                    total_value=total_value,
                    ai_confidence=confidence,
                    ai_rationale=record.get("aiRationale"),
                )
            ]
        )

    def analyze_portfolio(
        self,
        aggregate: PortfolioAggregate,
        profile: PortfolioProfile,
        display_currency: str,
    ) -> ExtractionResult[PortfolioAnalysis]:
        """Summarize the allocation and suggest improvements.

        Runs without search grounding; the snapshot carries everything the
        model needs.
        """
        result = self._records(
            self._generate_json(
                [{"text": describe_portfolio(aggregate, profile, display_currency)}],
                portfolio_analysis_instruction(display_currency),
                use_search=False,
            )
        )
        if not result.ok:
            return result

        record = result.items[0] if result.items else {}
        summary = record.get("summary")
        if not isinstance(summary, str) or not summary.strip():
            return ExtractionResult.failed(
                ExtractionFailureReason.INVALID_RESPONSE, "Model response had no summary"
            )

        raw_advice = record.get("advice")
        advice = [
            item.strip()
            for item in (raw_advice if isinstance(raw_advice, list) else [])
            if isinstance(item, str) and item.strip()
        ]
        logger.info("Portfolio analysis returned %d advice item(s)", len(advice))
        return ExtractionResult.success([PortfolioAnalysis(summary=summary.strip(), advice=advice)])

    @staticmethod
    def _drafts(
        records: list[RawRecord], input_method: InputMethod, preferred_currency: str
    ) -> ExtractionResult[AssetDraft]:
        drafts = DraftService.build_drafts(records, input_method, preferred_currency)
        if records and not drafts:
            return ExtractionResult.failed(
                ExtractionFailureReason.INVALID_RESPONSE, "No valid assets in model response"
            )
        logger.info("Extracted %d draft(s) via %s", len(drafts), input_method)
        return ExtractionResult.success(drafts)
