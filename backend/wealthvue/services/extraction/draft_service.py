"""Turning extracted records into drafts, and confirming drafts into assets."""

import logging
from collections.abc import Iterable, Mapping
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from typing import Any
from uuid import uuid4

from pydantic import ValidationError
from sqlalchemy.orm import Session

from wealthvue.constants import AIConfidence, AssetType, InputMethod, ValueSource
from wealthvue.models import Asset
from wealthvue.schemas.asset import AssetDraft
from wealthvue.services.fx.converter import convert_currency
from wealthvue.services.repositories.asset_repository import AssetRepository

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Lenient numeric coercion; anything unusable becomes 0."""
    if isinstance(value, bool) or value is None:
        return ZERO
    try:
        number = Decimal(str(value))
    except (InvalidOperation, ValueError):
        return ZERO
    return number if number.is_finite() else ZERO


def _enum_or(enum_cls, value: Any, default):
    try:
        return enum_cls(str(value).lower())
    except ValueError:
        return default


def merge_sources(existing: str | None, incoming: str | None) -> str | None:
    """Union of comma-separated account labels, first-seen order."""
    labels = [label for label in (existing or "").split(", ") if label]
    if incoming:
        labels.append(incoming)
    combined = ", ".join(dict.fromkeys(labels))
    return combined or existing


class DraftService:
    """Builds asset drafts from extraction output and saves confirmed drafts."""

    def __init__(self, db: Session | None = None) -> None:
        self._db = db

    @staticmethod
    def build_drafts(
        records: Iterable[Mapping[str, Any]],
        input_method: InputMethod,
        preferred_currency: str = "USD",
    ) -> list[AssetDraft]:
        """Fill in missing amounts and identifiers on extracted records.

        quantity defaults to 1; unit price falls back to total / quantity;
        total value falls back to unit price * quantity. Records that still
        fail validation are skipped.
        """
        drafts: list[AssetDraft] = []
        for record in records:
            if not isinstance(record, Mapping):
                logger.warning("Skipping non-object extraction record: %r", record)
                continue

            quantity = to_decimal(record.get("quantity")) or Decimal("1")
            total_raw = to_decimal(record.get("totalValue"))
            unit_price = to_decimal(record.get("unitPrice")) or (total_raw / quantity) or ZERO
            total_value = total_raw or (unit_price * quantity) or ZERO

            try:
                drafts.append(
                    AssetDraft(
                        id=str(uuid4()),
                        input_method=input_method,
                        name=str(record.get("name") or "").strip() or "Unnamed asset",
                        description=str(record.get("description") or ""),
                        asset_type=AssetType.parse(record.get("assetType")),
                        ticker=record.get("ticker") or None,
                        quantity=quantity,
                        unit_price=unit_price,
                        unit_price_currency=record.get("unitPriceCurrency") or preferred_currency,
                        total_value=total_value,
                        total_value_currency=record.get("totalValueCurrency")
                        or record.get("unitPriceCurrency")
                        or preferred_currency,
                        value_source=_enum_or(
                            ValueSource, record.get("valueSource"), ValueSource.AI_ESTIMATE
                        ),
                        source=record.get("source") or None,
                        ai_confidence=_enum_or(AIConfidence, record.get("aiConfidence"), None),
                        ai_rationale=record.get("aiRationale"),
                    )
                )
            except ValidationError as e:
                logger.warning("Skipping invalid extraction record %r: %s", record.get("name"), e)
        return drafts

    def confirm_drafts(
        self,
        drafts: Iterable[AssetDraft],
        rates: Mapping[str, Decimal] | None = None,
    ) -> list[Asset]:
        """Save drafts, merging each into an asset with the same name and type.

        Merged assets sum quantity and total value (the draft's total is
        converted into the existing asset's currency when they differ) and
        union their source labels.

        Returns:
            Assets created or updated, in draft order
        """
        repo = AssetRepository(self._db)
        now = datetime.now(UTC)
        touched: dict[tuple[str, str], Asset] = {}
        saved: list[Asset] = []

        for draft in drafts:
            key = (draft.name.lower(), draft.asset_type)
            existing = touched.get(key) or repo.find_by_name_and_type(draft.name, draft.asset_type)

            if existing is None:
                asset = Asset(
                    id=draft.id,
                    name=draft.name,
                    description=draft.description,
                    asset_type=draft.asset_type,
                    ticker=draft.ticker,
                    quantity=draft.quantity,
                    unit_price=draft.unit_price,
                    unit_price_currency=draft.unit_price_currency,
                    total_value=draft.total_value,
                    total_value_currency=draft.total_value_currency,
                    value_source=draft.value_source,
                    source=draft.source,
                    ai_confidence=draft.ai_confidence,
                    ai_rationale=draft.ai_rationale,
                    input_method=draft.input_method,
                    last_refreshed=now,
                )
            else:
                asset = existing
                draft_total = convert_currency(
                    draft.total_value,
                    draft.total_value_currency,
                    asset.total_value_currency,
                    rates or {},
                )
                asset.quantity = asset.quantity + draft.quantity
                asset.total_value = asset.total_value + draft_total
                asset.source = merge_sources(asset.source, draft.source)
                asset.ai_rationale = (
                    f"Combined holdings. {asset.ai_rationale or ''} {draft.ai_rationale or ''}".strip()
                )
                asset.updated_at = now
                logger.info("Merged draft into existing asset %s (%s)", asset.id, asset.name)

            touched[key] = asset
            if asset not in saved:
                saved.append(asset)

        repo.save_all(saved)
        return saved
