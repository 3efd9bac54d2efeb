"""Allocation classifiers: investor archetype, risk level and diversification.

Every function takes the type-percentage map produced by aggregation
(positive holdings only, values 0-100) and is deterministic.

Two archetype variants exist. ``classic`` applies the thresholds to the full
allocation. ``investable`` (the default) first sets property and vehicles
aside and applies the liquid-asset thresholds to shares renormalized within
what remains, so a large primary residence does not hide how the rest of
the money is invested.
"""

from collections.abc import Mapping
from decimal import ROUND_HALF_UP, Decimal

from wealthvue.config import settings
from wealthvue.constants import AssetType
from wealthvue.services.portfolio.valuation_types import (
    Archetype,
    DiversificationScore,
    PortfolioProfile,
    RiskLevel,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")

CRYPTO_DEGEN = Archetype("The Crypto Degen", "High conviction. High volatility. Zero chill.")
DIGITAL_MAVERICK = Archetype("Digital Maverick", "Bullish on the future, one block at a time.")
EQUITY_DEVOTEE = Archetype("Equity Devotee", "You believe in companies. Markets agree, mostly.")
PROPERTY_BULL = Archetype("Property Bull", "Bricks over bytes. Slow and steady.")
CAUTIOUS_ACCUMULATOR = Archetype(
    "The Cautious Accumulator", "Patience is a strategy. Or it should be."
)
DIVERSIFIER = Archetype("The Diversifier", "You've read the books. It shows.")
SPECULATOR = Archetype("The Speculator", "Unconventional assets, unconventional thinking.")
GROWTH_SEEKER = Archetype("Growth Seeker", "Balanced between tradition and the frontier.")
BALANCED_INVESTOR = Archetype("The Balanced Investor", "Risk-aware and opportunity-ready.")

NON_INVESTABLE_TYPES = frozenset({AssetType.PROPERTY.value, AssetType.VEHICLE.value})

# Risk weights per percentage point
RISK_WEIGHTS = {
    AssetType.CRYPTO.value: Decimal("0.9"),
    AssetType.STOCK.value: Decimal("0.5"),
    AssetType.CASH.value: Decimal("-0.7"),
    AssetType.PROPERTY.value: Decimal("-0.4"),
}

CONCENTRATED_SCORE = 8


def _share(pct: Mapping[str, Decimal], asset_type: AssetType) -> Decimal:
    return Decimal(pct.get(asset_type.value, ZERO))


def _archetype_rules(
    liquid: Mapping[str, Decimal], full: Mapping[str, Decimal]
) -> Archetype:
    """Ordered decision list; first match wins.

    ``liquid`` feeds the crypto/stock/cash/other thresholds, ``full`` feeds
    the property and diversifier rules.
    """
    crypto = _share(liquid, AssetType.CRYPTO)
    stock = _share(liquid, AssetType.STOCK)
    cash = _share(liquid, AssetType.CASH)
    other = _share(liquid, AssetType.OTHER)
    prop = _share(full, AssetType.PROPERTY)
    type_count = len(full)
    max_alloc = max(full.values(), default=ZERO)

    if crypto >= 60:
        return CRYPTO_DEGEN
    if crypto >= 40:
        return DIGITAL_MAVERICK
    if stock >= 70:
        return EQUITY_DEVOTEE
    if prop >= 50:
        return PROPERTY_BULL
    if cash >= 60:
        return CAUTIOUS_ACCUMULATOR
    if type_count >= 4 and max_alloc < 40:
        return DIVERSIFIER
    if other >= 30:
        return SPECULATOR
    if stock >= 40 and crypto >= 20:
        return GROWTH_SEEKER
    return BALANCED_INVESTOR


def classify_archetype(pct: Mapping[str, Decimal], variant: str | None = None) -> Archetype:
    """Derive the investor archetype from an allocation.

    Args:
        pct: Allocation percentage by asset type
        variant: "investable" or "classic" (default from settings)
    """
    variant = variant or settings.archetype_variant
    if variant == "classic":
        return _archetype_rules(pct, pct)

    prop = _share(pct, AssetType.PROPERTY)
    investable = {k: Decimal(v) for k, v in pct.items() if k not in NON_INVESTABLE_TYPES}
    investable_total = sum(investable.values(), ZERO)

    if prop >= 75 and investable_total < 15:
        return PROPERTY_BULL
    if investable_total <= 0:
        return PROPERTY_BULL if prop >= 50 else BALANCED_INVESTOR

    liquid = {k: v / investable_total * HUNDRED for k, v in investable.items()}
    return _archetype_rules(liquid, pct)


def score_risk(pct: Mapping[str, Decimal]) -> RiskLevel:
    """Weighted risk score: crypto and stock add, cash and property subtract."""
    score = sum(
        (_share(pct, AssetType(asset_type)) * weight for asset_type, weight in RISK_WEIGHTS.items()),
        ZERO,
    )
    if score > 40:
        return RiskLevel(label="High", value=3, score=score)
    if score > 15:
        return RiskLevel(label="Medium", value=2, score=score)
    return RiskLevel(label="Low", value=1, score=score)


def _diversification_label(score: int) -> str:
    if score >= 70:
        return "Diversified"
    if score >= 40:
        return "Moderate"
    return "Concentrated"


def score_diversification(pct: Mapping[str, Decimal]) -> DiversificationScore:
    """Normalized inverse Herfindahl-Hirschman Index over type shares."""
    shares = [Decimal(v) / HUNDRED for v in pct.values()]
    hhi = sum((s * s for s in shares), ZERO)
    n = len(shares)

    # A single type, or nothing with value, cannot be diversified
    if n <= 1 or hhi == 0:
        return DiversificationScore(score=CONCENTRATED_SCORE, label="Concentrated", hhi=hhi)

    normalized = (1 - hhi) / (1 - Decimal(1) / n) * HUNDRED
    score = int(normalized.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    return DiversificationScore(score=score, label=_diversification_label(score), hhi=hhi)


def classify_portfolio(pct: Mapping[str, Decimal], variant: str | None = None) -> PortfolioProfile:
    """Archetype, risk and diversification for one allocation."""
    return PortfolioProfile(
        archetype=classify_archetype(pct, variant),
        risk=score_risk(pct),
        diversification=score_diversification(pct),
    )
