"""Value objects for portfolio analytics."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Protocol

from wealthvue.models import NAVHistoryEntry


class ValuedAsset(Protocol):
    """Anything carrying an authoritative amount, a type and an account label."""

    asset_type: str
    total_value: Decimal
    total_value_currency: str
    source: str | None


@dataclass
class GroupTotal:
    """One bucket of a grouped breakdown, in display currency."""

    key: str
    value: Decimal
    percentage: Decimal


@dataclass
class PortfolioAggregate:
    """NAV and grouped totals for a set of assets."""

    display_currency: str
    total_nav: Decimal = Decimal("0")
    liabilities_total: Decimal = Decimal("0")
    positive_total: Decimal = Decimal("0")
    holdings_count: int = 0

    by_type: dict[str, Decimal] = field(default_factory=dict)
    positive_by_type: dict[str, Decimal] = field(default_factory=dict)
    by_account: dict[str, Decimal] = field(default_factory=dict)

    # Percentages of positive_total
    type_percentages: dict[str, Decimal] = field(default_factory=dict)
    account_percentages: dict[str, Decimal] = field(default_factory=dict)

    # Ordered for presentation
    type_groups: list[GroupTotal] = field(default_factory=list)
    account_groups: list[GroupTotal] = field(default_factory=list)

    @property
    def has_liabilities(self) -> bool:
        return self.liabilities_total < 0


@dataclass
class ChangeResult:
    """Period-over-period NAV change in display currency."""

    change: Decimal
    change_percent: Decimal
    anchor: NAVHistoryEntry | None
    converted_anchor_nav: Decimal | None


@dataclass(frozen=True)
class Archetype:
    """Qualitative investor profile."""

    title: str
    subtitle: str


@dataclass(frozen=True)
class RiskLevel:
    """Risk bucket: Low (1), Medium (2) or High (3)."""

    label: str
    value: int
    score: Decimal


@dataclass(frozen=True)
class DiversificationScore:
    """HHI-based diversification, 0-100."""

    score: int
    label: str
    hhi: Decimal


@dataclass(frozen=True)
class PortfolioProfile:
    """All classification signals for an allocation."""

    archetype: Archetype
    risk: RiskLevel
    diversification: DiversificationScore
