"""Historical NAV change calculation."""

from collections.abc import Mapping, Sequence
from datetime import UTC, date, datetime, timedelta
from decimal import Decimal

from wealthvue.constants import REFERENCE_CURRENCY, ChangePeriod
from wealthvue.models import NAVHistoryEntry
from wealthvue.services.fx.converter import convert_currency
from wealthvue.services.portfolio.valuation_types import ChangeResult

PERIOD_LOOKBACK_DAYS = {
    ChangePeriod.ONE_WEEK: 7,
    ChangePeriod.ONE_MONTH: 30,
}


def utc_today() -> date:
    return datetime.now(UTC).date()


def find_period_anchor(
    history: Sequence[NAVHistoryEntry],
    period: str,
    today: date | None = None,
) -> NAVHistoryEntry | None:
    """Pick the history entry a period's change is measured against.

    Args:
        history: NAV snapshots in any order
        period: 1D, 1W, 1M or All
        today: Reference date for 1W/1M look-backs (default: UTC today)

    Returns:
        The anchor entry, or None with fewer than two entries
    """
    if len(history) < 2:
        return None

    # yyyy-MM-dd strings sort chronologically
    ordered = sorted(history, key=lambda entry: entry.date)

    if period == ChangePeriod.ONE_DAY:
        return ordered[-2]
    if period == ChangePeriod.ALL:
        return ordered[0]

    days_back = PERIOD_LOOKBACK_DAYS[ChangePeriod(period)]
    target = ((today or utc_today()) - timedelta(days=days_back)).isoformat()
    eligible = [entry for entry in ordered if entry.date <= target]
    return eligible[-1] if eligible else ordered[0]


def calculate_change(
    history: Sequence[NAVHistoryEntry],
    period: str,
    current_nav: Decimal,
    display_currency: str,
    rates: Mapping[str, Decimal],
    today: date | None = None,
) -> ChangeResult:
    """Compute absolute and percentage NAV change over a period.

    Anchors are stored in USD and converted before comparison. Without an
    anchor the change is reported as zero. A zero anchor divides by 1, which
    yields a large finite percentage rather than an error.
    """
    anchor = find_period_anchor(history, period, today)
    if anchor is None:
        return ChangeResult(
            change=Decimal("0"),
            change_percent=Decimal("0"),
            anchor=None,
            converted_anchor_nav=None,
        )

    converted_anchor = convert_currency(
        anchor.total_nav, REFERENCE_CURRENCY, display_currency, rates
    )
    change = current_nav - converted_anchor
    change_percent = change / (converted_anchor or Decimal("1")) * 100
    return ChangeResult(
        change=change,
        change_percent=change_percent,
        anchor=anchor,
        converted_anchor_nav=converted_anchor,
    )
