"""Portfolio aggregation - NAV, grouped totals and allocation percentages.

All values are converted to the display currency before grouping. Liabilities
(negative values) count toward NAV but never toward the allocation base, so
debt does not distort percentages or the classifiers built on them.
"""

from collections.abc import Iterable, Mapping, Sequence
from decimal import Decimal

from wealthvue.constants import UNASSIGNED_ACCOUNT, AssetSort, AssetType
from wealthvue.services.fx.converter import convert_currency
from wealthvue.services.portfolio.valuation_types import (
    GroupTotal,
    PortfolioAggregate,
    ValuedAsset,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def converted_value(asset: ValuedAsset, display_currency: str, rates: Mapping[str, Decimal]) -> Decimal:
    """Asset's authoritative amount in the display currency."""
    return convert_currency(asset.total_value, asset.total_value_currency, display_currency, rates)


def account_label(source: str | None) -> str:
    """Account bucket for an asset's source field."""
    if source is None or not source.strip():
        return UNASSIGNED_ACCOUNT
    return source.strip()


def allocation_percentages(
    values: Mapping[str, Decimal], base: Decimal
) -> dict[str, Decimal]:
    """Each value as a percentage of ``base``; all zero when base is not positive."""
    if base > 0:
        return {key: value / base * HUNDRED for key, value in values.items()}
    return {key: ZERO for key in values}


def order_groups(
    values: Mapping[str, Decimal],
    percentages: Mapping[str, Decimal],
    sort: str = AssetSort.VALUE_DESC,
) -> list[GroupTotal]:
    """Turn a bucket mapping into an ordered list for presentation."""
    groups = [
        GroupTotal(key=key, value=value, percentage=percentages.get(key, ZERO))
        for key, value in values.items()
    ]
    if sort == AssetSort.NAME_ASC:
        groups.sort(key=lambda g: g.key.lower())
    elif sort == AssetSort.VALUE_ASC:
        groups.sort(key=lambda g: g.value)
    else:
        groups.sort(key=lambda g: g.value, reverse=True)
    return groups


def aggregate_portfolio(
    assets: Iterable[ValuedAsset],
    display_currency: str,
    rates: Mapping[str, Decimal],
    sort: str = AssetSort.VALUE_DESC,
) -> PortfolioAggregate:
    """Compute NAV, type and account breakdowns for a set of assets.

    Args:
        assets: Asset records (ORM rows or schema objects)
        display_currency: Currency for every returned amount
        rates: USD-relative rate table
        sort: Order of the grouped lists (value_desc, value_asc or name_asc)

    Returns:
        PortfolioAggregate. An empty asset list yields zeros and empty maps.
    """
    result = PortfolioAggregate(display_currency=display_currency)

    for asset in assets:
        value = converted_value(asset, display_currency, rates)
        result.holdings_count += 1
        result.total_nav += value

        bucket = AssetType.parse(asset.asset_type).value
        result.by_type[bucket] = result.by_type.get(bucket, ZERO) + value

        # Account view answers "where is my wealth held": positive holdings only
        if value > 0:
            label = account_label(asset.source)
            result.by_account[label] = result.by_account.get(label, ZERO) + value

    for bucket, total in result.by_type.items():
        if total >= 0:
            result.positive_by_type[bucket] = total
        else:
            result.liabilities_total += total

    result.positive_total = sum(result.positive_by_type.values(), ZERO)
    result.type_percentages = allocation_percentages(result.positive_by_type, result.positive_total)
    result.account_percentages = allocation_percentages(result.by_account, result.positive_total)
    result.type_groups = order_groups(result.positive_by_type, result.type_percentages, sort)
    result.account_groups = order_groups(result.by_account, result.account_percentages, sort)
    return result


def sort_assets(
    assets: Sequence[ValuedAsset],
    display_currency: str,
    rates: Mapping[str, Decimal],
    sort_by: str = AssetSort.VALUE_DESC,
) -> list[ValuedAsset]:
    """Order an asset list for display by converted value or by name."""
    if sort_by == AssetSort.NAME_ASC:
        return sorted(assets, key=lambda a: (getattr(a, "name", "") or "").lower())
    return sorted(
        assets,
        key=lambda a: converted_value(a, display_currency, rates),
        reverse=sort_by != AssetSort.VALUE_ASC,
    )
