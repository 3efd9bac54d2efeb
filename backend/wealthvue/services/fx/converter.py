"""Currency conversion over a USD-relative rate table."""

from collections.abc import Mapping
from decimal import Decimal

from wealthvue.constants import REFERENCE_CURRENCY

ONE = Decimal("1")


def normalize_rates(raw_rates: Mapping[str, object]) -> dict[str, Decimal]:
    """Coerce a rate mapping (floats, strings or Decimals) to Decimals.

    USD is always pinned to 1.
    """
    rates = {code.upper(): Decimal(str(value)) for code, value in raw_rates.items()}
    rates[REFERENCE_CURRENCY] = ONE
    return rates


def _rate_for(currency: str, rates: Mapping[str, Decimal]) -> Decimal:
    # Missing or zero rates fall back to 1:1 so unknown currencies never break aggregation
    return rates.get(currency) or ONE


def convert_currency(
    amount: Decimal,
    from_currency: str,
    to_currency: str,
    rates: Mapping[str, Decimal],
) -> Decimal:
    """Convert an amount between two currencies.

    Args:
        amount: Amount in ``from_currency``
        from_currency: Source ISO 4217 code
        to_currency: Target ISO 4217 code
        rates: Units of each currency per 1 USD

    Returns:
        Amount in ``to_currency``. Identical currencies return ``amount`` untouched.
    """
    if from_currency == to_currency:
        return amount

    if from_currency == REFERENCE_CURRENCY:
        amount_usd = amount
    else:
        amount_usd = amount / _rate_for(from_currency, rates)

    if to_currency == REFERENCE_CURRENCY:
        return amount_usd
    return amount_usd * _rate_for(to_currency, rates)
