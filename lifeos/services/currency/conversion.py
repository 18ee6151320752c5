"""
TRY/USD Conversion

Rates are expressed as TRY per USD (36.5 means 1 USD = 36.5 TRY).

CRITICAL: Every stored money amount carries the rate and rate date it
was converted with (see snapshot_amount). A later rate change must never
alter a historical record's USD value.
"""

from decimal import Decimal

from lifeos.models.finance import CurrencySnapshot, ExchangeRateData
from lifeos.numeric import Number, round_money, to_decimal


ZERO = Decimal("0.00")


def convert_try_to_usd(amount_try: Number, rate: Number) -> Decimal:
    """
    Convert TRY to USD, rounded half-up to 2 decimals.

    A non-positive rate yields 0 instead of a division error.
    """
    rate = to_decimal(rate)
    if rate <= 0:
        return ZERO
    return round_money(to_decimal(amount_try) / rate)


def convert_usd_to_try(amount_usd: Number, rate: Number) -> Decimal:
    rate = to_decimal(rate)
    if rate <= 0:
        return ZERO
    return round_money(to_decimal(amount_usd) * rate)


def snapshot_amount(amount_try: Number, rate_data: ExchangeRateData) -> CurrencySnapshot:
    """Freeze an amount in both currencies with the rate used."""
    return CurrencySnapshot(
        amount_try=round_money(amount_try),
        amount_usd=convert_try_to_usd(amount_try, rate_data.rate),
        exchange_rate_usd_try=rate_data.rate,
        exchange_rate_date=rate_data.rate_date,
    )
