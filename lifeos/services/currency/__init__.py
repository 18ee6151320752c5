"""Currency conversion service package."""

from lifeos.services.currency.conversion import (
    convert_try_to_usd,
    convert_usd_to_try,
    snapshot_amount,
)
from lifeos.services.currency.exchange_rate import (
    ExchangeRateService,
    HttpRateFetcher,
    RateCache,
    RateUnavailableError,
    parse_rate_payload,
)
from lifeos.services.currency.formatting import (
    DualCurrencyDisplay,
    format_dual_currency,
    format_percent,
    format_rate,
    format_score,
    format_try,
    format_usd,
    format_usd_secondary,
    parse_score,
)

__all__ = [
    "convert_try_to_usd",
    "convert_usd_to_try",
    "snapshot_amount",
    "ExchangeRateService",
    "HttpRateFetcher",
    "RateCache",
    "RateUnavailableError",
    "parse_rate_payload",
    "DualCurrencyDisplay",
    "format_dual_currency",
    "format_percent",
    "format_rate",
    "format_score",
    "format_try",
    "format_usd",
    "format_usd_secondary",
    "parse_score",
]
