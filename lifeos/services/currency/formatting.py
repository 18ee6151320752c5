"""
Display formatting.

Pure string helpers so engine output can be shown as-is. Only two
fixed groupings are reproduced: tr-TR for TRY (dot thousands separator)
and en-US for USD (comma). This is not general locale-aware output.
Both are shown without decimals, rounded half-up.
"""

import re

from pydantic import BaseModel, ConfigDict

from lifeos.numeric import Number, round_half_up, to_decimal


TRY_SYMBOL = "₺"
USD_SYMBOL = "$"

_SCORE_PATTERN = re.compile(r"^\s*(-?\d+)\s*(?:/\s*100)?\s*$")


class DualCurrencyDisplay(BaseModel):
    model_config = ConfigDict(frozen=True)

    primary: str
    secondary: str


def _format_whole(amount: Number, symbol: str, separator: str) -> str:
    whole = round_half_up(amount)
    sign = "-" if whole < 0 else ""
    grouped = f"{abs(whole):,}".replace(",", separator)
    return f"{sign}{symbol}{grouped}"


def format_try(amount: Number) -> str:
    """25000 -> '₺25.000'"""
    return _format_whole(amount, TRY_SYMBOL, ".")


def format_usd(amount: Number) -> str:
    """780 -> '$780'"""
    return _format_whole(amount, USD_SYMBOL, ",")


def format_usd_secondary(amount: Number) -> str:
    """780 -> '≈ $780'"""
    return f"≈ {format_usd(amount)}"


def format_dual_currency(amount_try: Number, amount_usd: Number) -> DualCurrencyDisplay:
    return DualCurrencyDisplay(
        primary=format_try(amount_try),
        secondary=format_usd_secondary(amount_usd),
    )


def format_rate(rate: Number) -> str:
    """36.5 -> '1 USD = 36.50 TRY'"""
    return f"1 USD = {to_decimal(rate):.2f} TRY"


def format_percent(value: Number) -> str:
    """Signed, one decimal: 12.345 -> '+12.3%'"""
    return f"{float(value):+.1f}%"


def format_score(score: Number) -> str:
    """Scores display as whole numbers, rounded the same way as final_score."""
    return str(round_half_up(score))


def parse_score(text: str) -> int:
    """Inverse of format_score; also accepts the '88/100' form."""
    match = _SCORE_PATTERN.match(text)
    if match is None:
        raise ValueError(f"Not a score: {text!r}")
    return int(match.group(1))
