"""
Money record builders.

Every builder takes the amount in TRY and the rate to snapshot. The
USD amount, the rate and the rate date are frozen onto the record so
the record's USD value never changes when the rate does.
"""

import datetime as dt
from decimal import Decimal
from typing import Optional

from lifeos.models.finance import (
    ExchangeRateData,
    ExpenseRecord,
    ExpenseTag,
    IncomeCategory,
    IncomeRecord,
    InvestmentRecord,
    InvestmentStatus,
)
from lifeos.numeric import Number, round_money
from lifeos.scoring.tables import InvalidInputError, coerce_enum
from lifeos.services.currency.conversion import convert_try_to_usd, snapshot_amount


class InvestmentAlreadyClaimedError(InvalidInputError):
    """An investment can be claimed exactly once."""

    def __init__(self, investment_id):
        super().__init__(
            "status",
            InvestmentStatus.CLAIMED.value,
            f"Investment {investment_id} has already been claimed",
        )


def _positive_amount(amount_try: Number, field: str = "amount_try") -> Decimal:
    amount = round_money(amount_try)
    if amount <= 0:
        raise InvalidInputError(field, amount_try, f"{field} must be positive, got {amount_try!r}")
    return amount


def build_income(
    amount_try: Number,
    rate: ExchangeRateData,
    date: dt.date,
    category=IncomeCategory.REGULAR,
    tag: Optional[str] = None,
) -> IncomeRecord:
    amount = _positive_amount(amount_try)
    snapshot = snapshot_amount(amount, rate)
    return IncomeRecord(
        date=date,
        category=coerce_enum(IncomeCategory, category, "category"),
        tag=tag,
        amount_try=snapshot.amount_try,
        amount_usd=snapshot.amount_usd,
        exchange_rate_usd_try=snapshot.exchange_rate_usd_try,
        exchange_rate_date=snapshot.exchange_rate_date,
    )


def build_expense(
    amount_try: Number,
    rate: ExchangeRateData,
    date: dt.date,
    tag=None,
) -> ExpenseRecord:
    amount = _positive_amount(amount_try)
    snapshot = snapshot_amount(amount, rate)
    return ExpenseRecord(
        date=date,
        tag=coerce_enum(ExpenseTag, tag, "tag") if tag is not None else None,
        amount_try=snapshot.amount_try,
        amount_usd=snapshot.amount_usd,
        exchange_rate_usd_try=snapshot.exchange_rate_usd_try,
        exchange_rate_date=snapshot.exchange_rate_date,
    )


def build_investment(
    invested_try: Number,
    rate: ExchangeRateData,
    date: dt.date,
    investment_type: str = "other",
) -> InvestmentRecord:
    """A new ACTIVE investment; its principal is locked from `date`."""
    amount = _positive_amount(invested_try, "invested_try")
    snapshot = snapshot_amount(amount, rate)
    return InvestmentRecord(
        date=date,
        investment_type=investment_type,
        invested_try=snapshot.amount_try,
        invested_usd=snapshot.amount_usd,
        status=InvestmentStatus.ACTIVE,
        exchange_rate_usd_try=snapshot.exchange_rate_usd_try,
        exchange_rate_date=snapshot.exchange_rate_date,
    )


def claim_investment(
    investment: InvestmentRecord,
    realized_pl_try: Number,
    rate: ExchangeRateData,
    claimed_at: Optional[dt.datetime] = None,
) -> InvestmentRecord:
    """
    Transition an investment ACTIVE -> CLAIMED.

    The realized P/L may be negative (a loss). Its USD value uses the
    rate at claim time; the principal keeps its original snapshot.
    claimed_at defaults to the current UTC time, not the rate timestamp.

    Raises:
        InvestmentAlreadyClaimedError: If the investment is already claimed
        InvalidInputError: If the claim predates the investment
    """
    if investment.is_claimed:
        raise InvestmentAlreadyClaimedError(investment.id)

    claimed_at = claimed_at or dt.datetime.now(dt.timezone.utc)
    if claimed_at.date() < investment.date:
        raise InvalidInputError(
            "claimed_at",
            claimed_at,
            f"Claim on {claimed_at.date()} predates investment made on {investment.date}",
        )

    pl_try = round_money(realized_pl_try)
    return investment.model_copy(
        update={
            "status": InvestmentStatus.CLAIMED,
            "realized_pl_try": pl_try,
            "realized_pl_usd": convert_try_to_usd(pl_try, rate.rate),
            "claimed_at": claimed_at,
        }
    )
