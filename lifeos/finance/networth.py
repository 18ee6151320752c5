"""
Net Worth Calculator

Net Worth = Income - Expenses - Locked Capital + Realized Returns

where Locked Capital is the principal of every ACTIVE investment and a
Realized Return is principal + profit/loss of a CLAIMED investment.

DESIGN DECISION: A claimed investment contributes two events. On its
creation date the principal is locked (outflow); on its claim date the
principal is unlocked and the claim returns principal + P/L as a
realized return. The principal is never subtracted twice: after the
claim it counts as principal + P/L, not as P/L alone.

The time series is built in a single pass: every event is bucketed by
date once, the distinct dates are sorted, and running totals are
replayed date by date. The simpler Income - Expenses + Investments
formula is not supported.
"""

import datetime as dt
from collections import defaultdict
from decimal import Decimal
from typing import Iterable, Optional

from pydantic import BaseModel

from lifeos.models.finance import (
    ZERO,
    ExpenseRecord,
    IncomeRecord,
    InvestmentRecord,
    NetWorthResult,
    NetWorthSnapshot,
    NetWorthSummary,
)


class _Totals(BaseModel):
    """Running totals; mutable while replaying, frozen into snapshots."""

    income_try: Decimal = ZERO
    income_usd: Decimal = ZERO
    expenses_try: Decimal = ZERO
    expenses_usd: Decimal = ZERO
    locked_try: Decimal = ZERO
    locked_usd: Decimal = ZERO
    realized_try: Decimal = ZERO
    realized_usd: Decimal = ZERO
    realized_pl_try: Decimal = ZERO

    @property
    def total_try(self) -> Decimal:
        return self.income_try - self.expenses_try - self.locked_try + self.realized_try

    @property
    def total_usd(self) -> Decimal:
        return self.income_usd - self.expenses_usd - self.locked_usd + self.realized_usd

    def snapshot(self, day: dt.date) -> NetWorthSnapshot:
        return NetWorthSnapshot(
            date=day,
            income_try=self.income_try,
            income_usd=self.income_usd,
            expenses_try=self.expenses_try,
            expenses_usd=self.expenses_usd,
            locked_investments_try=self.locked_try,
            locked_investments_usd=self.locked_usd,
            realized_returns_try=self.realized_try,
            realized_returns_usd=self.realized_usd,
            total_try=self.total_try,
            total_usd=self.total_usd,
        )


class _DayEvents:
    def __init__(self):
        self.incomes: list[IncomeRecord] = []
        self.expenses: list[ExpenseRecord] = []
        self.openings: list[InvestmentRecord] = []
        self.claims: list[InvestmentRecord] = []


def _bucket_events(
    incomes: Iterable[IncomeRecord],
    expenses: Iterable[ExpenseRecord],
    investments: Iterable[InvestmentRecord],
) -> dict[dt.date, _DayEvents]:
    events: dict[dt.date, _DayEvents] = defaultdict(_DayEvents)
    for record in incomes:
        events[record.date].incomes.append(record)
    for record in expenses:
        events[record.date].expenses.append(record)
    for record in investments:
        events[record.date].openings.append(record)
        if record.is_claimed:
            events[record.claim_date].claims.append(record)
    return events


def _apply(totals: _Totals, day: _DayEvents) -> None:
    for record in day.incomes:
        totals.income_try += record.primary_amount_try
        totals.income_usd += record.secondary_amount_usd
    for record in day.expenses:
        totals.expenses_try += record.primary_amount_try
        totals.expenses_usd += record.secondary_amount_usd
    for record in day.openings:
        totals.locked_try += record.principal_try
        totals.locked_usd += record.principal_usd
    # Openings first: a same-day claim unlocks what was just locked
    for record in day.claims:
        totals.locked_try -= record.principal_try
        totals.locked_usd -= record.principal_usd
        totals.realized_try += record.principal_try + record.profit_loss_try
        totals.realized_usd += record.principal_usd + record.profit_loss_usd
        totals.realized_pl_try += record.profit_loss_try


def _change_percent(current: Decimal, previous: Optional[Decimal]) -> float:
    if previous is None or previous == 0:
        return 0.0
    return float((current - previous) / previous * 100)


def calculate_net_worth(
    incomes: Iterable[IncomeRecord] = (),
    expenses: Iterable[ExpenseRecord] = (),
    investments: Iterable[InvestmentRecord] = (),
) -> NetWorthResult:
    """
    Compute the net worth summary and the cumulative daily series.

    Pure: the same records always produce an equal result. An empty
    history is a net worth of 0 with no snapshots.

    Args:
        incomes: Income records, any order
        expenses: Expense records, any order
        investments: Investment records, active or claimed, any order

    Returns:
        NetWorthResult with one snapshot per distinct event date
    """
    investments = list(investments)
    events = _bucket_events(incomes, expenses, investments)

    totals = _Totals()
    snapshots: list[NetWorthSnapshot] = []
    for day in sorted(events):
        _apply(totals, events[day])
        snapshots.append(totals.snapshot(day))

    current_try = totals.total_try
    previous_try = snapshots[-2].total_try if len(snapshots) > 1 else None
    claimed_count = sum(1 for record in investments if record.is_claimed)

    summary = NetWorthSummary(
        current_try=current_try,
        current_usd=totals.total_usd,
        change_try=current_try - (previous_try if previous_try is not None else ZERO),
        change_percent=_change_percent(current_try, previous_try),
        total_income_try=totals.income_try,
        total_income_usd=totals.income_usd,
        total_expenses_try=totals.expenses_try,
        total_expenses_usd=totals.expenses_usd,
        locked_investments_try=totals.locked_try,
        locked_investments_usd=totals.locked_usd,
        realized_returns_try=totals.realized_try,
        realized_returns_usd=totals.realized_usd,
        realized_profit_loss_try=totals.realized_pl_try,
        active_investment_count=len(investments) - claimed_count,
        claimed_investment_count=claimed_count,
    )
    return NetWorthResult(summary=summary, snapshots=snapshots)
