"""
Metrics Aggregation

Rolls a user's records up into the AggregatedMetrics that the avatar
engine and the alert checks read.

The window is [as_of - window_days, as_of], both ends inclusive. A
sub-object is only present when at least one record contributed to it:
- health: any health log in the window
- psychology: any COMPLETE psychology log in the window
- finance: any income, expense, investment or claim in the window

latest_net_worth is the exception to the window: it is net worth over
the full history up to as_of, with claims after as_of not yet applied.
"""

import datetime as dt
from statistics import fmean
from typing import Iterable, Optional

from lifeos.config import ScoringSettings
from lifeos.finance.networth import calculate_net_worth
from lifeos.models.avatar import (
    AggregatedMetrics,
    FinanceMetrics,
    HealthMetrics,
    PsychologyMetrics,
)
from lifeos.models.finance import (
    ExpenseRecord,
    IncomeRecord,
    InvestmentRecord,
    InvestmentStatus,
    NetWorthResult,
)
from lifeos.models.health import DailyHealthInput
from lifeos.models.psychology import DailyPsychologyInput
from lifeos.scoring.health import compute_health_score
from lifeos.scoring.mental import compute_mental_score


DEFAULT_WINDOW_DAYS = 30


def window_start(as_of: dt.date, window_days: int = DEFAULT_WINDOW_DAYS) -> dt.date:
    return as_of - dt.timedelta(days=window_days)


def _in_window(day: dt.date, start: dt.date, end: dt.date) -> bool:
    return start <= day <= end


def _as_of_view(investment: InvestmentRecord, as_of: dt.date) -> InvestmentRecord:
    """The investment as it stood on `as_of`: a later claim has not happened yet."""
    if investment.is_claimed and investment.claim_date > as_of:
        return investment.model_copy(
            update={
                "status": InvestmentStatus.ACTIVE,
                "realized_pl_try": None,
                "realized_pl_usd": None,
                "claimed_at": None,
            }
        )
    return investment


def net_worth_as_of(
    incomes: Iterable[IncomeRecord],
    expenses: Iterable[ExpenseRecord],
    investments: Iterable[InvestmentRecord],
    as_of: dt.date,
) -> NetWorthResult:
    """Net worth over every record dated on or before `as_of`."""
    return calculate_net_worth(
        incomes=[r for r in incomes if r.date <= as_of],
        expenses=[r for r in expenses if r.date <= as_of],
        investments=[_as_of_view(r, as_of) for r in investments if r.date <= as_of],
    )


def aggregate_health(
    records: list[DailyHealthInput],
    settings: Optional[ScoringSettings] = None,
) -> Optional[HealthMetrics]:
    if not records:
        return None

    sleep = [r.sleep_hours for r in records if r.sleep_hours is not None]
    activity = [r.activity_level for r in records if r.activity_level is not None]
    scores = [compute_health_score(r, settings=settings).final_score for r in records]

    latest_illness = None
    for record in sorted(records, key=lambda r: r.date, reverse=True):
        if record.illness_status is not None:
            latest_illness = record.illness_status
            break

    return HealthMetrics(
        avg_sleep=fmean(sleep) if sleep else None,
        avg_activity=fmean(activity) if activity else None,
        avg_health_score=fmean(scores),
        entry_count=len(records),
        latest_illness_status=latest_illness,
    )


def aggregate_psychology(records: list[DailyPsychologyInput]) -> Optional[PsychologyMetrics]:
    breakdowns = [b for b in (compute_mental_score(r) for r in records) if b is not None]
    if not breakdowns:
        return None

    return PsychologyMetrics(
        avg_mental_score=fmean(b.final_score for b in breakdowns),
        avg_stress_penalty=fmean(b.stress_penalty for b in breakdowns),
        avg_fatigue_penalty=fmean(b.fatigue_penalty for b in breakdowns),
        avg_motivation_bonus=fmean(b.motivation_bonus for b in breakdowns),
        entry_count=len(breakdowns),
    )


def aggregate_finance(
    incomes: list[IncomeRecord],
    expenses: list[ExpenseRecord],
    investments: list[InvestmentRecord],
    start: dt.date,
    as_of: dt.date,
) -> Optional[FinanceMetrics]:
    window_incomes = [r for r in incomes if _in_window(r.date, start, as_of)]
    window_expenses = [r for r in expenses if _in_window(r.date, start, as_of)]
    window_claims = [
        r for r in investments
        if r.is_claimed and _in_window(r.claim_date, start, as_of)
    ]
    window_openings = [r for r in investments if _in_window(r.date, start, as_of)]

    if not (window_incomes or window_expenses or window_claims or window_openings):
        return None

    history = net_worth_as_of(incomes, expenses, investments, as_of)

    total_income = sum(r.primary_amount_try for r in window_incomes)
    total_expenses = sum(r.primary_amount_try for r in window_expenses)
    return FinanceMetrics(
        total_income=float(total_income),
        total_expenses=float(total_expenses),
        net_cash_flow=float(total_income - total_expenses),
        latest_net_worth=float(history.summary.current_try),
        investment_profit_loss=float(sum(r.profit_loss_try for r in window_claims)),
    )


def build_aggregated_metrics(
    health_inputs: Iterable[DailyHealthInput] = (),
    psychology_inputs: Iterable[DailyPsychologyInput] = (),
    incomes: Iterable[IncomeRecord] = (),
    expenses: Iterable[ExpenseRecord] = (),
    investments: Iterable[InvestmentRecord] = (),
    as_of: Optional[dt.date] = None,
    window_days: int = DEFAULT_WINDOW_DAYS,
    settings: Optional[ScoringSettings] = None,
) -> AggregatedMetrics:
    """
    Aggregate records into the window ending at `as_of`.

    Records outside the window are ignored, except for latest_net_worth.
    No records at all yields an AggregatedMetrics with every section None.
    """
    as_of = as_of or dt.date.today()
    start = window_start(as_of, window_days)

    health = [r for r in health_inputs if _in_window(r.date, start, as_of)]
    psychology = [r for r in psychology_inputs if _in_window(r.date, start, as_of)]

    return AggregatedMetrics(
        health=aggregate_health(health, settings),
        psychology=aggregate_psychology(psychology),
        finance=aggregate_finance(list(incomes), list(expenses), list(investments), start, as_of),
    )
