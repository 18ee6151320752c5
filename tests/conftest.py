"""Shared test fixtures for LifeOS engine tests."""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from lifeos.config import ExchangeRateSettings, ScoringSettings
from lifeos.models.finance import (
    ExchangeRateData,
    ExpenseRecord,
    IncomeRecord,
    InvestmentRecord,
    InvestmentStatus,
    RateSource,
)


class FakeClock:
    """A clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class FakeFetcher:
    """Returns queued rates, or raises queued exceptions, in order."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls = 0

    async def __call__(self) -> Decimal:
        self.calls += 1
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, BaseException):
            raise result
        return result


@pytest.fixture
def make_fetcher():
    return FakeFetcher


@pytest.fixture
def fixed_now():
    return datetime(2024, 6, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now):
    return FakeClock(fixed_now)


@pytest.fixture
def rate_settings():
    return ExchangeRateSettings(
        cache_ttl_minutes=15,
        fallback_rate=36.5,
        timeout_seconds=0.5,
        max_attempts=1,
    )


@pytest.fixture
def scoring_settings():
    return ScoringSettings()


@pytest.fixture
def rate_data(fixed_now):
    return ExchangeRateData(rate=Decimal("32.00"), timestamp=fixed_now, source=RateSource.LIVE)


@pytest.fixture
def basic_history():
    """Income 25000, expense 10000, active investment 5000 -> 10000."""
    income = IncomeRecord(date=date(2024, 6, 1), amount_try=Decimal("25000"))
    expense = ExpenseRecord(date=date(2024, 6, 5), amount_try=Decimal("10000"))
    investment = InvestmentRecord(date=date(2024, 6, 10), invested_try=Decimal("5000"))
    return income, expense, investment


@pytest.fixture
def claimed_investment(basic_history):
    """The basic history's investment, claimed on 2024-06-20 with +800."""
    investment = basic_history[2]
    return investment.model_copy(
        update={
            "status": InvestmentStatus.CLAIMED,
            "realized_pl_try": Decimal("800"),
            "claimed_at": datetime(2024, 6, 20, 9, 30, tzinfo=timezone.utc),
        }
    )
