"""
Finance Models

Income, expense and investment records plus the net worth outputs.

DESIGN DECISION: TRY is the primary currency and the only value used for
arithmetic ground truth. USD values are derived at write time from the
rate snapshot carried on the record and are never recomputed.

Records arrive from storage whose schema has evolved: older rows only
carry a legacy `amount` column. The fallback chains below are fixed and
documented on each property; nothing is inferred at read time.
"""

import datetime as dt
from decimal import Decimal
from enum import Enum
from typing import Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, model_validator


ZERO = Decimal("0")


# =============================================================================
# ENUMS
# =============================================================================

class IncomeCategory(str, Enum):
    REGULAR = "regular"
    ADDITIONAL = "additional"


class ExpenseTag(str, Enum):
    RENT = "rent"
    BILLS = "bills"
    LIFESTYLE = "lifestyle"
    SHOPPING = "shopping"
    FAMILY_SUPPORT = "family_support"


class InvestmentStatus(str, Enum):
    """
    Investment lifecycle.

    ACTIVE -> CLAIMED happens exactly once and never reverts.
    """
    ACTIVE = "active"
    CLAIMED = "claimed"


class RateSource(str, Enum):
    """Where an exchange rate came from."""
    LIVE = "live"                # Fetched just now
    CACHE = "cache"              # Served from a fresh cache entry
    STALE_CACHE = "stale_cache"  # Refresh failed, last known rate served
    FALLBACK = "fallback"        # Refresh failed and nothing was cached


class TargetAssetCategory(str, Enum):
    HOUSE = "house"
    CAR = "car"
    TRAVEL = "travel"
    OTHER = "other"


# =============================================================================
# EXCHANGE RATE
# =============================================================================

class ExchangeRateData(BaseModel):
    """A USD/TRY rate: how many TRY one USD buys."""
    model_config = ConfigDict(frozen=True)

    rate: Decimal = Field(..., gt=0)
    timestamp: dt.datetime
    source: RateSource = RateSource.LIVE

    @property
    def rate_date(self) -> dt.date:
        return self.timestamp.date()

    @property
    def is_degraded(self) -> bool:
        return self.source in (RateSource.STALE_CACHE, RateSource.FALLBACK)


class CurrencySnapshot(BaseModel):
    """An amount in both currencies, frozen with the rate used."""
    model_config = ConfigDict(frozen=True)

    amount_try: Decimal
    amount_usd: Decimal
    exchange_rate_usd_try: Decimal
    exchange_rate_date: dt.date


# =============================================================================
# MONEY RECORDS
# =============================================================================

class MoneyRecord(BaseModel):
    """Fields shared by every money record."""
    model_config = ConfigDict(frozen=True)

    id: UUID = Field(default_factory=uuid4)
    date: dt.date
    exchange_rate_usd_try: Optional[Decimal] = Field(default=None, gt=0)
    exchange_rate_date: Optional[dt.date] = None


class IncomeRecord(MoneyRecord):
    """A single income entry."""

    category: IncomeCategory = IncomeCategory.REGULAR
    tag: Optional[str] = Field(default=None, max_length=50)
    amount_try: Optional[Decimal] = Field(default=None, ge=0)
    amount_usd: Optional[Decimal] = Field(default=None, ge=0)
    amount: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Legacy single-currency amount"
    )

    @property
    def primary_amount_try(self) -> Decimal:
        """amount_try -> amount -> 0"""
        if self.amount_try is not None:
            return self.amount_try
        if self.amount is not None:
            return self.amount
        return ZERO

    @property
    def secondary_amount_usd(self) -> Decimal:
        """amount_usd -> 0"""
        return self.amount_usd if self.amount_usd is not None else ZERO


class ExpenseRecord(MoneyRecord):
    """A single expense entry."""

    tag: Optional[ExpenseTag] = None
    amount_try: Optional[Decimal] = Field(default=None, ge=0)
    amount_usd: Optional[Decimal] = Field(default=None, ge=0)
    amount: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Legacy single-currency amount"
    )

    @property
    def primary_amount_try(self) -> Decimal:
        """amount_try -> amount -> 0"""
        if self.amount_try is not None:
            return self.amount_try
        if self.amount is not None:
            return self.amount
        return ZERO

    @property
    def secondary_amount_usd(self) -> Decimal:
        """amount_usd -> 0"""
        return self.amount_usd if self.amount_usd is not None else ZERO


class InvestmentRecord(MoneyRecord):
    """
    An investment with a claim-based lifecycle.

    While ACTIVE its principal is locked capital (a net worth outflow).
    Once CLAIMED, principal plus realized profit/loss flows back in on
    the claim date.
    """

    investment_type: str = Field(default="other", max_length=50)
    invested_try: Optional[Decimal] = Field(default=None, ge=0)
    invested_usd: Optional[Decimal] = Field(default=None, ge=0)
    status: InvestmentStatus = InvestmentStatus.ACTIVE

    # Only populated when claimed
    realized_pl_try: Optional[Decimal] = None
    realized_pl_usd: Optional[Decimal] = None
    claimed_at: Optional[dt.datetime] = None

    # Legacy fields
    amount: Optional[Decimal] = Field(default=None, ge=0)
    amount_try: Optional[Decimal] = Field(default=None, ge=0)
    amount_usd: Optional[Decimal] = Field(default=None, ge=0)

    @model_validator(mode='after')
    def validate_lifecycle(self) -> 'InvestmentRecord':
        """Claim data exists if and only if the investment is claimed."""
        if self.status == InvestmentStatus.CLAIMED:
            if self.claimed_at is None:
                raise ValueError("Claimed investment must have claimed_at")
            if self.claimed_at.date() < self.date:
                raise ValueError("Investment cannot be claimed before it was made")
        else:
            if self.claimed_at is not None:
                raise ValueError("Active investment cannot have claimed_at")
            if self.realized_pl_try is not None or self.realized_pl_usd is not None:
                raise ValueError("Active investment cannot have realized profit/loss")
        return self

    @property
    def is_claimed(self) -> bool:
        return self.status == InvestmentStatus.CLAIMED

    @property
    def claim_date(self) -> Optional[dt.date]:
        return self.claimed_at.date() if self.claimed_at else None

    @property
    def principal_try(self) -> Decimal:
        """invested_try -> amount_try -> amount -> 0"""
        for value in (self.invested_try, self.amount_try, self.amount):
            if value is not None:
                return value
        return ZERO

    @property
    def principal_usd(self) -> Decimal:
        """invested_usd -> amount_usd -> 0"""
        for value in (self.invested_usd, self.amount_usd):
            if value is not None:
                return value
        return ZERO

    @property
    def profit_loss_try(self) -> Decimal:
        """realized_pl_try -> 0"""
        return self.realized_pl_try if self.realized_pl_try is not None else ZERO

    @property
    def profit_loss_usd(self) -> Decimal:
        """realized_pl_usd -> 0"""
        return self.realized_pl_usd if self.realized_pl_usd is not None else ZERO


# =============================================================================
# NET WORTH OUTPUT
# =============================================================================

class NetWorthSnapshot(BaseModel):
    """Cumulative totals immediately after one date's events."""
    model_config = ConfigDict(frozen=True)

    date: dt.date
    income_try: Decimal
    income_usd: Decimal
    expenses_try: Decimal
    expenses_usd: Decimal
    locked_investments_try: Decimal
    locked_investments_usd: Decimal
    realized_returns_try: Decimal
    realized_returns_usd: Decimal
    total_try: Decimal
    total_usd: Decimal


class NetWorthSummary(BaseModel):
    """Point-in-time net worth."""
    model_config = ConfigDict(frozen=True)

    current_try: Decimal
    current_usd: Decimal
    change_try: Decimal
    change_percent: float

    total_income_try: Decimal
    total_income_usd: Decimal
    total_expenses_try: Decimal
    total_expenses_usd: Decimal
    locked_investments_try: Decimal
    locked_investments_usd: Decimal
    realized_returns_try: Decimal
    realized_returns_usd: Decimal
    realized_profit_loss_try: Decimal

    active_investment_count: int = Field(ge=0)
    claimed_investment_count: int = Field(ge=0)


class NetWorthResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    summary: NetWorthSummary
    snapshots: list[NetWorthSnapshot] = Field(default_factory=list)


# =============================================================================
# TARGET ASSETS
# =============================================================================

class TargetAsset(BaseModel):
    """Something the user is saving towards, priced in TRY."""
    model_config = ConfigDict(frozen=True, str_strip_whitespace=True)

    id: UUID = Field(default_factory=uuid4)
    name: str = Field(..., min_length=1, max_length=100)
    category: TargetAssetCategory = TargetAssetCategory.OTHER
    target_value_try: Decimal = Field(..., gt=0)
    target_value_usd: Optional[Decimal] = Field(default=None, ge=0)
    exchange_rate_usd_try: Optional[Decimal] = Field(default=None, gt=0)


class TargetProgress(BaseModel):
    model_config = ConfigDict(frozen=True)

    target: TargetAsset
    progress_percent: float = Field(ge=0, le=100)
    remaining_try: Decimal = Field(ge=0)
