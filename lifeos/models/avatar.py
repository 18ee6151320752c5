"""
Avatar Models

Aggregated 30-day metrics and everything derived from them.

CRITICAL: AvatarState and Alert are computed fresh on every call.
They are never persisted as authoritative state.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from lifeos.models.health import IllnessStatus


class AvatarStatus(str, Enum):
    THRIVING = "thriving"
    ENERGETIC = "energetic"
    STABLE = "stable"
    TIRED = "tired"
    STRESSED = "stressed"
    CRITICAL = "critical"
    SICK = "sick"


class AlertSeverity(str, Enum):
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"
    DANGER = "danger"


# =============================================================================
# AGGREGATED METRICS
# =============================================================================

class HealthMetrics(BaseModel):
    """Averages over the window; a field is None when no day logged it."""
    model_config = ConfigDict(frozen=True)

    avg_sleep: Optional[float] = Field(default=None, ge=0)
    avg_activity: Optional[float] = Field(default=None, ge=0)
    avg_health_score: float = Field(ge=0, le=100)
    entry_count: int = Field(default=1, ge=1)
    latest_illness_status: Optional[IllnessStatus] = None


class PsychologyMetrics(BaseModel):
    """Averages over days with a complete psychology log."""
    model_config = ConfigDict(frozen=True)

    avg_mental_score: float = Field(ge=0, le=100)
    avg_stress_penalty: float = Field(default=0, ge=0)
    avg_fatigue_penalty: float = Field(default=0, ge=0)
    avg_motivation_bonus: float = Field(default=0, ge=0)
    entry_count: int = Field(default=1, ge=1)


class FinanceMetrics(BaseModel):
    """Window totals in TRY; latest_net_worth covers the full history."""
    model_config = ConfigDict(frozen=True)

    total_income: float = Field(ge=0)
    total_expenses: float = Field(ge=0)
    net_cash_flow: float
    latest_net_worth: float = 0
    investment_profit_loss: float = 0


class AggregatedMetrics(BaseModel):
    """
    Rollup over the aggregation window.

    A sub-object is None when no contributing record existed.
    """
    model_config = ConfigDict(frozen=True)

    health: Optional[HealthMetrics] = None
    psychology: Optional[PsychologyMetrics] = None
    finance: Optional[FinanceMetrics] = None


# =============================================================================
# DERIVED STATE
# =============================================================================

class AxisAdjustment(BaseModel):
    """Deltas applied to the three avatar axes."""
    model_config = ConfigDict(frozen=True)

    energy: float = 0
    morale: float = 0
    balance: float = 0


class AvatarState(BaseModel):
    model_config = ConfigDict(frozen=True)

    energy: int = Field(ge=0, le=100)
    morale: int = Field(ge=0, le=100)
    balance: int = Field(ge=0, le=100)
    overall_score: int = Field(ge=0, le=100)
    status: AvatarStatus
    status_message: str
    matched_rules: list[str] = Field(
        default_factory=list,
        description="Names of the rules whose condition held"
    )


class Alert(BaseModel):
    """
    A user-facing notice.

    The id is stable per check so the UI can deduplicate re-renders.
    """
    model_config = ConfigDict(frozen=True)

    id: str
    severity: AlertSeverity
    title: str
    message: str
    related_metric: str
