"""
Avatar Rule Table

DESIGN DECISION: Rules are data, not branching code. Each rule is a
small record (condition, axis deltas, optional status, priority) and
the engine evaluates every rule the same way. A rule can be unit
tested in isolation by calling its condition.

Conditions read an absent metrics section as "nothing to report":
every check below is False when the section it looks at is None.

Scales:
- avg_health_score, avg_mental_score: 0-100
- avg_stress_penalty: 0-55, avg_fatigue_penalty: 0-45,
  avg_motivation_bonus: 0-45
- finance totals: TRY
"""

from typing import Callable, Optional

from pydantic import BaseModel, ConfigDict, Field

from lifeos.models.avatar import AggregatedMetrics, AvatarStatus, AxisAdjustment
from lifeos.models.health import IllnessStatus


Condition = Callable[[AggregatedMetrics], bool]


class AvatarRule(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    condition: Condition
    adjustments: AxisAdjustment = Field(default_factory=AxisAdjustment)
    status: Optional[AvatarStatus] = None
    priority: int = Field(ge=1)

    def matches(self, metrics: AggregatedMetrics) -> bool:
        return bool(self.condition(metrics))


# =============================================================================
# CONDITIONS
# =============================================================================

def _health_and_mind_collapsed(m: AggregatedMetrics) -> bool:
    return (
        m.health is not None
        and m.psychology is not None
        and m.health.avg_health_score < 30
        and m.psychology.avg_mental_score < 30
    )


def _deep_deficit(m: AggregatedMetrics) -> bool:
    return (
        m.finance is not None
        and m.finance.net_cash_flow < 0
        and abs(m.finance.net_cash_flow) > m.finance.total_income * 0.5
    )


def _severely_ill(m: AggregatedMetrics) -> bool:
    return m.health is not None and m.health.latest_illness_status == IllnessStatus.SEVERE


def _high_stress(m: AggregatedMetrics) -> bool:
    return m.psychology is not None and m.psychology.avg_stress_penalty > 40


def _negative_cash_flow(m: AggregatedMetrics) -> bool:
    return m.finance is not None and m.finance.net_cash_flow < 0


def _run_down(m: AggregatedMetrics) -> bool:
    return (
        m.health is not None
        and m.psychology is not None
        and m.health.avg_health_score < 40
        and m.psychology.avg_motivation_bonus < 15
    )


def _exhausted(m: AggregatedMetrics) -> bool:
    return m.psychology is not None and m.psychology.avg_fatigue_penalty > 30


def _sleep_deprived(m: AggregatedMetrics) -> bool:
    return (
        m.health is not None
        and m.health.avg_sleep is not None
        and m.health.avg_sleep < 5
    )


def _sedentary(m: AggregatedMetrics) -> bool:
    return (
        m.health is not None
        and m.health.avg_activity is not None
        and m.health.avg_activity < 3
    )


def _thriving(m: AggregatedMetrics) -> bool:
    return (
        m.health is not None
        and m.psychology is not None
        and m.health.avg_health_score > 70
        and m.psychology.avg_mental_score > 70
    )


def _healthy_savings(m: AggregatedMetrics) -> bool:
    return (
        m.finance is not None
        and m.finance.net_cash_flow > 0
        and m.finance.total_expenses < m.finance.total_income * 0.7
    )


def _motivated(m: AggregatedMetrics) -> bool:
    return m.psychology is not None and m.psychology.avg_motivation_bonus > 35


def _good_sleep(m: AggregatedMetrics) -> bool:
    return (
        m.health is not None
        and m.health.avg_sleep is not None
        and 7 <= m.health.avg_sleep <= 9
    )


def _investment_profit(m: AggregatedMetrics) -> bool:
    return m.finance is not None and m.finance.investment_profit_loss > 0


# =============================================================================
# RULES (highest priority first)
# =============================================================================

AVATAR_RULES: tuple[AvatarRule, ...] = (
    # Critical
    AvatarRule(
        name="health_and_mind_collapsed",
        condition=_health_and_mind_collapsed,
        adjustments=AxisAdjustment(energy=-30, morale=-30),
        status=AvatarStatus.CRITICAL,
        priority=100,
    ),
    AvatarRule(
        name="deep_deficit",
        condition=_deep_deficit,
        adjustments=AxisAdjustment(balance=-40, morale=-20),
        status=AvatarStatus.CRITICAL,
        priority=95,
    ),
    AvatarRule(
        name="severely_ill",
        condition=_severely_ill,
        adjustments=AxisAdjustment(energy=-30, morale=-10),
        status=AvatarStatus.SICK,
        priority=90,
    ),
    # Stressed
    AvatarRule(
        name="high_stress",
        condition=_high_stress,
        adjustments=AxisAdjustment(morale=-25, energy=-15),
        status=AvatarStatus.STRESSED,
        priority=80,
    ),
    AvatarRule(
        name="negative_cash_flow",
        condition=_negative_cash_flow,
        adjustments=AxisAdjustment(balance=-20, morale=-10),
        status=AvatarStatus.STRESSED,
        priority=75,
    ),
    # Tired
    AvatarRule(
        name="run_down",
        condition=_run_down,
        adjustments=AxisAdjustment(energy=-25),
        status=AvatarStatus.TIRED,
        priority=70,
    ),
    AvatarRule(
        name="exhausted",
        condition=_exhausted,
        adjustments=AxisAdjustment(energy=-15),
        status=AvatarStatus.TIRED,
        priority=68,
    ),
    AvatarRule(
        name="sleep_deprived",
        condition=_sleep_deprived,
        adjustments=AxisAdjustment(energy=-20, morale=-10),
        status=AvatarStatus.TIRED,
        priority=65,
    ),
    AvatarRule(
        name="sedentary",
        condition=_sedentary,
        adjustments=AxisAdjustment(energy=-15),
        priority=60,
    ),
    # Positive
    AvatarRule(
        name="thriving",
        condition=_thriving,
        adjustments=AxisAdjustment(energy=15, morale=15),
        status=AvatarStatus.THRIVING,
        priority=55,
    ),
    AvatarRule(
        name="healthy_savings",
        condition=_healthy_savings,
        adjustments=AxisAdjustment(balance=20, morale=10),
        status=AvatarStatus.ENERGETIC,
        priority=50,
    ),
    AvatarRule(
        name="motivated",
        condition=_motivated,
        adjustments=AxisAdjustment(morale=15, energy=5),
        priority=45,
    ),
    AvatarRule(
        name="good_sleep",
        condition=_good_sleep,
        adjustments=AxisAdjustment(energy=10),
        priority=40,
    ),
    AvatarRule(
        name="investment_profit",
        condition=_investment_profit,
        adjustments=AxisAdjustment(balance=10, morale=5),
        priority=35,
    ),
)
