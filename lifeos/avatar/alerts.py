"""
Alert generation.

Independent of the avatar rules: changing a rule never adds or removes
an alert. Each check yields at most one alert with a fixed id, so the
UI can deduplicate re-renders.
"""

from typing import Callable, Optional

from lifeos.models.avatar import AggregatedMetrics, Alert, AlertSeverity
from lifeos.numeric import round_half_up
from lifeos.services.currency.formatting import format_try


OVERSPEND_RATIO = 1.1
SAVINGS_RATIO = 0.7
INVESTMENT_ALERT_THRESHOLD = 1000

AlertCheck = Callable[[AggregatedMetrics], Optional[Alert]]


# =============================================================================
# HEALTH
# =============================================================================

def check_sleep_deficit(m: AggregatedMetrics) -> Optional[Alert]:
    if m.health is None or m.health.avg_sleep is None or m.health.avg_sleep >= 6:
        return None
    return Alert(
        id="health-sleep",
        severity=AlertSeverity.WARNING,
        title="Sleep Deficit",
        message=(
            f"You've been averaging {m.health.avg_sleep:.1f} hours of sleep. "
            "Aim for 7-8 hours."
        ),
        related_metric="health",
    )


def check_low_health_score(m: AggregatedMetrics) -> Optional[Alert]:
    if m.health is None or m.health.avg_health_score >= 50:
        return None
    return Alert(
        id="health-score",
        severity=AlertSeverity.DANGER,
        title="Low Health Score",
        message=(
            f"Your health score is {round_half_up(m.health.avg_health_score)}. "
            "Focus on exercise and nutrition."
        ),
        related_metric="health",
    )


def check_great_health(m: AggregatedMetrics) -> Optional[Alert]:
    if m.health is None or m.health.avg_health_score <= 80:
        return None
    return Alert(
        id="health-great",
        severity=AlertSeverity.SUCCESS,
        title="Great Health!",
        message="You're managing your health metrics excellently!",
        related_metric="health",
    )


# =============================================================================
# PSYCHOLOGY
# =============================================================================

def check_high_stress(m: AggregatedMetrics) -> Optional[Alert]:
    if m.psychology is None or m.psychology.avg_stress_penalty <= 40:
        return None
    return Alert(
        id="psych-stress",
        severity=AlertSeverity.DANGER,
        title="High Stress",
        message="Your stress has been high most days. Consider taking a break.",
        related_metric="psychology",
    )


def check_low_motivation(m: AggregatedMetrics) -> Optional[Alert]:
    if m.psychology is None or m.psychology.avg_motivation_bonus >= 15:
        return None
    return Alert(
        id="psych-motivation",
        severity=AlertSeverity.WARNING,
        title="Low Motivation",
        message="Your motivation seems low. Setting new goals might help.",
        related_metric="psychology",
    )


def check_great_mind(m: AggregatedMetrics) -> Optional[Alert]:
    if (
        m.psychology is None
        or m.psychology.avg_mental_score <= 80
        or m.psychology.avg_stress_penalty >= 15
    ):
        return None
    return Alert(
        id="psych-great",
        severity=AlertSeverity.SUCCESS,
        title="Great Mood!",
        message="Your mental health looks excellent!",
        related_metric="psychology",
    )


# =============================================================================
# FINANCE
# =============================================================================

def overspend_percent(total_income: float, total_expenses: float) -> Optional[int]:
    """((expenses / income) - 1) * 100 rounded, or None without income."""
    if total_income <= 0:
        return None
    return round_half_up((total_expenses / total_income - 1) * 100)


def check_cash_flow(m: AggregatedMetrics) -> Optional[Alert]:
    """Overspending and healthy savings are mutually exclusive."""
    if m.finance is None:
        return None
    income = m.finance.total_income
    expenses = m.finance.total_expenses

    if expenses > income * OVERSPEND_RATIO:
        percent = overspend_percent(income, expenses)
        if percent is None:
            message = "You have expenses but no recorded income. Review your budget."
        else:
            message = f"Expenses exceed income by {percent}%. Review your budget."
        return Alert(
            id="finance-overspend",
            severity=AlertSeverity.DANGER,
            title="Overspending",
            message=message,
            related_metric="finance",
        )

    if m.finance.net_cash_flow > 0 and expenses < income * SAVINGS_RATIO:
        return Alert(
            id="finance-saving",
            severity=AlertSeverity.SUCCESS,
            title="Great Savings!",
            message="You're saving more than 30% of your income!",
            related_metric="finance",
        )
    return None


def check_investment_result(m: AggregatedMetrics) -> Optional[Alert]:
    if m.finance is None:
        return None
    profit_loss = m.finance.investment_profit_loss

    if profit_loss < -INVESTMENT_ALERT_THRESHOLD:
        return Alert(
            id="investment-loss",
            severity=AlertSeverity.WARNING,
            title="Investment Loss",
            message=f"You have {format_try(abs(profit_loss))} in realized investment losses.",
            related_metric="investments",
        )
    if profit_loss > INVESTMENT_ALERT_THRESHOLD:
        return Alert(
            id="investment-profit",
            severity=AlertSeverity.SUCCESS,
            title="Investment Profit!",
            message=f"You have {format_try(profit_loss)} in realized investment profits!",
            related_metric="investments",
        )
    return None


ALERT_CHECKS: tuple[AlertCheck, ...] = (
    check_sleep_deficit,
    check_low_health_score,
    check_great_health,
    check_high_stress,
    check_low_motivation,
    check_great_mind,
    check_cash_flow,
    check_investment_result,
)


def generate_alerts(
    metrics: AggregatedMetrics,
    checks: tuple[AlertCheck, ...] = ALERT_CHECKS,
) -> list[Alert]:
    """Run every check in order and collect the alerts that fired."""
    alerts = []
    for check in checks:
        alert = check(metrics)
        if alert is not None:
            alerts.append(alert)
    return alerts
