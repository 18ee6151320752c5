"""Tests for alert generation."""

from lifeos.avatar import generate_alerts, overspend_percent
from lifeos.models import (
    AggregatedMetrics,
    AlertSeverity,
    FinanceMetrics,
    HealthMetrics,
    PsychologyMetrics,
)


def finance(income, expenses, profit_loss=0):
    return FinanceMetrics(
        total_income=income,
        total_expenses=expenses,
        net_cash_flow=income - expenses,
        investment_profit_loss=profit_loss,
    )


def ids(metrics):
    return [alert.id for alert in generate_alerts(metrics)]


class TestFinanceAlerts:
    """Tests for overspend, savings and investment alerts."""

    def test_overspend_by_20_percent(self):
        alerts = generate_alerts(AggregatedMetrics(finance=finance(10000, 12000)))
        overspend = [a for a in alerts if a.id == "finance-overspend"]
        assert len(overspend) == 1
        assert overspend[0].severity == AlertSeverity.DANGER
        assert "20%" in overspend[0].message

    def test_overspend_percent(self):
        assert overspend_percent(10000, 12000) == 20
        assert overspend_percent(0, 12000) is None

    def test_overspend_without_income_has_no_percentage(self):
        alerts = generate_alerts(AggregatedMetrics(finance=finance(0, 500)))
        assert [a.id for a in alerts] == ["finance-overspend"]
        assert "%" not in alerts[0].message

    def test_small_overspend_below_threshold(self):
        assert "finance-overspend" not in ids(AggregatedMetrics(finance=finance(10000, 10500)))

    def test_savings_alert(self):
        assert ids(AggregatedMetrics(finance=finance(10000, 6000))) == ["finance-saving"]

    def test_investment_loss_and_profit(self):
        loss = generate_alerts(AggregatedMetrics(finance=finance(10000, 9000, -2500)))
        profit = generate_alerts(AggregatedMetrics(finance=finance(10000, 9000, 1500)))
        assert [a.id for a in loss] == ["investment-loss"]
        assert "₺2.500" in loss[0].message
        assert [a.id for a in profit] == ["investment-profit"]

    def test_small_investment_result_is_quiet(self):
        assert ids(AggregatedMetrics(finance=finance(10000, 9000, 500))) == []


class TestHealthAndPsychologyAlerts:
    """Tests for health and psychology alerts."""

    def test_sleep_and_low_score(self):
        metrics = AggregatedMetrics(
            health=HealthMetrics(avg_sleep=5.2, avg_activity=2, avg_health_score=45)
        )
        alerts = generate_alerts(metrics)
        assert [a.id for a in alerts] == ["health-sleep", "health-score"]
        assert "5.2 hours" in alerts[0].message

    def test_great_health(self):
        metrics = AggregatedMetrics(
            health=HealthMetrics(avg_sleep=8, avg_activity=4, avg_health_score=85)
        )
        assert ids(metrics) == ["health-great"]

    def test_unlogged_sleep_raises_no_sleep_alert(self):
        metrics = AggregatedMetrics(health=HealthMetrics(avg_health_score=60))
        assert ids(metrics) == []

    def test_high_stress_and_low_motivation(self):
        metrics = AggregatedMetrics(
            psychology=PsychologyMetrics(
                avg_mental_score=10,
                avg_stress_penalty=55,
                avg_motivation_bonus=0,
            )
        )
        assert ids(metrics) == ["psych-stress", "psych-motivation"]

    def test_great_mind(self):
        metrics = AggregatedMetrics(
            psychology=PsychologyMetrics(
                avg_mental_score=95,
                avg_stress_penalty=0,
                avg_motivation_bonus=45,
            )
        )
        assert ids(metrics) == ["psych-great"]


class TestAlertIndependence:
    """Alerts are a separate pass over the same metrics."""

    def test_no_metrics_no_alerts(self):
        assert generate_alerts(AggregatedMetrics()) == []

    def test_ids_are_stable_across_calls(self):
        metrics = AggregatedMetrics(finance=finance(10000, 12000))
        assert ids(metrics) == ids(metrics)
