"""Aggregation package: records -> 30-day AggregatedMetrics."""

from lifeos.aggregation.aggregator import (
    DEFAULT_WINDOW_DAYS,
    aggregate_finance,
    aggregate_health,
    aggregate_psychology,
    build_aggregated_metrics,
    net_worth_as_of,
    window_start,
)

__all__ = [
    "DEFAULT_WINDOW_DAYS",
    "aggregate_finance",
    "aggregate_health",
    "aggregate_psychology",
    "build_aggregated_metrics",
    "net_worth_as_of",
    "window_start",
]
