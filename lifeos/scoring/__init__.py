"""Scoring package: lookup tables, sub-score calculators and composites."""

from lifeos.scoring.health import (
    calculate_active_recovery_bonus,
    calculate_activity_score,
    calculate_health_score,
    calculate_nutrition_score,
    calculate_overtraining_penalty,
    calculate_sleep_score,
    compute_health_score,
    get_illness_penalty,
)
from lifeos.scoring.mental import (
    calculate_mental_score,
    compute_mental_score,
    mental_state_label,
)
from lifeos.scoring.tables import (
    ACTIVITY_LABELS,
    CANONICAL_HEALTH_SCHEME,
    CANONICAL_SLEEP_BANDS,
    CANONICAL_WEIGHTS,
    ActivityScheme,
    HealthScoreScheme,
    HealthScoreWeights,
    InvalidInputError,
    SleepBand,
    get_health_scheme,
)

__all__ = [
    # Calculators
    "calculate_active_recovery_bonus",
    "calculate_activity_score",
    "calculate_health_score",
    "calculate_mental_score",
    "calculate_nutrition_score",
    "calculate_overtraining_penalty",
    "calculate_sleep_score",
    "compute_health_score",
    "compute_mental_score",
    "get_illness_penalty",
    "mental_state_label",
    # Tables
    "ACTIVITY_LABELS",
    "CANONICAL_HEALTH_SCHEME",
    "CANONICAL_SLEEP_BANDS",
    "CANONICAL_WEIGHTS",
    "ActivityScheme",
    "HealthScoreScheme",
    "HealthScoreWeights",
    "SleepBand",
    "get_health_scheme",
    # Errors
    "InvalidInputError",
]
