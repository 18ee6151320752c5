"""
Health Score Calculators

Sub-score calculators for sleep, activity, nutrition and illness, and
the composite health score built from them.

healthScore = sleep x W_sleep + activity x W_activity + nutrition x W_nutrition
              - illnessPenalty - overtrainingPenalty + activeRecoveryBonus

rounded half-up and clamped to 0-100.

DESIGN DECISION: Absent health fields fall back to documented defaults so
a partially logged day still gets a score. This deliberately differs from
the mental score, which refuses to score a partial day.
"""

from decimal import Decimal
from typing import Optional, Sequence

from lifeos.config import ScoringSettings, get_settings
from lifeos.models.health import (
    MAX_ACTIVITY_LEVEL,
    DailyHealthInput,
    HealthScoreBreakdown,
    IllnessStatus,
    MealQuality,
    NutritionScore,
    ProcessedFoodLevel,
    WaterIntake,
)
from lifeos.numeric import clamp, round_half_up
from lifeos.scoring.tables import (
    ACTIVITY_SCORE_TABLES,
    CANONICAL_SLEEP_BANDS,
    DEFAULT_ACTIVITY_SCORE,
    DEFAULT_ILLNESS_PENALTY,
    DEFAULT_MEAL_SCORE,
    DEFAULT_PROCESSED_FOOD_PENALTY,
    DEFAULT_SLEEP_SCORE,
    DEFAULT_WATER_SCORE,
    HEAVY_ACTIVITY_LEVEL,
    ILLNESS_PENALTIES,
    MEAL_SCORES,
    MODERATE_ACTIVITY_LEVELS,
    PROCESSED_FOOD_PENALTIES,
    WATER_SCORES,
    ActivityScheme,
    HealthScoreScheme,
    InvalidInputError,
    SleepBand,
    coerce_enum,
    get_health_scheme,
    validate_activity_level,
    validate_sleep_hours,
)


# =============================================================================
# SUB-SCORES
# =============================================================================

def calculate_sleep_score(
    hours: float,
    bands: Sequence[SleepBand] = CANONICAL_SLEEP_BANDS,
) -> int:
    """Score hours slept against the ordered band table."""
    value = validate_sleep_hours(hours)
    for band in bands:
        if band.matches(value):
            return band.score
    raise InvalidInputError("sleep_hours", hours, f"No sleep band covers {hours!r} hours")


def calculate_activity_score(
    level: int,
    scheme: ActivityScheme = ActivityScheme.LINEAR,
) -> int:
    return ACTIVITY_SCORE_TABLES[scheme][validate_activity_level(level)]


def calculate_nutrition_score(
    meal_quality: Optional[MealQuality] = None,
    water_intake: Optional[WaterIntake] = None,
    processed_food_level: Optional[ProcessedFoodLevel] = None,
) -> NutritionScore:
    """
    Average of the meal and water lookups minus the processed food
    penalty, clamped to 0-100.
    """
    meal_score = (
        MEAL_SCORES[coerce_enum(MealQuality, meal_quality, "meal_quality")]
        if meal_quality is not None else DEFAULT_MEAL_SCORE
    )
    water_score = (
        WATER_SCORES[coerce_enum(WaterIntake, water_intake, "water_intake")]
        if water_intake is not None else DEFAULT_WATER_SCORE
    )
    processed_penalty = (
        PROCESSED_FOOD_PENALTIES[
            coerce_enum(ProcessedFoodLevel, processed_food_level, "processed_food_level")
        ]
        if processed_food_level is not None else DEFAULT_PROCESSED_FOOD_PENALTY
    )

    raw = Decimal(meal_score + water_score) / 2 - processed_penalty
    return NutritionScore(
        meal_score=meal_score,
        water_score=water_score,
        processed_food_penalty=processed_penalty,
        score=float(clamp(raw, Decimal(0), Decimal(100))),
    )


def get_illness_penalty(illness_status: Optional[IllnessStatus]) -> int:
    if illness_status is None:
        return DEFAULT_ILLNESS_PENALTY
    return ILLNESS_PENALTIES[coerce_enum(IllnessStatus, illness_status, "illness_status")]


def calculate_overtraining_penalty(
    history: Sequence[int],
    window: int = 3,
    penalty: int = 15,
) -> int:
    """Penalty when each of the last `window` days was at max activity."""
    for level in history:
        validate_activity_level(level, "recent_activity_history")
    if window <= 0 or len(history) < window:
        return 0
    if all(level == MAX_ACTIVITY_LEVEL for level in history[-window:]):
        return penalty
    return 0


def calculate_active_recovery_bonus(
    history: Sequence[int],
    today_level: Optional[int],
    illness_status: Optional[IllnessStatus] = None,
    bonus: int = 5,
) -> int:
    """Bonus for a moderate day right after a heavy one, while not ill."""
    if not history or today_level is None:
        return 0
    previous = validate_activity_level(history[-1], "recent_activity_history")
    today = validate_activity_level(today_level)
    if illness_status is not None and (
        coerce_enum(IllnessStatus, illness_status, "illness_status") != IllnessStatus.NONE
    ):
        return 0
    if previous >= HEAVY_ACTIVITY_LEVEL and today in MODERATE_ACTIVITY_LEVELS:
        return bonus
    return 0


# =============================================================================
# COMPOSITE
# =============================================================================

def compute_health_score(
    health_input: DailyHealthInput,
    scheme: Optional[HealthScoreScheme] = None,
    settings: Optional[ScoringSettings] = None,
) -> HealthScoreBreakdown:
    """
    Score one day and return every intermediate term.

    `scheme` defaults to the deployment's configured scheme.
    """
    settings = settings or get_settings().scoring
    scheme = scheme or get_health_scheme(settings)
    defaulted: list[str] = []

    if health_input.sleep_hours is not None:
        sleep_score = calculate_sleep_score(health_input.sleep_hours, scheme.sleep_bands)
    else:
        sleep_score = DEFAULT_SLEEP_SCORE
        defaulted.append("sleep_hours")

    if health_input.activity_level is not None:
        activity_score = calculate_activity_score(
            health_input.activity_level, scheme.activity_scheme
        )
    else:
        activity_score = DEFAULT_ACTIVITY_SCORE
        defaulted.append("activity_level")

    for field in ("meal_quality", "water_intake", "processed_food_level", "illness_status"):
        if getattr(health_input, field) is None:
            defaulted.append(field)

    nutrition = calculate_nutrition_score(
        health_input.meal_quality,
        health_input.water_intake,
        health_input.processed_food_level,
    )
    illness_penalty = get_illness_penalty(health_input.illness_status)

    overtraining_penalty = 0
    recovery_bonus = 0
    if settings.history_adjustments_enabled and health_input.recent_activity_history:
        overtraining_penalty = calculate_overtraining_penalty(
            health_input.recent_activity_history,
            window=settings.overtraining_window_days,
            penalty=settings.overtraining_penalty,
        )
        recovery_bonus = calculate_active_recovery_bonus(
            health_input.recent_activity_history,
            health_input.activity_level,
            health_input.illness_status,
            bonus=settings.active_recovery_bonus,
        )

    weights = scheme.weights
    sleep_component = Decimal(sleep_score) * weights.sleep
    activity_component = Decimal(activity_score) * weights.activity
    nutrition_component = Decimal(str(nutrition.score)) * weights.nutrition
    weighted = sleep_component + activity_component + nutrition_component

    raw = weighted - illness_penalty - overtraining_penalty + recovery_bonus
    final_score = clamp(round_half_up(raw), 0, 100)

    return HealthScoreBreakdown(
        sleep_score=sleep_score,
        activity_score=activity_score,
        nutrition_score=nutrition.score,
        meal_score=nutrition.meal_score,
        water_score=nutrition.water_score,
        processed_food_penalty=nutrition.processed_food_penalty,
        sleep_component=float(sleep_component),
        activity_component=float(activity_component),
        nutrition_component=float(nutrition_component),
        weighted_score=float(weighted),
        illness_penalty=illness_penalty,
        overtraining_penalty=overtraining_penalty,
        active_recovery_bonus=recovery_bonus,
        raw_score=float(raw),
        final_score=final_score,
        defaulted_fields=defaulted,
    )


def calculate_health_score(
    health_input: DailyHealthInput,
    scheme: Optional[HealthScoreScheme] = None,
    settings: Optional[ScoringSettings] = None,
) -> int:
    """Final health score only."""
    return compute_health_score(health_input, scheme, settings).final_score
