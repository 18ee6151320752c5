"""
Scoring Tables

DESIGN DECISION: Every score is driven by a lookup table or an ordered
rule list defined here, never by nested conditionals in the calculators.
This keeps each table testable on its own and makes a scoring change a
data change.

The product has shipped several scoring schemes over time. Exactly one
scheme is active per deployment (see get_health_scheme); alternates are
kept as named configuration variants and are never averaged together.

Alternate scheme (documented, not implemented): a 7-category weighting of
sleep duration 10%, sleep timing/regularity 15%, activity 20%,
nutrition 20%, hydration 10%, mental state 15%, extras 10%.
"""

import math
from decimal import Decimal
from enum import Enum
from typing import Optional, Type, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from lifeos.config import ScoringSettings
from lifeos.models.health import (
    MAX_ACTIVITY_LEVEL,
    MIN_ACTIVITY_LEVEL,
    IllnessStatus,
    MealQuality,
    ProcessedFoodLevel,
    WaterIntake,
)
from lifeos.models.psychology import FatigueLevel, MotivationLevel, StressLevel


class InvalidInputError(ValueError):
    """A value lies outside its declared domain (an upstream data bug)."""

    def __init__(self, field: str, value, message: Optional[str] = None):
        self.field = field
        self.value = value
        super().__init__(message or f"Invalid value for {field}: {value!r}")


E = TypeVar("E", bound=Enum)


def coerce_enum(enum_cls: Type[E], value, field: str) -> E:
    """Accept an enum member or its string value; reject anything else."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        allowed = [member.value for member in enum_cls]
        raise InvalidInputError(
            field, value, f"Invalid value for {field}: {value!r}. Allowed: {allowed}"
        ) from None


# =============================================================================
# SLEEP
# =============================================================================

class SleepBand(BaseModel):
    """
    One sleep rule: hours at (or above, when not inclusive) lower_bound
    score `score`. Bands are evaluated in order, first match wins.
    """
    model_config = ConfigDict(frozen=True)

    lower_bound: float = Field(ge=0)
    score: int = Field(ge=0, le=100)
    inclusive: bool = True

    def matches(self, hours: float) -> bool:
        if self.inclusive:
            return hours >= self.lower_bound
        return hours > self.lower_bound


# Reverse-U: 7-9h optimal, falling off on both sides.
CANONICAL_SLEEP_BANDS: tuple[SleepBand, ...] = (
    SleepBand(lower_bound=10, score=60, inclusive=False),  # > 10
    SleepBand(lower_bound=9, score=80),                    # [9, 10]
    SleepBand(lower_bound=7, score=100),                   # [7, 9)
    SleepBand(lower_bound=6, score=80),                    # [6, 7)
    SleepBand(lower_bound=5, score=60),                    # [5, 6)
    SleepBand(lower_bound=0, score=40),                    # < 5
)

MAX_SLEEP_HOURS = 24


# =============================================================================
# ACTIVITY
# =============================================================================

class ActivityScheme(str, Enum):
    """
    LINEAR: level x 20.
    SUSTAINABLE_OPTIMUM: level 4 is the optimum, level 5 is capped at 80
    to discourage overtraining.
    """
    LINEAR = "linear"
    SUSTAINABLE_OPTIMUM = "sustainable_optimum"


ACTIVITY_SCORE_TABLES: dict[ActivityScheme, dict[int, int]] = {
    ActivityScheme.LINEAR: {
        level: level * 20 for level in range(MIN_ACTIVITY_LEVEL, MAX_ACTIVITY_LEVEL + 1)
    },
    ActivityScheme.SUSTAINABLE_OPTIMUM: {1: 20, 2: 40, 3: 60, 4: 100, 5: 80},
}

ACTIVITY_LABELS: dict[int, str] = {
    1: "Almost no movement",
    2: "Light activity (short walks, household movement)",
    3: "Moderate activity (30-45 min walking)",
    4: "Active (sports, running, fitness)",
    5: "Intense training / very active day",
}

HEAVY_ACTIVITY_LEVEL = 4
MODERATE_ACTIVITY_LEVELS = frozenset({2, 3})


def validate_activity_level(level, field: str = "activity_level") -> int:
    # bool is an int subclass; True is not an activity level
    if isinstance(level, bool) or not isinstance(level, int):
        raise InvalidInputError(field, level)
    if not MIN_ACTIVITY_LEVEL <= level <= MAX_ACTIVITY_LEVEL:
        raise InvalidInputError(
            field,
            level,
            f"Invalid value for {field}: {level!r}. "
            f"Expected {MIN_ACTIVITY_LEVEL}-{MAX_ACTIVITY_LEVEL}",
        )
    return level


def validate_sleep_hours(hours) -> float:
    if isinstance(hours, bool) or not isinstance(hours, (int, float, Decimal)):
        raise InvalidInputError("sleep_hours", hours)
    value = float(hours)
    if math.isnan(value) or not 0 <= value <= MAX_SLEEP_HOURS:
        raise InvalidInputError(
            "sleep_hours", hours, f"Invalid value for sleep_hours: {hours!r}. Expected 0-24"
        )
    return value


# =============================================================================
# NUTRITION & ILLNESS
# =============================================================================

MEAL_SCORES: dict[MealQuality, int] = {
    MealQuality.POOR: 40,
    MealQuality.NORMAL: 70,
    MealQuality.GOOD: 100,
}

WATER_SCORES: dict[WaterIntake, int] = {
    WaterIntake.LOW: 40,
    WaterIntake.ADEQUATE: 70,
    WaterIntake.GOOD: 100,
}

# Magnitudes subtracted from the nutrition average
PROCESSED_FOOD_PENALTIES: dict[ProcessedFoodLevel, int] = {
    ProcessedFoodLevel.HIGH: 20,
    ProcessedFoodLevel.MEDIUM: 10,
    ProcessedFoodLevel.LOW: 0,
}

# Magnitudes subtracted from the composite health score
ILLNESS_PENALTIES: dict[IllnessStatus, int] = {
    IllnessStatus.NONE: 0,
    IllnessStatus.MILD: 10,
    IllnessStatus.SEVERE: 30,
}


# =============================================================================
# PSYCHOLOGY
# =============================================================================

STRESS_PENALTIES: dict[StressLevel, int] = {
    StressLevel.CALM: 0,
    StressLevel.MILD: 25,
    StressLevel.HIGH: 55,
}

MOTIVATION_BONUSES: dict[MotivationLevel, int] = {
    MotivationLevel.HIGH: 45,
    MotivationLevel.MEDIUM: 25,
    MotivationLevel.LOW: 0,
}

FATIGUE_PENALTIES: dict[FatigueLevel, int] = {
    FatigueLevel.FRESH: 0,
    FatigueLevel.TIRED: 20,
    FatigueLevel.EXHAUSTED: 45,
}

MENTAL_BASE_SCORE = 100

# (minimum score, label), highest first
MENTAL_STATE_LABELS: tuple[tuple[int, str], ...] = (
    (80, "Excellent"),
    (60, "Good"),
    (40, "Fair"),
    (20, "Low"),
    (0, "Critical"),
)


# =============================================================================
# DEFAULTS FOR ABSENT HEALTH INPUTS
# =============================================================================

DEFAULT_SLEEP_SCORE = 70
DEFAULT_ACTIVITY_SCORE = 60  # level 3
DEFAULT_MEAL_SCORE = 70
DEFAULT_WATER_SCORE = 70
DEFAULT_PROCESSED_FOOD_PENALTY = 0
DEFAULT_ILLNESS_PENALTY = 0


# =============================================================================
# COMPOSITE WEIGHTING
# =============================================================================

class HealthScoreWeights(BaseModel):
    """Category weights. Decimal so that the sum is exactly 1."""
    model_config = ConfigDict(frozen=True)

    sleep: Decimal = Field(ge=0, le=1)
    activity: Decimal = Field(ge=0, le=1)
    nutrition: Decimal = Field(ge=0, le=1)

    @property
    def total(self) -> Decimal:
        return self.sleep + self.activity + self.nutrition

    @model_validator(mode='after')
    def validate_sum(self) -> 'HealthScoreWeights':
        if self.total != Decimal("1"):
            raise ValueError(f"Health score weights must sum to 1, got {self.total}")
        return self


class HealthScoreScheme(BaseModel):
    """A complete, named health scoring configuration."""
    model_config = ConfigDict(frozen=True)

    name: str
    weights: HealthScoreWeights
    sleep_bands: tuple[SleepBand, ...] = CANONICAL_SLEEP_BANDS
    activity_scheme: ActivityScheme = ActivityScheme.LINEAR


CANONICAL_WEIGHTS = HealthScoreWeights(
    sleep=Decimal("0.40"),
    activity=Decimal("0.30"),
    nutrition=Decimal("0.30"),
)

CANONICAL_HEALTH_SCHEME = HealthScoreScheme(
    name="three-factor-v1",
    weights=CANONICAL_WEIGHTS,
)

SUSTAINABLE_HEALTH_SCHEME = HealthScoreScheme(
    name="three-factor-sustainable-v1",
    weights=CANONICAL_WEIGHTS,
    activity_scheme=ActivityScheme.SUSTAINABLE_OPTIMUM,
)

_SCHEMES_BY_ACTIVITY: dict[ActivityScheme, HealthScoreScheme] = {
    ActivityScheme.LINEAR: CANONICAL_HEALTH_SCHEME,
    ActivityScheme.SUSTAINABLE_OPTIMUM: SUSTAINABLE_HEALTH_SCHEME,
}


def get_health_scheme(settings: ScoringSettings) -> HealthScoreScheme:
    """The single scheme this deployment scores with."""
    return _SCHEMES_BY_ACTIVITY[ActivityScheme(settings.activity_scheme)]
