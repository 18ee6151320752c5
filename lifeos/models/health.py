"""
Health Models

Daily health input and the fully itemised health score breakdown.

DESIGN DECISION: Every daily health field is optional. Partial logging
still yields a usable score because the scoring layer applies documented
defaults. Out-of-domain values, however, are rejected at construction:
a wrong enum value or an activity level of 7 is an upstream bug, not a
missing value.
"""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class MealQuality(str, Enum):
    POOR = "poor"
    NORMAL = "normal"
    GOOD = "good"


class ProcessedFoodLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class WaterIntake(str, Enum):
    LOW = "low"
    ADEQUATE = "adequate"
    GOOD = "good"


class IllnessStatus(str, Enum):
    NONE = "none"
    MILD = "mild"
    SEVERE = "severe"


MIN_ACTIVITY_LEVEL = 1
MAX_ACTIVITY_LEVEL = 5


# =============================================================================
# INPUT
# =============================================================================

class DailyHealthInput(BaseModel):
    """
    One day of health tracking.

    recent_activity_history holds the activity levels of the days
    before `date`, oldest first. It is an explicit input so that the
    overtraining and recovery adjustments never read hidden state.
    """
    model_config = ConfigDict(frozen=True)

    date: dt.date = Field(
        ...,
        description="Day the record describes"
    )
    sleep_hours: Optional[float] = Field(
        default=None,
        ge=0,
        le=24,
        description="Hours slept the night before"
    )
    activity_level: Optional[int] = Field(
        default=None,
        ge=MIN_ACTIVITY_LEVEL,
        le=MAX_ACTIVITY_LEVEL,
        description="Ordinal activity level 1-5"
    )
    meal_quality: Optional[MealQuality] = None
    processed_food_level: Optional[ProcessedFoodLevel] = None
    water_intake: Optional[WaterIntake] = None
    illness_status: Optional[IllnessStatus] = None
    recent_activity_history: list[int] = Field(
        default_factory=list,
        description="Activity levels of the trailing days, oldest first"
    )

    @field_validator('recent_activity_history')
    @classmethod
    def validate_history_levels(cls, v: list[int]) -> list[int]:
        """Every history entry must be a valid activity level."""
        for level in v:
            if not MIN_ACTIVITY_LEVEL <= level <= MAX_ACTIVITY_LEVEL:
                raise ValueError(
                    f"Activity history contains invalid level {level}; "
                    f"expected {MIN_ACTIVITY_LEVEL}-{MAX_ACTIVITY_LEVEL}"
                )
        return v


# =============================================================================
# OUTPUT
# =============================================================================

class NutritionScore(BaseModel):
    """Nutrition sub-score with the lookups it was built from."""
    model_config = ConfigDict(frozen=True)

    meal_score: float
    water_score: float
    processed_food_penalty: float
    score: float = Field(ge=0, le=100)


class HealthScoreBreakdown(BaseModel):
    """
    Transparent health score.

    Each weighted component, penalty and bonus is exposed so a caller
    can render a "how is this calculated" explanation that adds up to
    final_score exactly.
    """
    model_config = ConfigDict(frozen=True)

    # Sub-scores (0-100)
    sleep_score: float = Field(ge=0, le=100)
    activity_score: float = Field(ge=0, le=100)
    nutrition_score: float = Field(ge=0, le=100)

    # Nutrition lookups
    meal_score: float
    water_score: float
    processed_food_penalty: float

    # Weighted components
    sleep_component: float
    activity_component: float
    nutrition_component: float
    weighted_score: float

    # Adjustments (magnitudes)
    illness_penalty: float = Field(ge=0)
    overtraining_penalty: float = Field(default=0, ge=0)
    active_recovery_bonus: float = Field(default=0, ge=0)

    raw_score: float
    final_score: int = Field(ge=0, le=100)

    defaulted_fields: list[str] = Field(
        default_factory=list,
        description="Input fields that were absent and scored with a default"
    )
