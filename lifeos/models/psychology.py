"""
Psychology Models

Unlike health inputs, a mental score needs all three dimensions.
The fields are optional here only so that partially logged days can be
represented; scoring such a day yields no score rather than a guess.
"""

import datetime as dt
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StressLevel(str, Enum):
    CALM = "calm"
    MILD = "mild"
    HIGH = "high"


class MotivationLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class FatigueLevel(str, Enum):
    FRESH = "fresh"
    TIRED = "tired"
    EXHAUSTED = "exhausted"


class DailyPsychologyInput(BaseModel):
    """One day of psychology tracking."""
    model_config = ConfigDict(frozen=True)

    date: dt.date
    stress_level: Optional[StressLevel] = None
    motivation_level: Optional[MotivationLevel] = None
    fatigue_level: Optional[FatigueLevel] = None

    @property
    def is_complete(self) -> bool:
        """All three dimensions were logged."""
        return (
            self.stress_level is not None
            and self.motivation_level is not None
            and self.fatigue_level is not None
        )


class MentalScoreBreakdown(BaseModel):
    """
    Transparent mental score.

    raw_score may fall outside 0-100 (penalties alone can reach 100);
    final_score is the clamped value.
    """
    model_config = ConfigDict(frozen=True)

    stress_penalty: int = Field(ge=0)
    motivation_bonus: int = Field(ge=0)
    fatigue_penalty: int = Field(ge=0)
    raw_score: int
    final_score: int = Field(ge=0, le=100)
