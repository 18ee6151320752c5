"""
Mental Score Calculators

mentalScore = 100 - stressPenalty - fatiguePenalty + motivationBonus,
clamped to 0-100.

The penalties alone can reach 100 (high stress + exhaustion). The
motivation bonus is what keeps a calm but unmotivated day from scoring 0.

IMPORTANT: A mental score needs all three inputs. A partially logged day
returns None (no score) rather than a guessed default. Health scoring
defaults missing fields; mental scoring does not. Keep it that way.
"""

from typing import Optional

from lifeos.models.psychology import (
    DailyPsychologyInput,
    FatigueLevel,
    MentalScoreBreakdown,
    MotivationLevel,
    StressLevel,
)
from lifeos.numeric import clamp
from lifeos.scoring.tables import (
    FATIGUE_PENALTIES,
    MENTAL_BASE_SCORE,
    MENTAL_STATE_LABELS,
    MOTIVATION_BONUSES,
    STRESS_PENALTIES,
    coerce_enum,
)


def _breakdown(stress, motivation, fatigue) -> MentalScoreBreakdown:
    stress_penalty = STRESS_PENALTIES[coerce_enum(StressLevel, stress, "stress_level")]
    motivation_bonus = MOTIVATION_BONUSES[
        coerce_enum(MotivationLevel, motivation, "motivation_level")
    ]
    fatigue_penalty = FATIGUE_PENALTIES[coerce_enum(FatigueLevel, fatigue, "fatigue_level")]

    raw = MENTAL_BASE_SCORE - stress_penalty - fatigue_penalty + motivation_bonus
    return MentalScoreBreakdown(
        stress_penalty=stress_penalty,
        motivation_bonus=motivation_bonus,
        fatigue_penalty=fatigue_penalty,
        raw_score=raw,
        final_score=clamp(raw, 0, 100),
    )


def calculate_mental_score(
    stress: StressLevel,
    motivation: MotivationLevel,
    fatigue: FatigueLevel,
) -> int:
    """Score a fully specified day. All three arguments are required."""
    return _breakdown(stress, motivation, fatigue).final_score


def compute_mental_score(
    psychology_input: DailyPsychologyInput,
) -> Optional[MentalScoreBreakdown]:
    """
    Score one day with every intermediate term.

    Returns None when any of stress, motivation or fatigue is missing.
    """
    if not psychology_input.is_complete:
        return None
    return _breakdown(
        psychology_input.stress_level,
        psychology_input.motivation_level,
        psychology_input.fatigue_level,
    )


def mental_state_label(score: float) -> str:
    for minimum, label in MENTAL_STATE_LABELS:
        if score >= minimum:
            return label
    return MENTAL_STATE_LABELS[-1][1]
