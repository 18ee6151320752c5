"""
Avatar State Engine

Not a state machine: the state is recomputed from the latest aggregates
on every call and never persisted.

1. Start energy = morale = balance = 50
2. Sum the deltas of every matching rule
3. Status comes from the matching rule with the highest priority;
   on equal priority the earlier rule in the table wins
4. energy += (avg_health_score - 50) * 0.3, morale += (avg_mental_score - 50) * 0.3
5. Clamp each axis to 0-100, overall = mean of the three
6. No status-bearing rule matched -> status from the overall score band
"""

from typing import Iterable, Optional

from lifeos.avatar.rules import AVATAR_RULES, AvatarRule
from lifeos.models.avatar import AggregatedMetrics, AvatarState, AvatarStatus
from lifeos.numeric import clamp, round_half_up


BASE_AXIS_VALUE = 50
NEUTRAL_SCORE = 50
CONTINUOUS_FACTOR = 0.3

STATUS_MESSAGES: dict[AvatarStatus, str] = {
    AvatarStatus.THRIVING: "You're doing great! All metrics are positive.",
    AvatarStatus.ENERGETIC: "High energy, stable finances.",
    AvatarStatus.STABLE: "You're in a balanced phase. Keep it up!",
    AvatarStatus.TIRED: "You look a bit tired. Consider resting.",
    AvatarStatus.STRESSED: "Stress level is high. Take time to relax.",
    AvatarStatus.CRITICAL: "Warning! Multiple metrics are critical.",
    AvatarStatus.SICK: "You are unwell. Focus on recovery.",
}

# (minimum overall score, status), checked top-down
STATUS_BANDS: tuple[tuple[int, AvatarStatus], ...] = (
    (75, AvatarStatus.THRIVING),
    (60, AvatarStatus.ENERGETIC),
    (40, AvatarStatus.STABLE),
    (25, AvatarStatus.TIRED),
)


def status_for_score(overall_score: int) -> AvatarStatus:
    for minimum, status in STATUS_BANDS:
        if overall_score >= minimum:
            return status
    return AvatarStatus.CRITICAL


def calculate_avatar_state(
    metrics: AggregatedMetrics,
    rules: Iterable[AvatarRule] = AVATAR_RULES,
) -> AvatarState:
    energy = float(BASE_AXIS_VALUE)
    morale = float(BASE_AXIS_VALUE)
    balance = float(BASE_AXIS_VALUE)

    status: Optional[AvatarStatus] = None
    highest_priority = 0
    matched: list[str] = []

    for rule in rules:
        if not rule.matches(metrics):
            continue
        matched.append(rule.name)
        energy += rule.adjustments.energy
        morale += rule.adjustments.morale
        balance += rule.adjustments.balance
        # Strict comparison keeps the first rule on a priority tie
        if rule.status is not None and rule.priority > highest_priority:
            status = rule.status
            highest_priority = rule.priority

    if metrics.health is not None:
        energy += (metrics.health.avg_health_score - NEUTRAL_SCORE) * CONTINUOUS_FACTOR
    if metrics.psychology is not None:
        morale += (metrics.psychology.avg_mental_score - NEUTRAL_SCORE) * CONTINUOUS_FACTOR

    energy = clamp(energy, 0, 100)
    morale = clamp(morale, 0, 100)
    balance = clamp(balance, 0, 100)
    overall = round_half_up((energy + morale + balance) / 3)

    if status is None:
        status = status_for_score(overall)

    return AvatarState(
        energy=round_half_up(energy),
        morale=round_half_up(morale),
        balance=round_half_up(balance),
        overall_score=overall,
        status=status,
        status_message=STATUS_MESSAGES[status],
        matched_rules=matched,
    )
