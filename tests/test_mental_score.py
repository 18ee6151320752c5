"""Tests for the mental score."""

import itertools

import pytest
from datetime import date

from lifeos.models import DailyPsychologyInput, FatigueLevel, MotivationLevel, StressLevel
from lifeos.scoring import (
    InvalidInputError,
    calculate_mental_score,
    compute_mental_score,
    mental_state_label,
)


class TestMentalScore:
    """Tests for calculate_mental_score and compute_mental_score."""

    def test_worst_case_is_zero(self):
        """100 - 55 - 45 + 0 = 0"""
        assert calculate_mental_score("high", "low", "exhausted") == 0

    def test_calm_fresh_unmotivated_is_100(self):
        assert calculate_mental_score("calm", "low", "fresh") == 100

    def test_bonus_is_clamped_at_100(self):
        breakdown = compute_mental_score(
            DailyPsychologyInput(
                date=date(2024, 6, 1),
                stress_level="calm",
                motivation_level="high",
                fatigue_level="fresh",
            )
        )
        assert breakdown.raw_score == 145
        assert breakdown.final_score == 100

    def test_every_combination_within_bounds(self):
        for stress, motivation, fatigue in itertools.product(
            StressLevel, MotivationLevel, FatigueLevel
        ):
            score = calculate_mental_score(stress, motivation, fatigue)
            assert 0 <= score <= 100

    def test_breakdown_exposes_terms(self):
        breakdown = compute_mental_score(
            DailyPsychologyInput(
                date=date(2024, 6, 1),
                stress_level="mild",
                motivation_level="medium",
                fatigue_level="tired",
            )
        )
        assert breakdown.stress_penalty == 25
        assert breakdown.motivation_bonus == 25
        assert breakdown.fatigue_penalty == 20
        assert breakdown.final_score == 80

    def test_partial_input_yields_no_score(self):
        """Unlike health, a partial psychology log is not scored with defaults."""
        assert compute_mental_score(
            DailyPsychologyInput(date=date(2024, 6, 1), stress_level="calm")
        ) is None

    def test_rejects_unknown_level(self):
        with pytest.raises(InvalidInputError):
            calculate_mental_score("panic", "low", "fresh")


class TestMentalStateLabel:
    """Tests for mental_state_label."""

    @pytest.mark.parametrize(
        "score,label",
        [(100, "Excellent"), (80, "Excellent"), (79, "Good"), (40, "Fair"), (20, "Low"), (0, "Critical")],
    )
    def test_bands(self, score, label):
        assert mental_state_label(score) == label
