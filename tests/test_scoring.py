"""Tests for the health score calculators and composite."""

import pytest
from datetime import date
from decimal import Decimal

from pydantic import ValidationError

from lifeos.config import ScoringSettings
from lifeos.models import (
    DailyHealthInput,
    IllnessStatus,
    MealQuality,
    ProcessedFoodLevel,
    WaterIntake,
)
from lifeos.scoring import (
    ACTIVITY_LABELS,
    CANONICAL_HEALTH_SCHEME,
    CANONICAL_WEIGHTS,
    ActivityScheme,
    HealthScoreWeights,
    InvalidInputError,
    SleepBand,
    calculate_active_recovery_bonus,
    calculate_activity_score,
    calculate_health_score,
    calculate_nutrition_score,
    calculate_overtraining_penalty,
    calculate_sleep_score,
    compute_health_score,
    get_health_scheme,
    get_illness_penalty,
)


DAY = date(2024, 6, 1)


class TestSleepScore:
    """Tests for the reverse-U sleep bands."""

    @pytest.mark.parametrize("hours", [7, 7.5, 8, 8.99])
    def test_optimal_band_scores_100(self, hours):
        assert calculate_sleep_score(hours) == 100

    @pytest.mark.parametrize(
        "hours,expected",
        [
            (0, 40),
            (4.9, 40),
            (5, 60),
            (5.5, 60),
            (6, 80),
            (6.9, 80),
            (9, 80),
            (10, 80),
            (10.5, 60),
            (14, 60),
        ],
    )
    def test_band_edges(self, hours, expected):
        assert calculate_sleep_score(hours) == expected

    def test_rejects_negative_hours(self):
        with pytest.raises(InvalidInputError):
            calculate_sleep_score(-1)

    def test_rejects_more_than_a_day(self):
        with pytest.raises(InvalidInputError):
            calculate_sleep_score(25)

    def test_custom_band_table(self):
        """Bands are configuration: a custom table is evaluated first-match-wins."""
        bands = (SleepBand(lower_bound=8, score=90), SleepBand(lower_bound=0, score=10))
        assert calculate_sleep_score(8, bands) == 90
        assert calculate_sleep_score(7.9, bands) == 10


class TestActivityScore:
    """Tests for activity scoring schemes."""

    @pytest.mark.parametrize("level,expected", [(1, 20), (2, 40), (3, 60), (4, 80), (5, 100)])
    def test_linear_scheme(self, level, expected):
        assert calculate_activity_score(level) == expected

    def test_sustainable_scheme_caps_level_five(self):
        assert calculate_activity_score(4, ActivityScheme.SUSTAINABLE_OPTIMUM) == 100
        assert calculate_activity_score(5, ActivityScheme.SUSTAINABLE_OPTIMUM) == 80

    @pytest.mark.parametrize("level", [0, 6, 7, True, 3.5])
    def test_rejects_out_of_domain_level(self, level):
        with pytest.raises(InvalidInputError):
            calculate_activity_score(level)

    def test_every_level_has_a_label(self):
        assert sorted(ACTIVITY_LABELS) == [1, 2, 3, 4, 5]


class TestNutritionScore:
    """Tests for nutrition scoring."""

    def test_best_case(self):
        nutrition = calculate_nutrition_score(
            MealQuality.GOOD, WaterIntake.GOOD, ProcessedFoodLevel.LOW
        )
        assert nutrition.score == 100

    def test_processed_food_penalty_applied(self):
        nutrition = calculate_nutrition_score(
            MealQuality.NORMAL, WaterIntake.ADEQUATE, ProcessedFoodLevel.HIGH
        )
        assert nutrition.meal_score == 70
        assert nutrition.water_score == 70
        assert nutrition.processed_food_penalty == 20
        assert nutrition.score == 50

    def test_absent_fields_use_defaults(self):
        nutrition = calculate_nutrition_score()
        assert nutrition.score == 70

    def test_accepts_string_values(self):
        assert calculate_nutrition_score("poor", "low", "medium").score == 30

    def test_rejects_unknown_value(self):
        with pytest.raises(InvalidInputError) as exc_info:
            calculate_nutrition_score("excellent")
        assert exc_info.value.field == "meal_quality"


class TestIllnessAndHistory:
    """Tests for illness penalty, overtraining and active recovery."""

    def test_illness_penalties(self):
        assert get_illness_penalty(None) == 0
        assert get_illness_penalty(IllnessStatus.NONE) == 0
        assert get_illness_penalty(IllnessStatus.MILD) == 10
        assert get_illness_penalty(IllnessStatus.SEVERE) == 30

    def test_overtraining_needs_full_window_at_max(self):
        assert calculate_overtraining_penalty([5, 5, 5]) == 15
        assert calculate_overtraining_penalty([3, 5, 5, 5]) == 15
        assert calculate_overtraining_penalty([5, 4, 5]) == 0
        assert calculate_overtraining_penalty([5, 5]) == 0

    def test_overtraining_window_is_configurable(self):
        assert calculate_overtraining_penalty([5, 5], window=2, penalty=20) == 20

    def test_active_recovery_after_heavy_day(self):
        assert calculate_active_recovery_bonus([4], 2) == 5
        assert calculate_active_recovery_bonus([5], 3) == 5

    def test_no_recovery_bonus_when_ill(self):
        assert calculate_active_recovery_bonus([4], 2, IllnessStatus.MILD) == 0

    def test_no_recovery_bonus_without_heavy_day(self):
        assert calculate_active_recovery_bonus([3], 2) == 0
        assert calculate_active_recovery_bonus([4], 4) == 0
        assert calculate_active_recovery_bonus([], 2) == 0


class TestHealthScoreWeights:
    """Tests for composite weights."""

    def test_canonical_weights_sum_to_exactly_one(self):
        total = CANONICAL_WEIGHTS.sleep + CANONICAL_WEIGHTS.activity + CANONICAL_WEIGHTS.nutrition
        assert total == Decimal("1")

    def test_weights_not_summing_to_one_rejected(self):
        with pytest.raises(ValidationError):
            HealthScoreWeights(
                sleep=Decimal("0.5"), activity=Decimal("0.3"), nutrition=Decimal("0.3")
            )

    def test_scheme_selected_from_settings(self):
        linear = get_health_scheme(ScoringSettings(activity_scheme="linear"))
        sustainable = get_health_scheme(ScoringSettings(activity_scheme="sustainable_optimum"))
        assert linear == CANONICAL_HEALTH_SCHEME
        assert sustainable.activity_scheme == ActivityScheme.SUSTAINABLE_OPTIMUM
        assert sustainable.weights == linear.weights


class TestComputeHealthScore:
    """Tests for the composite health score."""

    def test_reference_day_scores_88(self, scoring_settings):
        """sleep 8, activity 3, good/good/low, not ill -> 40 + 18 + 30 = 88."""
        breakdown = compute_health_score(
            DailyHealthInput(
                date=DAY,
                sleep_hours=8,
                activity_level=3,
                meal_quality="good",
                water_intake="good",
                processed_food_level="low",
                illness_status="none",
            ),
            settings=scoring_settings,
        )
        assert breakdown.sleep_score == 100
        assert breakdown.activity_score == 60
        assert breakdown.nutrition_score == 100
        assert breakdown.sleep_component == pytest.approx(40)
        assert breakdown.activity_component == pytest.approx(18)
        assert breakdown.nutrition_component == pytest.approx(30)
        assert breakdown.weighted_score == pytest.approx(88)
        assert breakdown.illness_penalty == 0
        assert breakdown.final_score == 88
        assert breakdown.defaulted_fields == []

    def test_components_add_up_to_raw_score(self, scoring_settings):
        breakdown = compute_health_score(
            DailyHealthInput(
                date=DAY,
                sleep_hours=6,
                activity_level=4,
                meal_quality="normal",
                illness_status="mild",
                recent_activity_history=[5],
            ),
            settings=scoring_settings,
        )
        expected = (
            breakdown.sleep_component
            + breakdown.activity_component
            + breakdown.nutrition_component
            - breakdown.illness_penalty
            - breakdown.overtraining_penalty
            + breakdown.active_recovery_bonus
        )
        assert breakdown.raw_score == pytest.approx(expected)

    def test_empty_day_uses_defaults(self, scoring_settings):
        """70 x 0.4 + 60 x 0.3 + 70 x 0.3 = 67"""
        breakdown = compute_health_score(DailyHealthInput(date=DAY), settings=scoring_settings)
        assert breakdown.sleep_score == 70
        assert breakdown.activity_score == 60
        assert breakdown.nutrition_score == 70
        assert breakdown.final_score == 67
        assert "sleep_hours" in breakdown.defaulted_fields
        assert "activity_level" in breakdown.defaulted_fields

    def test_half_rounds_up(self, scoring_settings):
        """40 + 6 + 16.5 = 62.5 -> 63"""
        score = calculate_health_score(
            DailyHealthInput(
                date=DAY,
                sleep_hours=8,
                activity_level=1,
                meal_quality="poor",
                water_intake="adequate",
                processed_food_level="low",
            ),
            settings=scoring_settings,
        )
        assert score == 63

    def test_clamped_at_zero(self, scoring_settings):
        """16 + 6 + 6 - 30 = -2 -> 0"""
        breakdown = compute_health_score(
            DailyHealthInput(
                date=DAY,
                sleep_hours=2,
                activity_level=1,
                meal_quality="poor",
                water_intake="low",
                processed_food_level="high",
                illness_status="severe",
            ),
            settings=scoring_settings,
        )
        assert breakdown.raw_score < 0
        assert breakdown.final_score == 0

    def test_overtraining_penalty_applied(self, scoring_settings):
        breakdown = compute_health_score(
            DailyHealthInput(date=DAY, activity_level=5, recent_activity_history=[5, 5, 5]),
            settings=scoring_settings,
        )
        assert breakdown.overtraining_penalty == 15

    def test_history_adjustments_can_be_disabled(self):
        settings = ScoringSettings(history_adjustments_enabled=False)
        breakdown = compute_health_score(
            DailyHealthInput(date=DAY, activity_level=5, recent_activity_history=[5, 5, 5]),
            settings=settings,
        )
        assert breakdown.overtraining_penalty == 0

    def test_active_recovery_bonus_applied(self, scoring_settings):
        breakdown = compute_health_score(
            DailyHealthInput(date=DAY, activity_level=2, recent_activity_history=[4]),
            settings=scoring_settings,
        )
        assert breakdown.active_recovery_bonus == 5

    def test_sustainable_scheme(self):
        settings = ScoringSettings(activity_scheme="sustainable_optimum")
        breakdown = compute_health_score(
            DailyHealthInput(date=DAY, activity_level=5), settings=settings
        )
        assert breakdown.activity_score == 80
