"""
Unit tests for training analytics helpers.
"""
from datetime import timedelta

import pytest

from application.exceptions import InvalidInputError
from backend.core.training_analytics import (
    calculate_adherence,
    consistency_score,
    implied_difficulty,
    regularity_score,
    rest_recommendation,
    workout_intensity,
)
from domain.models import FitnessLevel, TemplateExercise
from tests.fakes import NOW, make_template


@pytest.mark.unit
class TestAdherence:
    """Tests for calculate_adherence."""

    def test_fraction_completed(self):
        assert calculate_adherence(9, 12) == 0.75

    def test_nothing_planned(self):
        assert calculate_adherence(0, 0) == 1.0

    def test_clamped_to_one(self):
        assert calculate_adherence(15, 12) == 1.0

    def test_negative_counts_raise(self):
        with pytest.raises(InvalidInputError):
            calculate_adherence(-1, 3)


@pytest.mark.unit
class TestConsistency:
    """Tests for consistency and regularity scores."""

    def test_regular_frequent_training_scores_100(self):
        times = [NOW - timedelta(days=2 * i) for i in range(14)]
        assert consistency_score(times, 28) == 100

    def test_no_sessions_scores_zero(self):
        assert consistency_score([], 28) == 0

    def test_irregular_sparse_training_scores_between(self):
        times = [NOW, NOW - timedelta(days=1), NOW - timedelta(days=20)]
        score = consistency_score(times, 28)
        assert 0 < score < 100

    def test_single_session_is_regular(self):
        assert regularity_score([NOW]) == 1.0

    def test_invalid_window_raises(self):
        with pytest.raises(InvalidInputError):
            consistency_score([NOW], 0)


@pytest.mark.unit
class TestIntensity:
    """Tests for workout intensity and implied difficulty."""

    def test_default_prescription(self):
        # 3 x 10 -> 3.0, 60s rest -> +1.0
        assert workout_intensity(make_template("t", difficulty=None)) == pytest.approx(4.0)

    def test_load_adds_intensity(self):
        template = make_template("t", exercises=[
            TemplateExercise(exercise_id="squat", sets=3, reps=10, weight=100, rest_seconds=60),
        ])
        assert workout_intensity(template) == pytest.approx(6.0)

    def test_capped_at_ten(self):
        template = make_template("t", exercises=[
            TemplateExercise(exercise_id="squat", sets=10, reps=20, weight=300, rest_seconds=0),
        ])
        assert workout_intensity(template) == 10.0

    def test_empty_template(self):
        assert workout_intensity(make_template("t", exercises=[])) == 0.0

    def test_implied_difficulty_from_intensity(self):
        assert implied_difficulty(make_template("t", difficulty=None)) is FitnessLevel.INTERMEDIATE

    def test_explicit_difficulty_wins(self):
        template = make_template("t", difficulty=FitnessLevel.ADVANCED)
        assert implied_difficulty(template) is FitnessLevel.ADVANCED


@pytest.mark.unit
class TestRestRecommendation:
    """Tests for rest guidance tiers."""

    @pytest.mark.parametrize("intensity,hours,active", [
        (9.0, 48, True),
        (8.0, 48, True),
        (6.5, 36, True),
        (5.0, 24, False),
        (4.0, 12, False),
    ])
    def test_tiers(self, intensity, hours, active):
        rec = rest_recommendation(intensity)
        assert rec.minimum_hours == hours
        assert rec.active_recovery is active

    def test_high_intensity_nutrition(self):
        assert rest_recommendation(8.5).nutrition_focus == ["protein", "carbohydrates", "hydration"]

    @pytest.mark.parametrize("intensity,hours", [(5.0, 12), (6.5, 24), (3.0, 12), (8.0, 48)])
    def test_cardio_needs_less_rest(self, intensity, hours):
        assert rest_recommendation(intensity, "Cardio").minimum_hours == hours
