"""
Unit tests for TrainingIntelligenceService.

The service is wired to in-memory fakes with the clock pinned to NOW
(see tests/conftest.py).
"""
import logging

import pytest

from application.exceptions import InvalidInputError, RecordStoreError
from backend.core.strength_estimator import estimate_one_rep_max
from domain.models import RecordType, TemplateExercise
from tests.fakes import (
    NOW,
    make_profile,
    make_record,
    make_sample,
    make_session,
    make_template,
)

USER = "user-1"
BENCH = "barbell-bench-press"


# =============================================================================
# Strength
# =============================================================================


@pytest.mark.unit
class TestStrengthSummary:
    """Tests for get_strength_summary."""

    def test_summary_over_window(self, service, history_repo):
        history_repo.seed_samples(USER, [
            make_sample(BENCH, 120, 5, days_ago=100),
            make_sample(BENCH, 100, 5, days_ago=40),
            make_sample(BENCH, 110, 5, days_ago=5),
        ])

        summary = service.get_strength_summary(USER, BENCH, days=90)

        assert summary.current_one_rep_max == round(estimate_one_rep_max(110, 5), 1)
        assert summary.best_sample.weight == 110
        assert summary.trend_percent == 10.0
        assert summary.eligible_sets == 2
        assert [e.supporting_sample.weight for e in summary.history] == [110, 100]

    def test_no_eligible_sets(self, service, history_repo):
        history_repo.seed_samples(USER, [make_sample(BENCH, 0, 20, days_ago=1)])

        summary = service.get_strength_summary(USER, BENCH)

        assert summary.current_one_rep_max is None
        assert summary.best_sample is None
        assert summary.trend_percent == 0.0
        assert summary.history == []

    def test_invalid_window(self, service):
        with pytest.raises(InvalidInputError):
            service.get_strength_summary(USER, BENCH, days=0)


# =============================================================================
# Personal Records
# =============================================================================


@pytest.mark.unit
class TestLogSample:
    """Tests for log_sample."""

    def test_first_set_sets_weight_reps_and_volume(self, service, record_repo):
        records = service.log_sample(USER, make_sample(BENCH, 100, 5))

        assert {r.record_type for r in records} == {
            RecordType.MAX_WEIGHT, RecordType.MAX_REPS, RecordType.MAX_VOLUME,
        }
        assert len(record_repo.get_records(USER, BENCH)) == 3

    def test_repeat_set_is_not_a_record(self, service):
        service.log_sample(USER, make_sample(BENCH, 100, 5, days_ago=1))
        assert service.log_sample(USER, make_sample(BENCH, 100, 5)) == []

    def test_previous_value_recorded(self, service, record_repo):
        record_repo.seed([make_record(RecordType.MAX_WEIGHT, 110)])

        records = service.log_sample(USER, make_sample(BENCH, 115, 3))

        weight = next(r for r in records if r.record_type is RecordType.MAX_WEIGHT)
        assert weight.previous_value == 110
        assert weight.improvement == 5

    def test_lost_race_drops_record(self, service, record_repo):
        record_repo.simulate_concurrent_write(make_record(RecordType.MAX_WEIGHT, 130))

        records = service.log_sample(USER, make_sample(BENCH, 100, 5))

        assert RecordType.MAX_WEIGHT not in {r.record_type for r in records}
        stored = {r.record_type: r for r in record_repo.get_records(USER, BENCH)}
        assert stored[RecordType.MAX_WEIGHT].value == 130

    def test_store_failure_propagates(self, service, record_repo):
        record_repo.fail_with = "connection refused"
        with pytest.raises(RecordStoreError):
            service.log_sample(USER, make_sample(BENCH, 100, 5))


@pytest.mark.unit
class TestRebuildRecords:
    """Tests for rebuild_records."""

    @pytest.fixture
    def history(self, history_repo):
        history_repo.seed_samples(USER, [
            make_sample(BENCH, 100, 5, days_ago=30),
            make_sample(BENCH, 110, 3, days_ago=20),
            make_sample(BENCH, 90, 8, days_ago=10),
            make_sample("barbell-squat", 140, 5, days_ago=10),
        ])

    def test_backfills_best_values(self, service, record_repo, history):
        records = {r.record_type: r for r in service.rebuild_records(USER, BENCH)}

        assert records[RecordType.MAX_WEIGHT].value == 110
        assert records[RecordType.MAX_REPS].value == 8
        assert records[RecordType.MAX_VOLUME].value == 720
        assert all(r.exercise_id == BENCH for r in record_repo.get_records(USER))

    def test_idempotent(self, service, history):
        assert len(service.rebuild_records(USER, BENCH)) == 3
        assert service.rebuild_records(USER, BENCH) == []

    def test_keeps_better_stored_records(self, service, record_repo, history):
        record_repo.seed([make_record(RecordType.MAX_WEIGHT, 150)])

        records = service.rebuild_records(USER, BENCH)

        assert {r.record_type for r in records} == {RecordType.MAX_REPS, RecordType.MAX_VOLUME}


@pytest.mark.unit
class TestRecordQueries:
    """Tests for get_personal_records and get_record_summary."""

    @pytest.fixture(autouse=True)
    def records(self, record_repo):
        record_repo.seed([
            make_record(RecordType.MAX_WEIGHT, 120, days_ago=10, previous_value=110),
            make_record(RecordType.MAX_REPS, 12, days_ago=2),
            make_record(RecordType.MAX_WEIGHT, 160, exercise_id="barbell-squat", days_ago=5),
        ])

    def test_most_recent_first(self, service):
        records = service.get_personal_records(USER)
        assert [r.record_type for r in records] == [
            RecordType.MAX_REPS, RecordType.MAX_WEIGHT, RecordType.MAX_WEIGHT,
        ]

    def test_filters(self, service):
        assert len(service.get_personal_records(USER, exercise_id=BENCH)) == 2
        weights = service.get_personal_records(USER, record_type=RecordType.MAX_WEIGHT)
        assert {r.exercise_id for r in weights} == {BENCH, "barbell-squat"}

    def test_other_users_isolated(self, service):
        assert service.get_personal_records("someone-else") == []

    def test_summary(self, service):
        summary = service.get_record_summary(USER)
        assert summary["total_records"] == 3
        assert summary["unique_exercises"] == 2
        assert summary["improved_records"] == 1
        assert summary["latest_record"].record_type is RecordType.MAX_REPS


# =============================================================================
# Progression
# =============================================================================


@pytest.mark.unit
class TestProgressionTargets:
    """Tests for get_progression_targets."""

    @pytest.fixture(autouse=True)
    def samples(self, history_repo, profile_repo):
        profile_repo.seed(USER, make_profile(frequency_per_week=3))
        history_repo.seed_samples(USER, [
            make_sample(BENCH, 100, 5, rpe=6, days_ago=5),
            make_sample(BENCH, 100, 5, rpe=6, days_ago=2),
        ])

    def test_full_adherence_increases_load(self, service, history_repo):
        history_repo.seed_sessions(USER, [make_session(f"w{i}", days_ago=i * 2 + 1) for i in range(12)])

        targets = service.get_progression_targets(USER)

        assert targets.sessions_planned == 12
        assert targets.adherence == 1.0
        assert targets.adherence_derived is True
        assert targets.adjustments[0].target_weight == 102.5

    def test_low_adherence_decreases_load(self, service, history_repo):
        history_repo.seed_sessions(USER, [make_session(f"w{i}", days_ago=i + 1) for i in range(3)])

        targets = service.get_progression_targets(USER)

        assert targets.adherence == 0.25
        assert targets.adjustments[0].target_weight == 95.0

    def test_explicit_adherence(self, service):
        targets = service.get_progression_targets(USER, adherence=0.9)

        assert targets.adherence == 0.9
        assert targets.adherence_derived is False
        assert targets.adjustments[0].target_weight == 102.5

    def test_invalid_adherence(self, service):
        with pytest.raises(InvalidInputError):
            service.get_progression_targets(USER, adherence=1.5)

    def test_record_ceiling(self, service, record_repo):
        record_repo.seed([make_record(RecordType.MAX_WEIGHT, 101)])
        targets = service.get_progression_targets(USER, adherence=1.0)
        assert targets.adjustments[0].exceeds_record is True


# =============================================================================
# Recommendations
# =============================================================================


@pytest.mark.unit
class TestRecommendations:
    """Tests for get_recommendations."""

    @pytest.fixture(autouse=True)
    def catalog(self, catalog_repo):
        catalog_repo.seed([
            make_template("strength-a", "strength", 45, equipment=["barbell"]),
            make_template("hiit-b", "hiit", 30),
            make_template("cable-c", "strength", 40, equipment=["cable"]),
        ])

    def test_no_profile(self, service):
        assert service.get_recommendations(USER) is None

    def test_stored_profile(self, service, profile_repo):
        profile_repo.seed(USER, make_profile(goals=["muscle_gain"], equipment=["barbell"]))

        report = service.get_recommendations(USER, limit=5)

        assert [r.workout_id for r in report.recommendations] == ["strength-a", "hiit-b"]
        assert [e.workout_id for e in report.excluded] == ["cable-c"]
        assert report.catalog_size == 3

    def test_supplied_profile_overrides_stored(self, service, profile_repo):
        profile_repo.seed(USER, make_profile(equipment=[]))
        report = service.get_recommendations(
            USER, profile=make_profile(equipment=["cable", "barbell"])
        )
        assert report.excluded == []

    def test_recent_history_reduces_novelty(self, service, profile_repo, history_repo):
        profile_repo.seed(USER, make_profile(goals=["muscle_gain"], equipment=["barbell"]))
        history_repo.seed_sessions(USER, [make_session("strength-a", days_ago=7)])

        report = service.get_recommendations(USER)

        top = report.recommendations[0]
        assert top.workout_id == "strength-a"
        assert top.novelty_decay == pytest.approx(0.5)

    def test_invalid_limit(self, service):
        with pytest.raises(InvalidInputError):
            service.get_recommendations(USER, limit=0)

    def test_exclusions_logged_by_reason(self, service, profile_repo, caplog):
        profile_repo.seed(USER, make_profile(equipment=["barbell"]))

        with caplog.at_level(logging.DEBUG, logger="backend.core.training_service"):
            service.get_recommendations(USER)

        assert "Excluded due to missing equipment: cable: cable-c" in caplog.text


# =============================================================================
# Adaptive workouts
# =============================================================================


@pytest.mark.unit
class TestAdaptiveWorkout:
    """Tests for get_adaptive_workout."""

    @pytest.fixture(autouse=True)
    def catalog(self, catalog_repo):
        catalog_repo.seed([
            make_template("upper", "strength", 45, exercises=[
                TemplateExercise(exercise_id=BENCH, muscle_groups=["chest"], equipment=["barbell"], weight=90),
                TemplateExercise(exercise_id="push-up", muscle_groups=["chest"]),
                TemplateExercise(exercise_id="dumbbell-row", muscle_groups=["back"], equipment=["dumbbell"]),
            ]),
            make_template("lower", "strength", 45, exercises=[
                TemplateExercise(exercise_id="lunge", muscle_groups=["legs"]),
            ]),
        ])

    def test_uses_progression_targets_and_stored_profile(self, service, profile_repo, history_repo):
        profile_repo.seed(USER, make_profile(frequency_per_week=3, equipment=["barbell"]))
        history_repo.seed_samples(USER, [
            make_sample(BENCH, 100, 5, rpe=6, days_ago=5),
            make_sample(BENCH, 100, 5, rpe=6, days_ago=2),
        ])
        history_repo.seed_sessions(USER, [make_session(f"w{i}", days_ago=i * 2 + 1) for i in range(12)])

        report = service.get_adaptive_workout(USER, target_minutes=30)

        workout = report.workout
        assert [e.exercise_id for e in workout.exercises] == [BENCH, "push-up", "lunge"]
        assert (workout.exercises[0].weight, workout.exercises[0].reps) == (102.5, 5)
        assert [a.exercise_id for a in report.progression_targets] == [BENCH]

    def test_supplied_profile_overrides_stored(self, service, profile_repo):
        profile_repo.seed(USER, make_profile(equipment=[]))

        report = service.get_adaptive_workout(
            USER, profile=make_profile(equipment=["barbell", "dumbbell"])
        )

        assert len(report.workout.exercises) == 4
        assert report.progression_targets == []

    def test_no_workout_when_focus_too_narrow(self, service):
        report = service.get_adaptive_workout(USER, focus_areas=["back"])
        assert report.workout is None

    def test_invalid_target(self, service):
        with pytest.raises(InvalidInputError):
            service.get_adaptive_workout(USER, target_minutes=5)


# =============================================================================
# Insights
# =============================================================================


@pytest.mark.unit
class TestTrainingInsights:
    """Tests for get_training_insights."""

    def test_no_sessions(self, service):
        insights = service.get_training_insights(USER)

        assert insights.sessions_completed == 0
        assert insights.consistency_score == 0
        assert insights.adherence == 0.0
        assert insights.rest is None

    def test_rest_after_last_workout(self, service, history_repo, catalog_repo):
        catalog_repo.seed([make_template("bodyweight-circuit", difficulty=None)])
        history_repo.seed_sessions(USER, [
            make_session("unknown", days_ago=3),
            make_session("bodyweight-circuit", days_ago=1),
        ])

        insights = service.get_training_insights(USER, days=30)

        assert insights.last_workout_id == "bodyweight-circuit"
        assert insights.last_workout_intensity == 4.0
        assert insights.rest.minimum_hours == 12
        assert insights.sessions_planned == 13

    def test_last_workout_not_in_catalog(self, service, history_repo):
        history_repo.seed_sessions(USER, [make_session("gone", days_ago=1)])

        insights = service.get_training_insights(USER)

        assert insights.last_workout_id == "gone"
        assert insights.rest is None
