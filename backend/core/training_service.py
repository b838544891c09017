"""
Training Intelligence Service.

Composes the repositories with the training engine:
- Strength summaries (best estimated 1RM, trend, recent estimates)
- Personal record detection on new sets, with atomic persistence
- Record backfill from stored history
- Next-session progression targets
- Ranked workout recommendations
- Adaptive workouts built from catalog exercises
- Consistency and recovery insights

The engine functions in backend/core are pure; all I/O and logging happens
here.
"""
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, List, Optional
import logging

from application.exceptions import InvalidInputError
from application.ports import (
    PerformanceHistoryRepository,
    PersonalRecordRepository,
    TrainingProfileRepository,
    WorkoutCatalogRepository,
)
from backend.core.adaptive_workout import adjustments_with_targets, build_adaptive_workout
from backend.core.engine_config import DEFAULT_ENGINE_CONFIG, EngineConfig
from backend.core.progression_calculator import adjustments_by_exercise, compute_adjustments
from backend.core.recommendation_generator import (
    exclusions_by_reason,
    filter_catalog,
    generate_recommendations,
)
from backend.core.record_detector import evaluate_sample, replay_history, summarize_records
from backend.core.strength_estimator import (
    OneRepMaxEstimate,
    best_estimate,
    eligible_samples,
    estimate_history,
    trend,
)
from backend.core.training_analytics import (
    RestRecommendation,
    calculate_adherence,
    consistency_score,
    rest_recommendation,
    workout_intensity,
)
from domain.models import (
    AdaptiveWorkout,
    CatalogExclusion,
    ExerciseHistory,
    PerformanceSample,
    PersonalRecord,
    ProgressionAdjustment,
    RecommendationResult,
    RecordType,
    UserTrainingProfile,
    as_utc,
)

logger = logging.getLogger(__name__)

# Planned frequency assumed when a user has no profile
DEFAULT_FREQUENCY_PER_WEEK = 3


# =============================================================================
# Response DTOs
# =============================================================================


@dataclass
class StrengthSummary:
    """Estimated strength for one exercise over a lookback window."""
    exercise_id: str
    days: int
    current_one_rep_max: Optional[float]
    best_sample: Optional[PerformanceSample]
    trend_percent: float
    eligible_sets: int
    history: List[OneRepMaxEstimate] = field(default_factory=list)


@dataclass
class ProgressionTargets:
    """Progression adjustments plus the adherence they were computed from."""
    adherence: float
    adherence_derived: bool
    sessions_completed: int
    sessions_planned: int
    adjustments: List[ProgressionAdjustment] = field(default_factory=list)


@dataclass
class RecommendationReport:
    """Ranked recommendations and the catalog entries that were filtered out."""
    recommendations: List[RecommendationResult]
    excluded: List[CatalogExclusion] = field(default_factory=list)
    catalog_size: int = 0


@dataclass
class AdaptiveWorkoutReport:
    """Generated workout (None when too few exercises fit) and the targets behind it."""
    workout: Optional[AdaptiveWorkout]
    progression_targets: List[ProgressionAdjustment] = field(default_factory=list)


@dataclass
class TrainingInsights:
    """Consistency and recovery guidance over a window."""
    days: int
    sessions_completed: int
    sessions_planned: int
    adherence: float
    consistency_score: int
    last_workout_id: Optional[str] = None
    last_workout_intensity: Optional[float] = None
    rest: Optional[RestRecommendation] = None


# =============================================================================
# Training Intelligence Service
# =============================================================================


class TrainingIntelligenceService:
    """
    Service for strength, record, progression and recommendation queries.

    All engine constants come from the injected EngineConfig; `clock` is
    injectable so windows can be pinned in tests.
    """

    def __init__(
        self,
        history_repo: PerformanceHistoryRepository,
        profile_repo: TrainingProfileRepository,
        catalog_repo: WorkoutCatalogRepository,
        record_repo: PersonalRecordRepository,
        config: Optional[EngineConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the training intelligence service.

        Args:
            history_repo: Logged sets and completed workouts
            profile_repo: User training profiles
            catalog_repo: Workout templates
            record_repo: Personal record store (atomic upsert)
            config: Engine constants (defaults if None)
            clock: Returns the current time (UTC now if None)
        """
        self._history_repo = history_repo
        self._profile_repo = profile_repo
        self._catalog_repo = catalog_repo
        self._record_repo = record_repo
        self._config = config or DEFAULT_ENGINE_CONFIG
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    @property
    def config(self) -> EngineConfig:
        return self._config

    def _now(self) -> datetime:
        return as_utc(self._clock())

    def _planned_sessions(self, profile: Optional[UserTrainingProfile], days: int) -> int:
        frequency = profile.frequency_per_week if profile else DEFAULT_FREQUENCY_PER_WEEK
        return max(1, round(frequency * days / 7.0))

    # -------------------------------------------------------------------------
    # Strength
    # -------------------------------------------------------------------------

    def get_strength_summary(
        self,
        user_id: str,
        exercise_id: str,
        *,
        days: int = 90,
    ) -> StrengthSummary:
        """
        Summarize estimated 1RM for an exercise.

        Args:
            user_id: User ID
            exercise_id: Canonical exercise ID
            days: Lookback window for samples

        Returns:
            StrengthSummary; current_one_rep_max is None when no eligible
            sets exist in the window
        """
        if days < 1:
            raise InvalidInputError(f"days must be >= 1 (got {days})")

        now = self._now()
        strength = self._config.strength
        history = ExerciseHistory.from_samples(
            user_id,
            exercise_id,
            self._history_repo.get_samples(user_id, exercise_id, since=now - timedelta(days=days)),
        )
        eligible = eligible_samples(history.samples, strength)
        best = best_estimate(eligible, strength)

        return StrengthSummary(
            exercise_id=exercise_id,
            days=days,
            current_one_rep_max=round(best.value, 1) if best else None,
            best_sample=best.supporting_sample if best else None,
            trend_percent=round(
                trend(eligible, strength.trend_window_days, now=now, config=strength), 1
            ),
            eligible_sets=len(eligible),
            history=estimate_history(eligible, limit=strength.history_size, config=strength),
        )

    # -------------------------------------------------------------------------
    # Personal Records
    # -------------------------------------------------------------------------

    def log_sample(self, user_id: str, sample: PerformanceSample) -> List[PersonalRecord]:
        """
        Evaluate a completed set and persist any records it breaks.

        Each candidate goes through the store's upsert_if_better; a candidate
        that lost a race against a concurrent write is dropped.

        Returns:
            Records the store accepted (may be empty)

        Raises:
            RecordStoreError: If the record store fails
        """
        current = self._record_repo.get_records(user_id, sample.exercise_id)
        candidates = evaluate_sample(user_id, sample.exercise_id, sample, current)

        accepted: List[PersonalRecord] = []
        for record in candidates:
            if self._record_repo.upsert_if_better(record):
                accepted.append(record)
                logger.info(
                    f"New {record.record_type.value} record for {user_id}/"
                    f"{record.exercise_id}: {record.value} (previous {record.previous_value})"
                )
            else:
                logger.debug(
                    f"Record candidate {record.record_type.value} for {user_id}/"
                    f"{record.exercise_id} superseded by a concurrent write"
                )
        return accepted

    def rebuild_records(self, user_id: str, exercise_id: str) -> List[PersonalRecord]:
        """
        Backfill records for an exercise by replaying its stored history.

        Safe to run repeatedly: only values better than the stored records
        are written.

        Returns:
            Records the store accepted (may be empty)
        """
        history = ExerciseHistory.from_samples(
            user_id, exercise_id, self._history_repo.get_samples(user_id, exercise_id)
        )
        current = {
            r.record_type: r for r in self._record_repo.get_records(user_id, exercise_id)
        }
        replayed = replay_history(user_id, exercise_id, history.samples, current)

        accepted: List[PersonalRecord] = []
        for record_type, record in replayed.items():
            if not record.is_better_than(current.get(record_type)):
                continue
            if self._record_repo.upsert_if_better(record):
                accepted.append(record)

        logger.info(
            f"Rebuilt records for {user_id}/{exercise_id} from {len(history)} samples: "
            f"{len(accepted)} updated"
        )
        return accepted

    def get_personal_records(
        self,
        user_id: str,
        *,
        exercise_id: Optional[str] = None,
        record_type: Optional[RecordType] = None,
    ) -> List[PersonalRecord]:
        """Current records, most recent first, optionally filtered."""
        records = self._record_repo.get_records(user_id, exercise_id)
        if record_type is not None:
            records = [r for r in records if r.record_type is record_type]
        return sorted(records, key=lambda r: r.achieved_at, reverse=True)

    def get_record_summary(self, user_id: str) -> Dict[str, object]:
        """Totals, unique exercises and latest record for a user."""
        return summarize_records(self._record_repo.get_records(user_id))

    # -------------------------------------------------------------------------
    # Progression
    # -------------------------------------------------------------------------

    def get_progression_targets(
        self,
        user_id: str,
        *,
        adherence: Optional[float] = None,
        days: int = 28,
    ) -> ProgressionTargets:
        """
        Next-session targets for every exercise trained in the window.

        Args:
            user_id: User ID
            adherence: Fraction of planned sessions completed; derived from
                completed sessions vs the profile's weekly frequency when None
            days: Lookback window

        Raises:
            InvalidInputError: If adherence is outside [0, 1] or days < 1
        """
        if days < 1:
            raise InvalidInputError(f"days must be >= 1 (got {days})")

        since = self._now() - timedelta(days=days)
        sessions = self._history_repo.get_sessions(user_id, since=since)
        planned = self._planned_sessions(self._profile_repo.get_profile(user_id), days)

        derived = adherence is None
        if derived:
            adherence = calculate_adherence(len(sessions), planned)

        samples = self._history_repo.get_samples(user_id, since=since)
        adjustments = compute_adjustments(
            samples,
            adherence,
            self._config.progression,
            records=self._record_repo.get_records(user_id),
        )
        return ProgressionTargets(
            adherence=round(adherence, 3),
            adherence_derived=derived,
            sessions_completed=len(sessions),
            sessions_planned=planned,
            adjustments=adjustments,
        )

    # -------------------------------------------------------------------------
    # Recommendations
    # -------------------------------------------------------------------------

    def get_recommendations(
        self,
        user_id: str,
        *,
        limit: int = 3,
        profile: Optional[UserTrainingProfile] = None,
    ) -> Optional[RecommendationReport]:
        """
        Ranked workout recommendations for a user.

        Args:
            user_id: User ID
            limit: Maximum results (>= 1)
            profile: Profile to use instead of the stored one

        Returns:
            RecommendationReport, or None if the user has no profile and
            none was supplied
        """
        if limit < 1:
            raise InvalidInputError(f"limit must be >= 1 (got {limit})")

        profile = profile or self._profile_repo.get_profile(user_id)
        if profile is None:
            logger.warning(f"No training profile for {user_id}")
            return None

        rec_config = self._config.recommendation
        now = self._now()
        history = self._history_repo.get_sessions(
            user_id, since=now - timedelta(days=rec_config.novelty_window_days)
        )
        catalog = self._catalog_repo.list_templates()

        _, excluded = filter_catalog(profile, catalog, rec_config)
        for reason, workout_ids in exclusions_by_reason(excluded).items():
            logger.debug(f"{reason}: {', '.join(workout_ids)}")

        targets = self.get_progression_targets(user_id)
        results = generate_recommendations(
            profile,
            history,
            catalog,
            limit,
            now=now,
            config=rec_config,
            adjustments=adjustments_by_exercise(targets.adjustments),
        )
        logger.info(
            f"Generated {len(results)} recommendations for {user_id} "
            f"({len(excluded)} of {len(catalog)} templates excluded)"
        )
        return RecommendationReport(
            recommendations=results,
            excluded=excluded,
            catalog_size=len(catalog),
        )

    def get_adaptive_workout(
        self,
        user_id: str,
        *,
        target_minutes: int = 45,
        focus_areas: Optional[List[str]] = None,
        profile: Optional[UserTrainingProfile] = None,
    ) -> AdaptiveWorkoutReport:
        """
        Assemble a one-off workout from catalog exercises.

        Progression targets from the user's recent sets set the loads; the
        stored profile (or the one supplied) filters equipment and injuries.

        Raises:
            InvalidInputError: If target_minutes is outside the configured range
        """
        profile = profile or self._profile_repo.get_profile(user_id)
        targets = self.get_progression_targets(user_id)
        workout = build_adaptive_workout(
            self._catalog_repo.list_templates(),
            target_minutes=target_minutes,
            focus_areas=focus_areas,
            profile=profile,
            adjustments=adjustments_by_exercise(targets.adjustments),
            config=self._config.adaptive,
            recommendation_config=self._config.recommendation,
        )
        if workout is None:
            logger.info(
                f"Not enough exercises for an adaptive workout for {user_id} "
                f"(focus={focus_areas or []}, {target_minutes} min)"
            )
        else:
            logger.info(
                f"Built adaptive workout for {user_id}: "
                f"{len(workout.exercises)} exercises, {workout.estimated_minutes} min"
            )
        return AdaptiveWorkoutReport(
            workout=workout,
            progression_targets=adjustments_with_targets(targets.adjustments),
        )

    # -------------------------------------------------------------------------
    # Insights
    # -------------------------------------------------------------------------

    def get_training_insights(self, user_id: str, *, days: int = 30) -> TrainingInsights:
        """
        Consistency score, adherence and rest guidance for the latest workout.
        """
        if days < 1:
            raise InvalidInputError(f"days must be >= 1 (got {days})")

        sessions = self._history_repo.get_sessions(
            user_id, since=self._now() - timedelta(days=days)
        )
        planned = self._planned_sessions(self._profile_repo.get_profile(user_id), days)

        insights = TrainingInsights(
            days=days,
            sessions_completed=len(sessions),
            sessions_planned=planned,
            adherence=round(calculate_adherence(len(sessions), planned), 3),
            consistency_score=consistency_score([s.completed_at for s in sessions], days),
        )
        if not sessions:
            return insights

        last = max(sessions, key=lambda s: s.completed_at)
        insights.last_workout_id = last.workout_id
        template = self._catalog_repo.get_template(last.workout_id)
        if template is None:
            logger.warning(f"Last workout {last.workout_id} not found in catalog")
            return insights

        intensity = workout_intensity(template)
        insights.last_workout_intensity = round(intensity, 1)
        insights.rest = rest_recommendation(intensity, last.category or template.category)
        return insights
