"""
Adaptive Workout Builder.

Assembles a one-off workout from the exercises found in the catalog:

1. Pool: every distinct exercise across the catalog templates (first
   occurrence wins), minus exercises that need equipment the user lacks or
   that target an injured area, narrowed to the requested focus areas.
2. Order: exercises with a progression target come first (increase, hold,
   then decrease), then those covering more focus areas, then catalog order.
3. Fill: exercises are added while the estimated time stays within the
   target duration, trimming sets when only part of an exercise fits, up
   to max_exercises. Fewer than min_exercises means no workout.
4. Prescribe: progression targets replace the template's default weight
   and reps; each exercise carries a note saying where its load came from.

Pure function over caller-supplied data: no I/O, no logging.
"""
from collections import Counter
from typing import Iterable, List, Mapping, Optional, Sequence, Tuple

from application.exceptions import InvalidInputError
from backend.core.engine_config import AdaptiveWorkoutConfig, RecommendationConfig
from backend.core.recommendation_generator import estimate_calories
from domain.models import (
    BODYWEIGHT_EQUIPMENT,
    AdaptiveExercise,
    AdaptiveWorkout,
    ProgressionAdjustment,
    ProgressionRationale,
    TemplateExercise,
    UserTrainingProfile,
    WorkoutTemplate,
)

# Exercises with these decisions are scheduled first, in this order
_RATIONALE_PRIORITY = {
    ProgressionRationale.INCREASE_LOAD: 0,
    ProgressionRationale.HOLD_LOAD: 1,
    ProgressionRationale.DECREASE_LOAD: 2,
}


def exercise_pool(
    catalog: Iterable[WorkoutTemplate],
) -> List[Tuple[TemplateExercise, str]]:
    """Distinct exercises in catalog order, each with its template's category."""
    seen = set()
    pool: List[Tuple[TemplateExercise, str]] = []
    for template in catalog:
        for exercise in template.exercises:
            if exercise.exercise_id in seen:
                continue
            seen.add(exercise.exercise_id)
            pool.append((exercise, template.category))
    return pool


def is_available(exercise: TemplateExercise, profile: Optional[UserTrainingProfile]) -> bool:
    """True when the user has the equipment and no injury conflicts."""
    if profile is None:
        return True
    needed = {e for e in exercise.equipment if e not in BODYWEIGHT_EQUIPMENT}
    if not needed <= profile.equipment:
        return False
    return not profile.injuries.intersection(exercise.muscle_groups)


def focus_coverage(exercise: TemplateExercise, focus_areas: Sequence[str]) -> int:
    """Number of focus areas the exercise trains."""
    return len(set(focus_areas).intersection(exercise.muscle_groups))


def set_seconds(reps: int, rest_seconds: int, config: AdaptiveWorkoutConfig) -> float:
    """Estimated length of one set: reps x seconds_per_rep plus its rest."""
    return reps * config.seconds_per_rep + rest_seconds


def prescribe(
    exercise: TemplateExercise,
    adjustment: Optional[ProgressionAdjustment],
) -> Tuple[Optional[float], int, str]:
    """(weight, reps, note) for an exercise, using its progression target when there is one."""
    if adjustment is None:
        return exercise.weight, exercise.reps, "Template prescription"

    rationale = adjustment.rationale
    if rationale is ProgressionRationale.INSUFFICIENT_DATA or adjustment.target_weight is None:
        return exercise.weight, exercise.reps, "Log more sets to unlock progression targets"

    weight = adjustment.target_weight
    reps = adjustment.target_reps or exercise.reps
    baseline = adjustment.baseline_weight
    if rationale is ProgressionRationale.INCREASE_LOAD:
        note = f"Load increase: {baseline:g} -> {weight:g}"
    elif rationale is ProgressionRationale.DECREASE_LOAD:
        note = f"Back off: {baseline:g} -> {weight:g} for {reps} reps"
    else:
        note = f"Hold at {weight:g} x {reps}"
    return weight, reps, note


def best_category(categories: Iterable[str], default: str) -> str:
    """Most common category; ties go to the alphabetically first."""
    counts = Counter(c for c in categories if c)
    if not counts:
        return default
    return min(counts, key=lambda c: (-counts[c], c))


def adaptive_insights(
    workout_exercises: Sequence[AdaptiveExercise],
    target_minutes: int,
    focus_areas: Sequence[str],
) -> List[str]:
    """Short human-readable notes about the generated workout."""
    insights: List[str] = []

    count = len(workout_exercises)
    if count >= 6:
        insights.append("Complete workout with a variety of exercises")
    elif count >= 4:
        insights.append("Focused, efficient workout")
    else:
        insights.append("Concentrated on key movements")

    progressed = sum(
        1 for e in workout_exercises
        if e.rationale is not None and e.rationale is not ProgressionRationale.INSUFFICIENT_DATA
    )
    if progressed:
        insights.append(f"Includes {progressed} progression target(s) from your recent sessions")

    if target_minutes <= 30:
        insights.append("Optimized for a short session")
    elif target_minutes >= 60:
        insights.append("Built for a full, challenging session")

    if focus_areas:
        insights.append(f"Targets: {', '.join(focus_areas)}")
    else:
        insights.append("Balanced session across muscle groups")
    return insights


def build_adaptive_workout(
    catalog: Iterable[WorkoutTemplate],
    *,
    target_minutes: int = 45,
    focus_areas: Optional[Iterable[str]] = None,
    profile: Optional[UserTrainingProfile] = None,
    adjustments: Optional[Mapping[str, ProgressionAdjustment]] = None,
    config: Optional[AdaptiveWorkoutConfig] = None,
    recommendation_config: Optional[RecommendationConfig] = None,
) -> Optional[AdaptiveWorkout]:
    """
    Build a workout from catalog exercises for the given time budget.

    Args:
        catalog: Workout templates whose exercises form the pool
        target_minutes: Session length to fill
        focus_areas: Muscle groups to restrict the pool to (any match)
        profile: Equipment, injuries and age; no filtering when None
        adjustments: Progression adjustments by exercise ID
        config: Selection and timing constants
        recommendation_config: Calorie rates

    Returns:
        AdaptiveWorkout, or None when fewer than min_exercises fit

    Raises:
        InvalidInputError: If target_minutes is outside the configured range
    """
    config = config or AdaptiveWorkoutConfig()
    if not config.min_target_minutes <= target_minutes <= config.max_target_minutes:
        raise InvalidInputError(
            f"target_minutes must be within [{config.min_target_minutes}, "
            f"{config.max_target_minutes}] (got {target_minutes})"
        )

    focus = sorted({str(a).strip().lower() for a in focus_areas or [] if str(a).strip()})
    adjustments = adjustments or {}

    candidates = [
        (exercise, category)
        for exercise, category in exercise_pool(catalog)
        if is_available(exercise, profile)
        and (not focus or focus_coverage(exercise, focus) > 0)
    ]
    if len(candidates) < config.min_exercises:
        return None

    def priority(indexed: Tuple[int, Tuple[TemplateExercise, str]]):
        index, (exercise, _) = indexed
        adjustment = adjustments.get(exercise.exercise_id)
        rank = _RATIONALE_PRIORITY.get(adjustment.rationale, 3) if adjustment else 3
        return (rank, -focus_coverage(exercise, focus), index)

    ordered = [c for _, c in sorted(enumerate(candidates), key=priority)]

    selected: List[AdaptiveExercise] = []
    categories: List[str] = []
    used_seconds = 0.0
    budget_seconds = target_minutes * 60
    for exercise, category in ordered:
        if len(selected) >= config.max_exercises:
            break
        adjustment = adjustments.get(exercise.exercise_id)
        weight, reps, note = prescribe(exercise, adjustment)

        per_set = set_seconds(reps, exercise.rest_seconds, config)
        sets = min(exercise.sets, int((budget_seconds - used_seconds) // per_set))
        if sets < 1:
            continue
        if sets < exercise.sets:
            note = f"{note}; trimmed to {sets} set(s) to fit {target_minutes} min"

        used_seconds += sets * per_set
        categories.append(category)
        selected.append(AdaptiveExercise(
            exercise_id=exercise.exercise_id,
            name=exercise.name,
            sets=sets,
            reps=reps,
            weight=weight,
            rest_seconds=exercise.rest_seconds,
            muscle_groups=list(exercise.muscle_groups),
            estimated_minutes=round(sets * per_set / 60.0, 1),
            rationale=adjustment.rationale if adjustment else None,
            note=note,
        ))

    if len(selected) < config.min_exercises:
        return None

    category = best_category(categories, config.default_category)
    used_minutes = used_seconds / 60.0
    age = profile.age if profile else None
    return AdaptiveWorkout(
        name=f"Adaptive {category.title()} Workout",
        category=category,
        target_minutes=target_minutes,
        estimated_minutes=round(used_minutes, 1),
        estimated_calories=estimate_calories(category, used_minutes, age, recommendation_config),
        focus_areas=focus,
        exercises=selected,
        insights=adaptive_insights(selected, target_minutes, focus),
    )


def adjustments_with_targets(
    adjustments: Iterable[ProgressionAdjustment],
    limit: int = 5,
) -> List[ProgressionAdjustment]:
    """Adjustments that carry a numeric target, increases first."""
    actionable = [a for a in adjustments if a.rationale in _RATIONALE_PRIORITY]
    actionable.sort(key=lambda a: (_RATIONALE_PRIORITY[a.rationale], a.exercise_id))
    return actionable[:limit]

