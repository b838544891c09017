"""
Recommendation Generator.

Ranks catalog workouts for a user profile:

1. Filter: templates need only equipment the user has, and must fit in
   available_minutes plus 10% slack. Templates whose every exercise targets
   an injured area are dropped too.
2. Score (0-100) as a weighted sum of:
   - goal alignment: a goal tag maps to the template category
     (e.g. weight_loss -> cardio/hiit)
   - difficulty fit: fitness level vs the template's implied difficulty
   - novelty: templates not performed recently score higher; the penalty
     decays linearly over the last 14 days
   - preference: category listed in the profile preferences, or one the
     user trained at least twice in the recent history
3. Explain: one reason per non-zero factor, plus the constraint
   adaptations applied to that template.
4. Sort by score descending; ties go to the less recently performed
   template (lower novelty decay), then to the workout ID.

Pure function over caller-supplied data: no I/O, no logging.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from application.exceptions import InvalidInputError
from backend.core.engine_config import RecommendationConfig
from backend.core.training_analytics import implied_difficulty
from domain.models import (
    CatalogExclusion,
    ProgressionAdjustment,
    ProgressionRationale,
    RecommendationResult,
    UserTrainingProfile,
    WorkoutSession,
    WorkoutTemplate,
    as_utc,
)


@dataclass
class ScoredTemplate:
    """Intermediate scoring result for one eligible template."""

    template: WorkoutTemplate
    score: float
    novelty_decay: float
    reasons: List[str] = field(default_factory=list)
    adaptations: List[str] = field(default_factory=list)


# =============================================================================
# Filtering
# =============================================================================


def missing_equipment(profile: UserTrainingProfile, template: WorkoutTemplate) -> List[str]:
    """Equipment the template needs that the user does not have (sorted)."""
    return sorted(template.required_equipment - profile.equipment)


def injured_exercises(profile: UserTrainingProfile, template: WorkoutTemplate) -> List[Tuple[str, List[str]]]:
    """(exercise name, injured areas it targets) for each conflicting exercise."""
    if not profile.injuries:
        return []
    conflicts = []
    for exercise in template.exercises:
        hit = sorted(profile.injuries.intersection(exercise.muscle_groups))
        if hit:
            conflicts.append((exercise.name or exercise.exercise_id, hit))
    return conflicts


def filter_catalog(
    profile: UserTrainingProfile,
    catalog: Iterable[WorkoutTemplate],
    config: Optional[RecommendationConfig] = None,
) -> Tuple[List[WorkoutTemplate], List[CatalogExclusion]]:
    """
    Split the catalog into eligible templates and exclusions with reasons.

    Returns:
        Tuple of (eligible templates, exclusions) in catalog order
    """
    config = config or RecommendationConfig()
    max_duration = profile.available_minutes * (1.0 + config.duration_slack)

    eligible: List[WorkoutTemplate] = []
    excluded: List[CatalogExclusion] = []
    for template in catalog:
        missing = missing_equipment(profile, template)
        if missing:
            excluded.append(CatalogExclusion(
                workout_id=template.id,
                reason=f"Excluded due to missing equipment: {', '.join(missing)}",
            ))
            continue

        if template.duration_minutes > max_duration:
            excluded.append(CatalogExclusion(
                workout_id=template.id,
                reason=(
                    f"Excluded because {template.duration_minutes} min exceeds "
                    f"available time ({profile.available_minutes} min)"
                ),
            ))
            continue

        conflicts = injured_exercises(profile, template)
        if template.exercises and len(conflicts) == len(template.exercises):
            excluded.append(CatalogExclusion(
                workout_id=template.id,
                reason="Excluded because every exercise targets an injured area",
            ))
            continue

        eligible.append(template)
    return eligible, excluded


# =============================================================================
# Scoring Factors
# =============================================================================


def goal_alignment(
    profile: UserTrainingProfile,
    template: WorkoutTemplate,
    config: RecommendationConfig,
) -> Optional[str]:
    """First goal (alphabetical) whose categories include the template's, or None."""
    for goal in sorted(profile.goals):
        categories = config.goal_categories.get(goal, frozenset({goal}))
        if template.category in categories:
            return goal
    return None


def difficulty_fit(profile: UserTrainingProfile, template: WorkoutTemplate) -> float:
    """1.0 for the same level, 0.5 one level apart, 0.0 two levels apart."""
    gap = abs(profile.fitness_level.rank - implied_difficulty(template).rank)
    return {0: 1.0, 1: 0.5}.get(gap, 0.0)


def recent_category_counts(history: Iterable[WorkoutSession]) -> Dict[str, int]:
    """Completed sessions per workout category; uncategorized sessions are skipped."""
    counts: Dict[str, int] = {}
    for session in history:
        if session.category:
            category = session.category.strip().lower()
            counts[category] = counts.get(category, 0) + 1
    return counts


def novelty_decay(
    template_id: str,
    history: Iterable[WorkoutSession],
    now: datetime,
    window_days: int = 14,
) -> float:
    """
    How recently the template was performed, 0-1.

    1.0 when performed at `now`, decaying linearly to 0.0 at `window_days`;
    0.0 when never performed within the window.
    """
    now = as_utc(now)
    decay = 0.0
    for session in history:
        if session.workout_id != template_id:
            continue
        days_since = (now - session.completed_at).total_seconds() / 86400.0
        if days_since < 0:
            days_since = 0.0
        decay = max(decay, 1.0 - days_since / window_days)
    return max(0.0, min(1.0, decay))


def _days_since_last(template_id: str, history: Sequence[WorkoutSession], now: datetime) -> Optional[int]:
    times = [s.completed_at for s in history if s.workout_id == template_id]
    if not times:
        return None
    return max(0, (as_utc(now) - max(times)).days)


# =============================================================================
# Calories
# =============================================================================


def age_multiplier(age: Optional[int]) -> float:
    """1.1 under 30, 1.0 under 50, 0.9 otherwise; 1.0 when age is unknown."""
    if age is None:
        return 1.0
    if age < 30:
        return 1.1
    if age < 50:
        return 1.0
    return 0.9


def estimate_calories(
    category: str,
    duration_minutes: float,
    age: Optional[int] = None,
    config: Optional[RecommendationConfig] = None,
) -> float:
    """
    Estimated kcal: base rate per hour for the category x hours x age multiplier.

    Rounded to one decimal place.
    """
    config = config or RecommendationConfig()
    base_rate = config.calorie_rates.get((category or "").lower(), config.default_calorie_rate)
    return round(base_rate * (duration_minutes / 60.0) * age_multiplier(age), 1)


# =============================================================================
# Generator
# =============================================================================


def _adaptations(profile: UserTrainingProfile, template: WorkoutTemplate) -> List[str]:
    adaptations: List[str] = []

    if template.duration_minutes > profile.available_minutes:
        adaptations.append(
            f"Shorten rest periods to fit {template.duration_minutes} min "
            f"into your {profile.available_minutes} min window"
        )

    for name, areas in injured_exercises(profile, template):
        adaptations.append(f"Skip {name} to protect {', '.join(areas)}")

    difficulty = implied_difficulty(template)
    if profile.fitness_level.rank < difficulty.rank:
        adaptations.append(
            f"Reduce sets by one per exercise for {profile.fitness_level.value} level"
        )
    elif profile.fitness_level.rank > difficulty.rank:
        adaptations.append(
            f"Add one set per exercise for {profile.fitness_level.value} level"
        )
    return adaptations


def score_template(
    profile: UserTrainingProfile,
    template: WorkoutTemplate,
    history: Sequence[WorkoutSession],
    now: datetime,
    config: RecommendationConfig,
    adjustments: Optional[Mapping[str, ProgressionAdjustment]] = None,
) -> ScoredTemplate:
    """Score one eligible template and build its explanation."""
    weights = config.weights
    score = 0.0
    reasons: List[str] = []

    goal = goal_alignment(profile, template, config)
    if goal is not None and weights.goal_alignment > 0:
        score += weights.goal_alignment
        reasons.append(f"Matches your {goal.replace('_', ' ')} goal ({template.category})")

    fit = difficulty_fit(profile, template)
    if fit > 0 and weights.difficulty_fit > 0:
        score += weights.difficulty_fit * fit
        level = profile.fitness_level.value
        if fit == 1.0:
            reasons.append(f"Difficulty matches your {level} level")
        else:
            reasons.append(f"Difficulty is close to your {level} level")

    decay = novelty_decay(template.id, history, now, config.novelty_window_days)
    novelty = 1.0 - decay
    if novelty > 0 and weights.novelty > 0:
        score += weights.novelty * novelty
        days = _days_since_last(template.id, history, now)
        if days is None:
            reasons.append("New workout for you")
        elif decay == 0.0:
            reasons.append(f"Not performed in the last {config.novelty_window_days} days")
        else:
            reasons.append(f"Last performed {days} days ago")

    if weights.preference > 0:
        if template.category in profile.preferences:
            score += weights.preference
            reasons.append(f"Matches your preference for {template.category}")
        else:
            count = recent_category_counts(history).get(template.category, 0)
            if count >= config.preferred_category_min_sessions:
                score += weights.preference
                reasons.append(f"You trained {template.category} {count} times recently")

    if adjustments:
        ready = sum(
            1 for e in template.exercises
            if e.exercise_id in adjustments
            and adjustments[e.exercise_id].rationale is ProgressionRationale.INCREASE_LOAD
        )
        if ready:
            reasons.append(f"Includes {ready} exercise(s) ready for a load increase")

    return ScoredTemplate(
        template=template,
        score=round(min(100.0, max(0.0, score)), 1),
        novelty_decay=round(decay, 4),
        reasons=reasons,
        adaptations=_adaptations(profile, template),
    )


def generate_recommendations(
    profile: UserTrainingProfile,
    history: Iterable[WorkoutSession],
    catalog: Iterable[WorkoutTemplate],
    limit: int = 3,
    *,
    now: Optional[datetime] = None,
    config: Optional[RecommendationConfig] = None,
    adjustments: Optional[Mapping[str, ProgressionAdjustment]] = None,
) -> List[RecommendationResult]:
    """
    Produce ranked workout recommendations.

    Args:
        profile: User training profile
        history: Recently completed workouts (novelty and category preference)
        catalog: Candidate workout templates
        limit: Maximum results (>= 1)
        now: Reference time for novelty (defaults to current UTC time)
        config: Weights, windows and calorie rates
        adjustments: Progression adjustments by exercise ID, used only to
            annotate reasons

    Returns:
        Results sorted by confidence_score descending; empty when nothing
        in the catalog is eligible

    Raises:
        InvalidInputError: If limit < 1
    """
    if limit is None or limit < 1:
        raise InvalidInputError(f"limit must be >= 1 (got {limit})")

    config = config or RecommendationConfig()
    now = as_utc(now or datetime.now(timezone.utc))
    sessions = list(history)

    eligible, _ = filter_catalog(profile, catalog, config)
    scored = [
        score_template(profile, template, sessions, now, config, adjustments)
        for template in eligible
    ]
    scored.sort(key=lambda s: (-s.score, s.novelty_decay, s.template.id))

    return [
        RecommendationResult(
            workout_id=s.template.id,
            confidence_score=s.score,
            reasons=s.reasons,
            adaptations=s.adaptations,
            estimated_calories=estimate_calories(
                s.template.category, s.template.duration_minutes, profile.age, config
            ),
            novelty_decay=s.novelty_decay,
        )
        for s in scored[:limit]
    ]


def exclusions_by_reason(exclusions: Iterable[CatalogExclusion]) -> Dict[str, List[str]]:
    """Group excluded workout IDs by reason."""
    grouped: Dict[str, List[str]] = {}
    for exclusion in exclusions:
        grouped.setdefault(exclusion.reason, []).append(exclusion.workout_id)
    return grouped
