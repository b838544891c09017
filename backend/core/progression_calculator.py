"""
Progression Calculator.

Translates two noisy signals, perceived effort (RPE) and plan adherence,
into one conservative load change per exercise per cycle.

Decision policy (thresholds from ProgressionRule, defaults shown):
- fewer than 2 samples                          -> insufficient_data
- adherence >= 0.8 and avg RPE(last 3) <= 7     -> increase_load (x1.025)
- avg RPE > 8.5 or adherence < 0.5              -> decrease_load (x0.95, reps - 1)
- otherwise                                     -> hold_load

This is a linear, explainable rule set, not a trained model.
"""
import math
from collections import OrderedDict
from typing import Dict, Iterable, List, Mapping, Optional

from application.exceptions import InvalidInputError
from backend.core.engine_config import ProgressionRule
from domain.models import (
    PerformanceSample,
    PersonalRecord,
    ProgressionAdjustment,
    ProgressionRationale,
    RecordType,
)


def round_to_increment(value: float, increment: float) -> float:
    """
    Round half-up to the nearest multiple of `increment` (e.g. 0.5 kg plates).

    The step count is snapped to 9 decimals first, so 110 * 1.025
    (112.74999999999999 in binary) still rounds up to 113.0.
    """
    if increment <= 0:
        return value
    steps = round(value / increment, 9)
    return round(math.floor(steps + 0.5) * increment, 4)


def average_rpe(samples: List[PerformanceSample]) -> float:
    """Mean effective RPE of the given samples (missing RPE counts as 7)."""
    if not samples:
        return 0.0
    return sum(s.effective_rpe for s in samples) / len(samples)


def group_by_exercise(
    history: Iterable[PerformanceSample],
) -> "OrderedDict[str, List[PerformanceSample]]":
    """Group samples per exercise, each group oldest first."""
    groups: "OrderedDict[str, List[PerformanceSample]]" = OrderedDict()
    for sample in history:
        groups.setdefault(sample.exercise_id, []).append(sample)
    for samples in groups.values():
        samples.sort(key=lambda s: s.achieved_at)
    return groups


def decide(
    adherence: float,
    avg_rpe: float,
    rule: ProgressionRule,
) -> ProgressionRationale:
    """Apply the increase / decrease / hold policy."""
    if adherence >= rule.increase_min_adherence and avg_rpe <= rule.increase_max_rpe:
        return ProgressionRationale.INCREASE_LOAD
    if avg_rpe > rule.decrease_rpe_above or adherence < rule.decrease_adherence_below:
        return ProgressionRationale.DECREASE_LOAD
    return ProgressionRationale.HOLD_LOAD


def _max_weight_records(
    records: Optional[Iterable[PersonalRecord]],
) -> Dict[str, float]:
    ceilings: Dict[str, float] = {}
    for record in records or []:
        if record.record_type is RecordType.MAX_WEIGHT:
            ceilings[record.exercise_id] = max(record.value, ceilings.get(record.exercise_id, 0.0))
    return ceilings


def adjust_exercise(
    exercise_id: str,
    samples: List[PerformanceSample],
    adherence: float,
    rule: ProgressionRule,
    ceiling: Optional[float] = None,
) -> ProgressionAdjustment:
    """
    Compute the adjustment for one exercise.

    Args:
        exercise_id: Exercise being progressed
        samples: That exercise's samples, oldest first
        adherence: Fraction of planned sessions completed (0-1)
        rule: Periodization rule
        ceiling: Current MAX_WEIGHT record, used to flag record attempts

    Returns:
        ProgressionAdjustment
    """
    baseline = samples[-1]
    if len(samples) < rule.min_samples:
        return ProgressionAdjustment(
            exercise_id=exercise_id,
            rationale=ProgressionRationale.INSUFFICIENT_DATA,
            baseline_weight=baseline.weight,
            baseline_reps=baseline.reps,
            average_rpe=None,
            sample_count=len(samples),
        )

    avg = average_rpe(samples[-rule.rpe_window:])
    rationale = decide(adherence, avg, rule)

    if rationale is ProgressionRationale.INCREASE_LOAD:
        target_weight = round_to_increment(
            baseline.weight * (1.0 + rule.load_increment), rule.weight_rounding
        )
        target_reps = baseline.reps
    elif rationale is ProgressionRationale.DECREASE_LOAD:
        target_weight = round_to_increment(
            baseline.weight * (1.0 - rule.load_decrement), rule.weight_rounding
        )
        target_reps = max(baseline.reps - rule.rep_decrement, rule.min_reps)
    else:
        target_weight = float(baseline.weight)
        target_reps = baseline.reps

    return ProgressionAdjustment(
        exercise_id=exercise_id,
        target_weight=target_weight,
        target_reps=target_reps,
        rationale=rationale,
        baseline_weight=baseline.weight,
        baseline_reps=baseline.reps,
        average_rpe=round(avg, 2),
        sample_count=len(samples),
        exceeds_record=ceiling is not None and target_weight > ceiling,
    )


def compute_adjustments(
    history: Iterable[PerformanceSample],
    adherence: float,
    progression_rule: Optional[ProgressionRule] = None,
    records: Optional[Iterable[PersonalRecord]] = None,
) -> List[ProgressionAdjustment]:
    """
    Compute next-session targets for every exercise in `history`.

    Args:
        history: Recent samples, any exercises, any order
        adherence: Fraction of planned sessions completed (0-1)
        progression_rule: Thresholds and increments (defaults if None)
        records: Current personal records; MAX_WEIGHT values act as a
            ceiling reference for flagging record attempts

    Returns:
        One ProgressionAdjustment per exercise, in order of first appearance.
        Empty history yields an empty list.

    Raises:
        InvalidInputError: If adherence is outside [0, 1]
    """
    if adherence is None or not 0.0 <= adherence <= 1.0:
        raise InvalidInputError(f"adherence must be within [0, 1] (got {adherence})")

    rule = progression_rule or ProgressionRule()
    ceilings = _max_weight_records(records)

    return [
        adjust_exercise(exercise_id, samples, adherence, rule, ceilings.get(exercise_id))
        for exercise_id, samples in group_by_exercise(history).items()
    ]


def adjustments_by_exercise(
    adjustments: Iterable[ProgressionAdjustment],
) -> Mapping[str, ProgressionAdjustment]:
    """Index adjustments by exercise ID."""
    return {a.exercise_id: a for a in adjustments}
