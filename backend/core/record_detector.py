"""
Record Detector.

Decides whether a completed set breaks any personal record and returns the
new or updated records:
- MAX_WEIGHT, MAX_REPS, MAX_VOLUME, MAX_DISTANCE: higher is better
- BEST_TIME: lower is better

Only strictly better values produce a record, so re-evaluating a sample that
was already applied is a no-op. "Not a record" is a normal outcome: an empty
list, never an error.

Persisting the result is the caller's job and must go through the record
store's atomic upsert_if_better, keyed by (user_id, exercise_id, record_type).
"""
from typing import Dict, Iterable, List, Mapping, Optional, Union

from application.exceptions import InvalidInputError
from backend.core.strength_estimator import MAX_FORMULA_REPS, estimate_one_rep_max
from domain.models import PerformanceSample, PersonalRecord, RecordType


CurrentRecords = Union[Mapping[RecordType, PersonalRecord], Iterable[PersonalRecord], None]


RECORD_TYPE_LABELS: Dict[RecordType, str] = {
    RecordType.MAX_WEIGHT: "Max Weight",
    RecordType.MAX_REPS: "Max Reps",
    RecordType.MAX_VOLUME: "Max Volume",
    RecordType.BEST_TIME: "Best Time",
    RecordType.MAX_DISTANCE: "Max Distance",
}


# =============================================================================
# Candidate Values
# =============================================================================


def candidate_value(record_type: RecordType, sample: PerformanceSample) -> Optional[float]:
    """
    The value a sample offers for a record type, or None if it is not eligible.

    - MAX_WEIGHT: weight, only for a completed rep with load on the bar
    - MAX_REPS: reps, only if > 0 (timed sets log reps as 0)
    - MAX_VOLUME: weight * reps
    - BEST_TIME: duration_seconds, only if > 0
    - MAX_DISTANCE: distance_meters, only if > 0
    """
    if record_type is RecordType.MAX_WEIGHT:
        if sample.reps >= 1 and sample.weight > 0:
            return float(sample.weight)
        return None
    if record_type is RecordType.MAX_REPS:
        return float(sample.reps) if sample.reps > 0 else None
    if record_type is RecordType.MAX_VOLUME:
        volume = sample.volume
        return volume if volume > 0 else None
    if record_type is RecordType.BEST_TIME:
        if sample.duration_seconds is not None and sample.duration_seconds > 0:
            return float(sample.duration_seconds)
        return None
    if record_type is RecordType.MAX_DISTANCE:
        if sample.distance_meters is not None and sample.distance_meters > 0:
            return float(sample.distance_meters)
        return None
    return None


def is_improvement(record_type: RecordType, candidate: float, current: Optional[float]) -> bool:
    """Strict comparison using the record type's ordering."""
    if current is None:
        return True
    if record_type.lower_is_better:
        return candidate < current
    return candidate > current


def index_records(
    current_records: CurrentRecords,
    user_id: Optional[str] = None,
    exercise_id: Optional[str] = None,
) -> Dict[RecordType, PersonalRecord]:
    """
    Key current records by type.

    Accepts either a mapping keyed by RecordType or any iterable of records;
    records for other users or exercises are ignored.
    """
    if current_records is None:
        return {}
    records = current_records.values() if isinstance(current_records, Mapping) else current_records

    indexed: Dict[RecordType, PersonalRecord] = {}
    for record in records:
        if user_id is not None and record.user_id != user_id:
            continue
        if exercise_id is not None and record.exercise_id != exercise_id:
            continue
        existing = indexed.get(record.record_type)
        if existing is None or record.is_better_than(existing):
            indexed[record.record_type] = record
    return indexed


# =============================================================================
# Detection
# =============================================================================


def evaluate_sample(
    user_id: str,
    exercise_id: str,
    sample: PerformanceSample,
    current_records: CurrentRecords = None,
) -> List[PersonalRecord]:
    """
    Evaluate one completed sample against the user's current best records.

    Args:
        user_id: Owner of the records
        exercise_id: Exercise the sample belongs to
        sample: Completed set
        current_records: Current records for (user_id, exercise_id)

    Returns:
        New or updated records, one per record type broken (may be empty).
        Each carries the superseded value as previous_value.

    Raises:
        InvalidInputError: If the sample belongs to a different exercise
    """
    if sample.exercise_id != exercise_id:
        raise InvalidInputError(
            f"sample is for exercise '{sample.exercise_id}', not '{exercise_id}'"
        )

    current = index_records(current_records, user_id, exercise_id)
    updated: List[PersonalRecord] = []

    for record_type in RecordType:
        value = candidate_value(record_type, sample)
        if value is None:
            continue

        existing = current.get(record_type)
        previous = existing.value if existing is not None else None
        if not is_improvement(record_type, value, previous):
            continue

        updated.append(PersonalRecord(
            user_id=user_id,
            exercise_id=exercise_id,
            record_type=record_type,
            value=value,
            supporting_reps=sample.reps if record_type.is_weight_type else None,
            achieved_at=sample.achieved_at,
            previous_value=previous,
        ))

    return updated


def replay_history(
    user_id: str,
    exercise_id: str,
    samples: Iterable[PerformanceSample],
    current_records: CurrentRecords = None,
) -> Dict[RecordType, PersonalRecord]:
    """
    Fold a sample history through the detector, oldest first.

    Used to backfill records for an exercise from stored history. Replaying
    the same history twice yields the same records.

    Returns:
        Best record per type after the replay
    """
    records = index_records(current_records, user_id, exercise_id)
    ordered = sorted(
        (s for s in samples if s.exercise_id == exercise_id),
        key=lambda s: s.achieved_at,
    )
    for sample in ordered:
        for record in evaluate_sample(user_id, exercise_id, sample, records):
            records[record.record_type] = record
    return records


# =============================================================================
# Display Helpers
# =============================================================================


def record_type_label(record_type: RecordType) -> str:
    """Human-readable label for a record type."""
    return RECORD_TYPE_LABELS.get(record_type, "Record")


def format_record(record: PersonalRecord, unit: str = "kg") -> str:
    """
    Format a record value for display.

    Examples:
        MAX_WEIGHT 120 with 5 reps -> "120kg x 5"
        BEST_TIME 452.5            -> "7:32"
        MAX_DISTANCE 5000          -> "5.00 km"
    """
    value = record.value
    shown = f"{value:g}"
    if record.record_type is RecordType.MAX_WEIGHT:
        reps = f" x {record.supporting_reps}" if record.supporting_reps else ""
        return f"{shown}{unit}{reps}"
    if record.record_type is RecordType.MAX_REPS:
        return f"{int(value)} reps"
    if record.record_type is RecordType.MAX_VOLUME:
        return f"{shown}{unit} total"
    if record.record_type is RecordType.BEST_TIME:
        total = int(value)
        return f"{total // 60}:{total % 60:02d}"
    if record.record_type is RecordType.MAX_DISTANCE:
        if value >= 1000:
            return f"{value / 1000:.2f} km"
        return f"{shown} m"
    return shown


def record_one_rep_max(record: PersonalRecord) -> Optional[float]:
    """
    Estimated 1RM implied by a MAX_WEIGHT record, when its reps are known.
    """
    if record.record_type is not RecordType.MAX_WEIGHT or not record.supporting_reps:
        return None
    if record.supporting_reps > MAX_FORMULA_REPS or record.value <= 0:
        return None
    return round(estimate_one_rep_max(record.value, record.supporting_reps), 1)


def latest_record(records: Iterable[PersonalRecord]) -> Optional[PersonalRecord]:
    """Most recently achieved record, or None."""
    latest: Optional[PersonalRecord] = None
    for record in records:
        if latest is None or record.achieved_at > latest.achieved_at:
            latest = record
    return latest


def summarize_records(records: Iterable[PersonalRecord]) -> Dict[str, object]:
    """
    Aggregate statistics for a user's records.

    Returns:
        Dict with total_records, unique_exercises, latest_record,
        counts per record type and the number of records that improved on a
        previous value.
    """
    records = list(records)
    by_type: Dict[str, int] = {}
    for record in records:
        by_type[record.record_type.value] = by_type.get(record.record_type.value, 0) + 1

    latest = latest_record(records)
    return {
        "total_records": len(records),
        "unique_exercises": len({r.exercise_id for r in records}),
        "latest_record": latest,
        "latest_achieved_at": latest.achieved_at if latest else None,
        "by_type": by_type,
        "improved_records": sum(1 for r in records if r.previous_value is not None),
    }

