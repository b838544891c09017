"""
Personal records router.

This router provides endpoints for:
- Listing records with display labels and summary stats
- Logging a completed set and returning the records it broke
- Rebuilding an exercise's records from stored history
"""
from datetime import datetime
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, Path, Query
from pydantic import BaseModel, Field

from api.deps import get_current_user, get_training_service
from api.errors import engine_errors
from backend.core.record_detector import format_record, record_one_rep_max, record_type_label
from backend.core.training_service import TrainingIntelligenceService
from domain.models import PerformanceSample, PersonalRecord, RecordType

router = APIRouter(
    prefix="/records",
    tags=["Records"],
)


# =============================================================================
# Response Models
# =============================================================================


class RecordItem(BaseModel):
    """A personal record with display fields."""
    exercise_id: str
    record_type: RecordType
    label: str
    value: float
    display: str
    supporting_reps: Optional[int] = None
    achieved_at: datetime
    previous_value: Optional[float] = None
    improvement: Optional[float] = None
    estimated_one_rep_max: Optional[float] = None


class RecordStats(BaseModel):
    """Aggregate record statistics."""
    total_records: int
    unique_exercises: int
    latest_record: Optional[RecordItem] = None
    by_type: Dict[str, int] = Field(default_factory=dict)
    improved_records: int = 0


class RecordsResponse(BaseModel):
    """Response model for the records list endpoint."""
    records: List[RecordItem]
    stats: RecordStats


class LogSampleResponse(BaseModel):
    """Records broken by a logged set."""
    is_record: bool
    new_records: List[RecordItem] = Field(default_factory=list)


class RebuildResponse(BaseModel):
    """Records updated by a history replay."""
    exercise_id: str
    updated: List[RecordItem] = Field(default_factory=list)


def _to_item(record: PersonalRecord, unit: str = "kg") -> RecordItem:
    return RecordItem(
        exercise_id=record.exercise_id,
        record_type=record.record_type,
        label=record_type_label(record.record_type),
        value=record.value,
        display=format_record(record, unit),
        supporting_reps=record.supporting_reps,
        achieved_at=record.achieved_at,
        previous_value=record.previous_value,
        improvement=record.improvement,
        estimated_one_rep_max=record_one_rep_max(record),
    )


# =============================================================================
# Endpoints
# =============================================================================


@router.get("", response_model=RecordsResponse)
def list_records(
    exercise_id: Optional[str] = Query(None, description="Filter by exercise"),
    record_type: Optional[RecordType] = Query(None, description="Filter by record type"),
    unit: str = Query("kg", max_length=10, description="Weight unit for display"),
    user_id: str = Depends(get_current_user),
    service: TrainingIntelligenceService = Depends(get_training_service),
) -> RecordsResponse:
    """
    Get personal records, most recent first, with summary stats.

    Stats always cover all of the user's records, regardless of filters.
    """
    with engine_errors():
        records = service.get_personal_records(
            user_id, exercise_id=exercise_id, record_type=record_type
        )
        summary = service.get_record_summary(user_id)

    latest = summary["latest_record"]
    return RecordsResponse(
        records=[_to_item(r, unit) for r in records],
        stats=RecordStats(
            total_records=summary["total_records"],
            unique_exercises=summary["unique_exercises"],
            latest_record=_to_item(latest, unit) if latest else None,
            by_type=summary["by_type"],
            improved_records=summary["improved_records"],
        ),
    )


@router.post("/samples", response_model=LogSampleResponse)
def log_sample(
    sample: PerformanceSample,
    user_id: str = Depends(get_current_user),
    service: TrainingIntelligenceService = Depends(get_training_service),
) -> LogSampleResponse:
    """
    Evaluate a completed set against current records.

    Returns the records it broke. Logging the same set twice returns no
    records the second time.
    """
    with engine_errors():
        accepted = service.log_sample(user_id, sample)

    return LogSampleResponse(
        is_record=bool(accepted),
        new_records=[_to_item(r) for r in accepted],
    )


@router.post("/exercises/{exercise_id}/rebuild", response_model=RebuildResponse)
def rebuild_records(
    exercise_id: str = Path(..., description="Canonical exercise ID"),
    user_id: str = Depends(get_current_user),
    service: TrainingIntelligenceService = Depends(get_training_service),
) -> RebuildResponse:
    """
    Replay stored history for an exercise and write any missing records.
    """
    with engine_errors():
        updated = service.rebuild_records(user_id, exercise_id)

    return RebuildResponse(
        exercise_id=exercise_id,
        updated=[_to_item(r) for r in updated],
    )
