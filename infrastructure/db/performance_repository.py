"""
Supabase Performance History Repository Implementation.

Reads logged sets from the performance_samples table and completed workouts
from the workout_sessions table. Rows are validated into domain models; rows
that fail validation are skipped with a warning so one bad row does not hide
a user's whole history.
"""
from datetime import datetime
from typing import Any, Dict, List, Optional
import logging

from pydantic import ValidationError
from supabase import Client

from domain.models import PerformanceSample, WorkoutSession

logger = logging.getLogger(__name__)

SAMPLE_COLUMNS = (
    "exercise_id, weight, reps, duration_seconds, distance_meters, rpe, achieved_at"
)
SESSION_COLUMNS = "workout_id, completed_at, duration_minutes, category"


def _drop_nulls(row: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in row.items() if v is not None}


class SupabasePerformanceHistoryRepository:
    """
    Supabase implementation of PerformanceHistoryRepository.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def get_samples(
        self,
        user_id: str,
        exercise_id: Optional[str] = None,
        *,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> List[PerformanceSample]:
        """Get logged sets for a user, oldest first."""
        try:
            query = self._client.table("performance_samples") \
                .select(SAMPLE_COLUMNS) \
                .eq("user_id", user_id)
            if exercise_id:
                query = query.eq("exercise_id", exercise_id)
            if since:
                query = query.gte("achieved_at", since.isoformat())
            if until:
                query = query.lte("achieved_at", until.isoformat())
            result = query.order("achieved_at").execute()
        except Exception as e:
            logger.exception(f"Error fetching performance samples for {user_id}: {e}")
            return []

        samples: List[PerformanceSample] = []
        for row in result.data or []:
            try:
                samples.append(PerformanceSample.model_validate(_drop_nulls(row)))
            except ValidationError as e:
                logger.warning(f"Skipping invalid performance sample row: {e}")
        return samples

    def get_sessions(
        self,
        user_id: str,
        *,
        since: Optional[datetime] = None,
    ) -> List[WorkoutSession]:
        """Get completed workouts for a user, oldest first."""
        try:
            query = self._client.table("workout_sessions") \
                .select(SESSION_COLUMNS) \
                .eq("user_id", user_id)
            if since:
                query = query.gte("completed_at", since.isoformat())
            result = query.order("completed_at").execute()
        except Exception as e:
            logger.exception(f"Error fetching workout sessions for {user_id}: {e}")
            return []

        sessions: List[WorkoutSession] = []
        for row in result.data or []:
            try:
                sessions.append(WorkoutSession.model_validate(_drop_nulls(row)))
            except ValidationError as e:
                logger.warning(f"Skipping invalid workout session row: {e}")
        return sessions
