"""
Performance History Repository Interface (Port).

Read-only access to a user's logged sets and completed workouts. The engine
only ever reads history; writing samples belongs to the workout logging
system that owns them.
"""
from datetime import datetime
from typing import List, Optional, Protocol

from domain.models import PerformanceSample, WorkoutSession


class PerformanceHistoryRepository(Protocol):
    """
    Abstract interface for performance history access.

    Implementations must return samples and sessions oldest first.
    """

    def get_samples(
        self,
        user_id: str,
        exercise_id: Optional[str] = None,
        *,
        since: Optional[datetime] = None,
        until: Optional[datetime] = None,
    ) -> List[PerformanceSample]:
        """
        Get logged sets for a user.

        Args:
            user_id: User ID
            exercise_id: Restrict to one exercise, or None for all
            since: Only samples achieved at or after this time
            until: Only samples achieved at or before this time

        Returns:
            List of PerformanceSample, oldest first (empty if none)
        """
        ...

    def get_sessions(
        self,
        user_id: str,
        *,
        since: Optional[datetime] = None,
    ) -> List[WorkoutSession]:
        """
        Get completed workouts for a user.

        Args:
            user_id: User ID
            since: Only sessions completed at or after this time

        Returns:
            List of WorkoutSession, oldest first (empty if none)
        """
        ...
