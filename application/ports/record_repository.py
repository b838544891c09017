"""
Personal Record Repository Interface (Port).

The record store is the only shared mutable resource in the engine. Two sets
logged at the same moment for the same exercise must not both "win" against
the same stale record, so writes go through a single compare-and-swap
operation instead of read-then-write.
"""
from typing import List, Optional, Protocol

from domain.models import PersonalRecord


class PersonalRecordRepository(Protocol):
    """
    Abstract interface for personal record persistence.

    Records are keyed by (user_id, exercise_id, record_type).
    """

    def get_records(
        self,
        user_id: str,
        exercise_id: Optional[str] = None,
    ) -> List[PersonalRecord]:
        """
        Get current records for a user.

        Args:
            user_id: User ID
            exercise_id: Restrict to one exercise, or None for all

        Returns:
            List of PersonalRecord (at most one per key)
        """
        ...

    def upsert_if_better(self, record: PersonalRecord) -> bool:
        """
        Atomically store `record` if it beats the stored one for its key.

        "Better" follows the record type's ordering (lower is better for
        BEST_TIME, higher for everything else). The comparison and the write
        happen as one step.

        Args:
            record: Candidate record

        Returns:
            True if the record was stored, False if the stored value was
            equal or better

        Raises:
            RecordStoreError: If the store could not complete the operation
        """
        ...
