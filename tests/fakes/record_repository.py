"""
Fake Personal Record Repository for Testing.

Behaves like the real store's compare-and-swap, and can simulate a store
outage or a write that lost a race against another request.
"""
from typing import Dict, List, Optional

from application.exceptions import RecordStoreError
from domain.models import PersonalRecord, RecordKey


class FakePersonalRecordRepository:
    """
    In-memory fake implementation of PersonalRecordRepository.

    Attributes:
        upsert_calls: Every record passed to upsert_if_better, in order
        fail_with: When set, every call raises RecordStoreError with this message
    """

    def __init__(self):
        self._records: Dict[RecordKey, PersonalRecord] = {}
        self.upsert_calls: List[PersonalRecord] = []
        self.fail_with: Optional[str] = None
        self._concurrent: List[PersonalRecord] = []

    def reset(self) -> None:
        """Clear all stored data and failure modes."""
        self._records.clear()
        self.upsert_calls.clear()
        self.fail_with = None
        self._concurrent.clear()

    def seed(self, records: List[PersonalRecord]) -> None:
        """Store records unconditionally."""
        for record in records:
            self._records[record.key] = record

    def simulate_concurrent_write(self, record: PersonalRecord) -> None:
        """Apply `record` right before the next upsert, as another request would."""
        self._concurrent.append(record)

    def _check(self) -> None:
        if self.fail_with:
            raise RecordStoreError(self.fail_with)

    def get_records(
        self,
        user_id: str,
        exercise_id: Optional[str] = None,
    ) -> List[PersonalRecord]:
        self._check()
        return [
            r for r in self._records.values()
            if r.user_id == user_id and (exercise_id is None or r.exercise_id == exercise_id)
        ]

    def upsert_if_better(self, record: PersonalRecord) -> bool:
        self._check()
        while self._concurrent:
            other = self._concurrent.pop(0)
            if other.is_better_than(self._records.get(other.key)):
                self._records[other.key] = other

        self.upsert_calls.append(record)
        if not record.is_better_than(self._records.get(record.key)):
            return False
        self._records[record.key] = record
        return True
