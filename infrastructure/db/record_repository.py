"""
Personal Record Repositories.

Two implementations of PersonalRecordRepository:

- SupabasePersonalRecordRepository: reads the personal_records table and
  writes through the `upsert_personal_record_if_better` Postgres function,
  which performs INSERT ... ON CONFLICT (user_id, exercise_id, record_type)
  DO UPDATE ... WHERE <new value is better> in a single statement and
  returns whether a row was written.
- InMemoryPersonalRecordRepository: process-local store guarded by one lock
  per record key, for single-instance deployments and tests.

Both make compare-and-swap the only write path, so concurrent evaluations of
the same (user, exercise, record type) cannot both overwrite a stale best.
"""
from collections import defaultdict
from threading import Lock
from typing import Dict, List, Optional
import logging

from supabase import Client

from application.exceptions import RecordStoreError
from domain.models import PersonalRecord, RecordKey

logger = logging.getLogger(__name__)

UPSERT_RPC = "upsert_personal_record_if_better"


class SupabasePersonalRecordRepository:
    """
    Supabase implementation of PersonalRecordRepository.

    Unlike the history adapters, failures here raise RecordStoreError:
    silently dropping a record write would lose data.
    """

    def __init__(self, client: Client):
        """
        Initialize with Supabase client.

        Args:
            client: Supabase client instance (injected)
        """
        self._client = client

    def get_records(
        self,
        user_id: str,
        exercise_id: Optional[str] = None,
    ) -> List[PersonalRecord]:
        """Get current records for a user."""
        try:
            query = self._client.table("personal_records") \
                .select("*") \
                .eq("user_id", user_id)
            if exercise_id:
                query = query.eq("exercise_id", exercise_id)
            result = query.order("achieved_at", desc=True).execute()
            return [PersonalRecord.model_validate(row) for row in result.data or []]
        except Exception as e:
            raise RecordStoreError(f"Failed to fetch personal records: {e}") from e

    def upsert_if_better(self, record: PersonalRecord) -> bool:
        """
        Atomically store `record` if it beats the stored one.

        Raises:
            RecordStoreError: If the RPC call fails or returns no data
        """
        try:
            response = self._client.rpc(
                UPSERT_RPC,
                {
                    "p_user_id": record.user_id,
                    "p_exercise_id": record.exercise_id,
                    "p_record_type": record.record_type.value,
                    "p_value": record.value,
                    "p_supporting_reps": record.supporting_reps,
                    "p_achieved_at": record.achieved_at.isoformat(),
                    "p_previous_value": record.previous_value,
                    "p_lower_is_better": record.record_type.lower_is_better,
                }
            ).execute()

            if response.data is None:
                raise RecordStoreError("RPC returned no data")

            return bool(response.data)
        except Exception as e:
            if isinstance(e, RecordStoreError):
                raise
            raise RecordStoreError(f"Atomic record upsert failed: {e}") from e


class InMemoryPersonalRecordRepository:
    """
    In-memory implementation of PersonalRecordRepository.

    Each record key has its own lock, so updates to different exercises or
    record types never wait on each other.
    """

    def __init__(self):
        self._records: Dict[RecordKey, PersonalRecord] = {}
        self._locks: Dict[RecordKey, Lock] = defaultdict(Lock)
        self._locks_guard = Lock()

    def _lock_for(self, key: RecordKey) -> Lock:
        with self._locks_guard:
            return self._locks[key]

    def get_records(
        self,
        user_id: str,
        exercise_id: Optional[str] = None,
    ) -> List[PersonalRecord]:
        """Get current records for a user, most recent first."""
        records = [
            r for r in list(self._records.values())
            if r.user_id == user_id and (exercise_id is None or r.exercise_id == exercise_id)
        ]
        records.sort(key=lambda r: r.achieved_at, reverse=True)
        return records

    def upsert_if_better(self, record: PersonalRecord) -> bool:
        """Store `record` if it beats the stored one for its key."""
        key = record.key
        with self._lock_for(key):
            current = self._records.get(key)
            if current is not None and not record.is_better_than(current):
                return False
            self._records[key] = record
            return True

    def clear(self) -> None:
        """
        Drop all records.

        Each key is removed under its own lock; the locks themselves are
        kept so a writer already holding one still excludes later writers.
        """
        for key in list(self._records):
            with self._lock_for(key):
                self._records.pop(key, None)
