"""
Tests for the fake repository implementations.

The fakes stand in for Supabase in service and API tests, so their
filtering and compare-and-swap behavior must match the real adapters.
"""
from datetime import timedelta

import pytest

from application.exceptions import RecordStoreError
from domain.models import RecordType
from tests.fakes import (
    NOW,
    FakePerformanceHistoryRepository,
    FakePersonalRecordRepository,
    FakeTrainingProfileRepository,
    FakeWorkoutCatalogRepository,
    make_profile,
    make_record,
    make_sample,
    make_session,
    make_template,
)

# All tests in this module are pure logic tests - mark as unit
pytestmark = pytest.mark.unit


class TestFakePerformanceHistoryRepository:

    def test_filters_samples(self):
        repo = FakePerformanceHistoryRepository()
        repo.seed_samples("user-1", [
            make_sample("bench", days_ago=1),
            make_sample("squat", days_ago=2),
            make_sample("bench", days_ago=40),
        ])

        assert len(repo.get_samples("user-1")) == 3
        assert len(repo.get_samples("user-1", "bench")) == 2
        assert len(repo.get_samples("user-1", "bench", since=NOW - timedelta(days=30))) == 1
        assert len(repo.get_samples("user-1", until=NOW - timedelta(days=30))) == 1
        assert repo.get_samples("user-2") == []
        assert len(repo.sample_queries) == 5

    def test_samples_oldest_first(self):
        repo = FakePerformanceHistoryRepository()
        repo.seed_samples("user-1", [make_sample(weight=110, days_ago=1), make_sample(weight=100, days_ago=5)])
        assert [s.weight for s in repo.get_samples("user-1")] == [100, 110]

    def test_sessions_since(self):
        repo = FakePerformanceHistoryRepository()
        repo.seed_sessions("user-1", [make_session("a", days_ago=3), make_session("b", days_ago=20)])
        assert [s.workout_id for s in repo.get_sessions("user-1", since=NOW - timedelta(days=7))] == ["a"]

    def test_reset(self):
        repo = FakePerformanceHistoryRepository()
        repo.seed_samples("user-1", [make_sample()])
        repo.reset()
        assert repo.get_samples("user-1") == []


class TestFakeProfileAndCatalog:

    def test_profile(self):
        repo = FakeTrainingProfileRepository()
        profile = make_profile()
        repo.seed("user-1", profile)
        assert repo.get_profile("user-1") == profile
        assert repo.get_profile("user-2") is None

    def test_catalog(self):
        repo = FakeWorkoutCatalogRepository([make_template("a")])
        repo.seed([make_template("b")])
        assert {t.id for t in repo.list_templates()} == {"a", "b"}
        assert repo.get_template("b").id == "b"
        assert repo.get_template("missing") is None


class TestFakePersonalRecordRepository:

    def test_compare_and_swap(self):
        repo = FakePersonalRecordRepository()
        assert repo.upsert_if_better(make_record(RecordType.MAX_WEIGHT, 100)) is True
        assert repo.upsert_if_better(make_record(RecordType.MAX_WEIGHT, 100)) is False
        assert len(repo.upsert_calls) == 2

    def test_simulated_concurrent_write(self):
        repo = FakePersonalRecordRepository()
        repo.simulate_concurrent_write(make_record(RecordType.MAX_WEIGHT, 130))
        assert repo.upsert_if_better(make_record(RecordType.MAX_WEIGHT, 120)) is False
        assert repo.get_records("user-1")[0].value == 130

    def test_failure_mode(self):
        repo = FakePersonalRecordRepository()
        repo.fail_with = "down"
        with pytest.raises(RecordStoreError):
            repo.get_records("user-1")
        repo.reset()
        assert repo.get_records("user-1") == []
