"""
Shared pytest fixtures.

Provides fresh in-memory fakes for every test and a TrainingIntelligenceService
wired to them with the clock pinned to tests.fakes.NOW.
"""
import pytest

from backend.core.training_service import TrainingIntelligenceService
from tests.fakes import (
    NOW,
    FakePerformanceHistoryRepository,
    FakePersonalRecordRepository,
    FakeTrainingProfileRepository,
    FakeWorkoutCatalogRepository,
)


@pytest.fixture
def history_repo():
    return FakePerformanceHistoryRepository()


@pytest.fixture
def profile_repo():
    return FakeTrainingProfileRepository()


@pytest.fixture
def catalog_repo():
    return FakeWorkoutCatalogRepository()


@pytest.fixture
def record_repo():
    return FakePersonalRecordRepository()


@pytest.fixture
def service(history_repo, profile_repo, catalog_repo, record_repo):
    """Service over the fakes, with a fixed clock."""
    return TrainingIntelligenceService(
        history_repo=history_repo,
        profile_repo=profile_repo,
        catalog_repo=catalog_repo,
        record_repo=record_repo,
        clock=lambda: NOW,
    )
