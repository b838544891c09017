"""Verify all modules can be imported without errors."""
import pytest

# All tests in this module are pure import checks - mark as unit tests
pytestmark = pytest.mark.unit


def test_core_module_imports():
    """Import core backend modules to catch bad import paths."""
    import backend.auth
    import backend.main
    import backend.settings


def test_engine_imports():
    """Import engine modules."""
    import backend.core.engine_config
    import backend.core.progression_calculator
    import backend.core.recommendation_generator
    import backend.core.record_detector
    import backend.core.strength_estimator
    import backend.core.training_analytics
    import backend.core.training_service


def test_api_imports():
    """Import API modules."""
    import api.deps
    import api.errors
    import api.routers.health
    import api.routers.insights
    import api.routers.progression
    import api.routers.recommendations
    import api.routers.records
    import api.routers.strength


def test_layer_imports():
    """Import domain, ports and infrastructure packages."""
    import application.exceptions
    import application.ports
    import domain.models
    import infrastructure.db
