"""
Unit tests for api/deps.py dependency providers and backend/auth.py.

These tests verify that the dependency providers are properly wired and
return the correct types. Uses mocks for external dependencies.
"""

import pytest
from fastapi import HTTPException
from unittest.mock import MagicMock, patch

# All tests in this module are pure logic tests with mocks - mark as unit
pytestmark = pytest.mark.unit


# =============================================================================
# Supabase Client
# =============================================================================


class TestSupabaseClientProvider:
    """Test Supabase client providers."""

    @pytest.fixture(autouse=True)
    def clear_cache(self):
        from api.deps import get_supabase_client
        get_supabase_client.cache_clear()
        yield
        get_supabase_client.cache_clear()

    def test_returns_none_without_credentials(self):
        from api.deps import get_supabase_client
        from backend.settings import Settings

        with patch("api.deps._get_settings", return_value=Settings(_env_file=None, supabase_url=None)):
            assert get_supabase_client() is None

    def test_missing_credentials_logged_in_production(self, caplog):
        from api.deps import get_supabase_client
        from backend.settings import Settings

        settings = Settings(_env_file=None, environment="production", supabase_url=None)
        with patch("api.deps._get_settings", return_value=settings):
            with caplog.at_level("ERROR", logger="api.deps"):
                assert get_supabase_client() is None
        assert "not configured in production" in caplog.text

    def test_creates_client_with_credentials(self):
        from api.deps import get_supabase_client
        from backend.settings import Settings

        settings = Settings(
            _env_file=None,
            supabase_url="https://test.supabase.co",
            supabase_service_role_key="service-key",
        )
        with patch("api.deps._get_settings", return_value=settings), \
                patch("api.deps.create_client") as mock_create:
            get_supabase_client()
            mock_create.assert_called_once_with("https://test.supabase.co", "service-key")

    def test_required_raises_503(self):
        from api.deps import get_supabase_client_required

        with patch("api.deps.get_supabase_client", return_value=None):
            with pytest.raises(HTTPException) as exc_info:
                get_supabase_client_required()
        assert exc_info.value.status_code == 503


# =============================================================================
# Repository Providers
# =============================================================================


class TestRepositoryProviders:
    """Test repository providers return the right implementations."""

    def test_history_repo(self):
        from api.deps import get_history_repo
        from infrastructure import SupabasePerformanceHistoryRepository

        assert isinstance(get_history_repo(MagicMock()), SupabasePerformanceHistoryRepository)

    def test_profile_repo(self):
        from api.deps import get_profile_repo
        from infrastructure import SupabaseTrainingProfileRepository

        assert isinstance(get_profile_repo(MagicMock()), SupabaseTrainingProfileRepository)

    def test_catalog_repo_per_request(self):
        from api.deps import get_catalog_repo

        client = MagicMock()
        assert get_catalog_repo(client) is not get_catalog_repo(client)

    def test_record_repo_with_supabase(self):
        from api.deps import get_record_repo
        from infrastructure import SupabasePersonalRecordRepository

        assert isinstance(get_record_repo(MagicMock()), SupabasePersonalRecordRepository)

    def test_training_service_uses_engine_config(self):
        from api.deps import get_engine_config, get_training_service
        from backend.settings import Settings

        config = get_engine_config(Settings(_env_file=None, progression_load_increment=0.05))
        service = get_training_service(
            history_repo=MagicMock(),
            profile_repo=MagicMock(),
            catalog_repo=MagicMock(),
            record_repo=MagicMock(),
            config=config,
        )
        assert service.config.progression.load_increment == 0.05


# =============================================================================
# Authentication
# =============================================================================


class TestValidateApiKey:
    """Test backend.auth.validate_api_key."""

    def test_plain_key_is_service_user(self):
        from backend.auth import SERVICE_USER_ID, validate_api_key

        assert validate_api_key("secret", ["secret"]) == SERVICE_USER_ID

    def test_key_with_user(self):
        from backend.auth import validate_api_key

        assert validate_api_key("secret:user_123", ["secret"]) == "user_123"

    @pytest.mark.parametrize("api_key,valid_keys", [
        ("wrong", ["secret"]),
        ("secret:", ["secret"]),
        ("secret", []),
    ])
    def test_rejected(self, api_key, valid_keys):
        from backend.auth import validate_api_key

        with pytest.raises(HTTPException) as exc_info:
            validate_api_key(api_key, valid_keys)
        assert exc_info.value.status_code == 401

    @pytest.mark.asyncio
    async def test_missing_header(self):
        from api.deps import get_current_user
        from backend.settings import Settings

        with pytest.raises(HTTPException) as exc_info:
            await get_current_user(x_api_key=None, settings=Settings(_env_file=None, api_keys="k"))
        assert exc_info.value.status_code == 401
