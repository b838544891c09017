"""
API package for the training intelligence engine.

This package contains:
- deps.py: FastAPI dependency providers for DI
- errors.py: Engine error to HTTP status mapping
- routers/: API route handlers
"""

# Re-export dependency providers for convenient access
from api.deps import (
    get_settings,
    get_engine_config,
    get_supabase_client,
    get_supabase_client_required,
    get_history_repo,
    get_profile_repo,
    get_catalog_repo,
    get_record_repo,
    get_training_service,
    get_current_user,
)

__all__ = [
    # Settings
    "get_settings",
    "get_engine_config",
    # Database
    "get_supabase_client",
    "get_supabase_client_required",
    # Repositories
    "get_history_repo",
    "get_profile_repo",
    "get_catalog_repo",
    "get_record_repo",
    # Services
    "get_training_service",
    # Authentication
    "get_current_user",
]
