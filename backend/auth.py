"""
Authentication module for API key validation.
Provides FastAPI dependencies for securing endpoints.

The engine has no user or session management of its own: callers are
services holding an API key, optionally bound to a user
("sk_live_abc:user_123").
"""
from fastapi import Depends, HTTPException, Header
from typing import Optional
import logging

from backend.settings import Settings, get_settings

logger = logging.getLogger(__name__)

# Identity returned for keys that are not bound to a user
SERVICE_USER_ID = "admin"


async def get_current_user(
    x_api_key: Optional[str] = Header(None, alias="X-API-Key"),
    settings: Settings = Depends(get_settings),
) -> str:
    """
    Authenticate via API key.
    Returns user_id string.

    Usage:
        @app.get("/protected")
        async def protected_route(user_id: str = Depends(get_current_user)):
            return {"user_id": user_id}
    """
    if x_api_key:
        return validate_api_key(x_api_key, settings.api_keys_list)

    raise HTTPException(
        status_code=401,
        detail="Missing authentication. Provide X-API-Key."
    )


def validate_api_key(api_key: str, valid_keys: list[str]) -> str:
    """
    Validate API key and return user_id.

    API key format options:
    - Simple: "sk_test_abc123" -> returns "admin"
    - With user: "sk_test_abc123:user_12345" -> returns "user_12345"
    """
    if not valid_keys:
        logger.warning("No API keys configured (API_KEYS env var empty)")
        raise HTTPException(status_code=401, detail="API key authentication not configured")

    # Check if key (without user suffix) is valid
    key_part = api_key.split(":")[0]

    if key_part not in valid_keys:
        raise HTTPException(status_code=401, detail="Invalid API key")

    # Extract user_id if provided (format: "key:user_id")
    if ":" in api_key:
        user_id = api_key.split(":", 1)[1].strip()
        if not user_id:
            raise HTTPException(status_code=401, detail="Invalid API key")
        return user_id

    return SERVICE_USER_ID
