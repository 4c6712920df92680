"""Helix Auth Module.

Requests carry a bearer token. Service-issued JWT access tokens are checked
first; Firebase ID tokens from the mobile app are the fallback.
"""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from helix.auth.firebase import get_current_user as _get_current_user_firebase
from helix.auth.firebase import verify_firebase_id_token
from helix.auth.jwt_access import create_access_token
from helix.auth.jwt_access import get_current_user as _get_current_user_jwt
from helix.auth.schemas import TokenPayload, User
from helix.config import Settings, get_settings
from helix.exceptions import UnauthorizedException


security = HTTPBearer(auto_error=False)


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> User:
    """Default auth dependency.

    - Prefer service-issued JWT access tokens
    - Fallback to Firebase ID tokens (when AUTH_FIREBASE_ENABLED)
    """

    try:
        return await _get_current_user_jwt(request, credentials, settings)
    except UnauthorizedException:
        if not credentials or not settings.auth_firebase_enabled:
            raise
        return await _get_current_user_firebase(request, credentials, settings)


__all__ = [
    "get_current_user",
    "create_access_token",
    "verify_firebase_id_token",
    "TokenPayload",
    "User",
]
