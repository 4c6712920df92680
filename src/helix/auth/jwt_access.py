"""Helix Auth - service-issued JWT access tokens.

This module implements:
- Issuing short-lived JWTs (HS256 by default) for a user id
- A FastAPI dependency to authenticate requests using these tokens
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Annotated, Any

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from helix.auth.schemas import TokenPayload, User
from helix.config import Settings, get_settings
from helix.exceptions import UnauthorizedException

security = HTTPBearer(auto_error=False)


def create_access_token(
    *,
    settings: Settings,
    user_id: str,
    email: str | None = None,
    now: datetime | None = None,
) -> tuple[str, int]:
    """Create a signed access token and return (token, expires_in_seconds)."""

    if not user_id:
        raise ValueError("user_id is required")

    if now is None:
        now = datetime.now(timezone.utc)

    ttl_s = int(settings.auth_access_token_ttl_seconds)
    exp = now + timedelta(seconds=ttl_s)

    payload: dict[str, Any] = {
        "sub": user_id,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
        "typ": "access",
        "iss": "helix",
    }
    if email:
        payload["email"] = email

    token = jwt.encode(payload, settings.auth_jwt_secret, algorithm=settings.auth_jwt_algorithm)
    return token, ttl_s


def decode_access_token(token: str, settings: Settings) -> TokenPayload:
    """Verify signature, expiry and token type; return the claims."""
    try:
        payload = jwt.decode(token, settings.auth_jwt_secret, algorithms=[settings.auth_jwt_algorithm])
    except JWTError as e:
        raise UnauthorizedException(f"Invalid token: {e}")

    if payload.get("typ") != "access":
        raise UnauthorizedException("Invalid token type")

    sub = payload.get("sub")
    if not isinstance(sub, str) or not sub:
        raise UnauthorizedException("Malformed token payload")

    return TokenPayload(
        sub=sub,
        email=payload.get("email"),
        exp=payload.get("exp"),
        iat=payload.get("iat"),
    )


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> User:
    """Authenticate using a service-issued JWT access token."""

    if not credentials:
        raise UnauthorizedException("Missing authentication token")

    token = (credentials.credentials or "").strip()
    if not token or any(ch.isspace() for ch in token):
        raise UnauthorizedException("Invalid authentication token")

    claims = decode_access_token(token, settings)
    user = User(id=claims.sub, email=claims.email, auth_provider="access_token")

    request.state.user = user.model_dump()
    return user
