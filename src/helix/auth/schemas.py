"""
Helix Auth - Schemas.

Pydantic models for authenticated users.
"""

from typing import Literal

from pydantic import BaseModel, Field


class TokenPayload(BaseModel):
    """Decoded claims of an accepted bearer token."""

    sub: str = Field(..., description="User ID (Firebase uid)")
    email: str | None = None
    phone_number: str | None = None
    exp: int | None = None
    iat: int | None = None


class User(BaseModel):
    """Authenticated user. ``id`` keys the user's document collections."""

    id: str = Field(..., min_length=1)
    email: str | None = None
    phone_number: str | None = None
    display_name: str | None = None
    auth_provider: Literal["access_token", "firebase"] = "access_token"


class TokenExchangeRequest(BaseModel):
    """Firebase ID token to trade for a service access token."""

    id_token: str = Field(..., min_length=1)


class AccessTokenResponse(BaseModel):
    """Service access token issued after a Firebase sign-in."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int
    user_id: str
