"""
Helix Auth - Firebase ID token validation.

Validates ID tokens issued by Firebase Authentication to the mobile app.
The Firebase uid is the key of the user's document collections.
"""

import asyncio
import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from firebase_admin import auth as firebase_auth
from firebase_admin import exceptions as firebase_exceptions

from helix.auth.schemas import TokenPayload, User
from helix.config import Settings, get_settings
from helix.core.firebase_client import initialize_firebase_admin
from helix.exceptions import ExternalServiceException, UnauthorizedException

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


def verify_firebase_id_token(id_token: str) -> TokenPayload:
    """
    Verify a Firebase ID token.

    Args:
        id_token: The Firebase ID token string

    Returns:
        Decoded token payload

    Raises:
        UnauthorizedException: If the token is expired or invalid
        ExternalServiceException: If Firebase could not be reached
    """
    app = initialize_firebase_admin()

    try:
        decoded = firebase_auth.verify_id_token(id_token, app=app)
    except firebase_auth.ExpiredIdTokenError:
        logger.warning("Firebase ID token has expired")
        raise UnauthorizedException("Token has expired")
    except (firebase_auth.InvalidIdTokenError, ValueError) as e:
        logger.warning(f"Firebase ID token is invalid: {e}")
        raise UnauthorizedException("Invalid token")
    except firebase_exceptions.FirebaseError as e:
        logger.error(f"Error verifying Firebase ID token: {e}")
        raise ExternalServiceException("Firebase Auth", str(e))

    uid = decoded.get("uid")
    if not uid:
        raise UnauthorizedException("Malformed token payload")

    logger.info(f"Firebase token verified for user: {uid}")
    return TokenPayload(
        sub=uid,
        email=decoded.get("email"),
        phone_number=decoded.get("phone_number"),
        exp=decoded.get("exp"),
        iat=decoded.get("iat"),
    )


async def verify_firebase_id_token_async(id_token: str) -> TokenPayload:
    """Verify a Firebase ID token in a worker thread."""
    return await asyncio.to_thread(verify_firebase_id_token, id_token)


async def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> User:
    """Authenticate using a Firebase ID token."""
    if not credentials:
        raise UnauthorizedException("Missing authentication token")

    if not settings.auth_firebase_enabled:
        raise UnauthorizedException("Firebase authentication is disabled")

    claims = await verify_firebase_id_token_async(credentials.credentials)
    user = User(
        id=claims.sub,
        email=claims.email,
        phone_number=claims.phone_number,
        auth_provider="firebase",
    )

    request.state.user = user.model_dump()
    return user
