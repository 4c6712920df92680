"""Helix Auth - Router.

Exchanges a Firebase ID token for a service access token.
"""

import logging

from fastapi import APIRouter, Depends, Request

from helix.auth.firebase import verify_firebase_id_token_async
from helix.auth.jwt_access import create_access_token
from helix.auth.schemas import AccessTokenResponse, TokenExchangeRequest
from helix.config import Settings, get_settings
from helix.exceptions import UnauthorizedException
from helix.schemas import ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
    responses={401: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)


@router.post("/token", response_model=AccessTokenResponse)
async def exchange_token(
    payload: TokenExchangeRequest,
    request: Request,
    settings: Settings = Depends(get_settings),
) -> AccessTokenResponse:
    """Verify a Firebase ID token and issue a service access token."""
    request_id = getattr(request.state, "request_id", "unknown")

    if not settings.auth_firebase_enabled:
        raise UnauthorizedException("Firebase authentication is disabled")

    claims = await verify_firebase_id_token_async(payload.id_token)
    access_token, expires_in = create_access_token(
        settings=settings,
        user_id=claims.sub,
        email=claims.email,
    )

    logger.info(f"[{request_id}] TOKEN_EXCHANGE userId={claims.sub} -> ok")
    return AccessTokenResponse(
        access_token=access_token,
        expires_in=expires_in,
        user_id=claims.sub,
    )
