"""
Authentication endpoints.
Token issuance, refresh and the auth smoke test.
"""

import logging

from fastapi import APIRouter, status

from repairdesk.api.deps import Authenticated
from repairdesk.core.exceptions import AuthError
from repairdesk.core.security import create_token_pair, decode_token
from repairdesk.schemas.auth import RefreshTokenRequest, TokenPair
from repairdesk.schemas.base import MessageResponse


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/get-token",
    response_model=TokenPair,
    summary="Issue a token pair",
    description="Open endpoint: returns a short-lived access token and a refresh token",
)
async def get_token() -> TokenPair:
    """Issue a new token pair."""
    return create_token_pair()


@router.post(
    "/refresh-token",
    response_model=TokenPair,
    summary="Refresh tokens",
    description="Exchange a refresh token for a new token pair",
)
async def refresh_token(data: RefreshTokenRequest) -> TokenPair:
    """Rafraîchir les tokens JWT."""
    token_data = decode_token(data.refresh_token)

    if token_data is None or token_data.token_type != "refresh":
        logger.warning("Invalid refresh token")
        raise AuthError(
            "Invalid refresh token",
            status_code=status.HTTP_403_FORBIDDEN,
        )

    return create_token_pair(token_data.subject)


@router.get(
    "/protected",
    response_model=MessageResponse,
    summary="Auth smoke test",
)
async def protected(token: Authenticated) -> MessageResponse:
    return MessageResponse(message="This is protected data.")
