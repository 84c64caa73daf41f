"""
API Dependencies.
Common dependencies for authentication and database sessions.
"""

import logging
from typing import Annotated
from fastapi import Depends, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from repairdesk.core.database import get_db
from repairdesk.core.exceptions import AuthError
from repairdesk.core.security import TokenData, decode_token


# Logger
logger = logging.getLogger(__name__)

# Bearer token scheme; missing header is reported by require_token, not by FastAPI
security = HTTPBearer(auto_error=False)


async def require_token(
    credentials: HTTPAuthorizationCredentials = Depends(security),
) -> TokenData:
    """
    Auth gate: validate the bearer credential.

    Raises:
        AuthError: 401 if no token was sent, 403 if it is invalid or expired
    """
    if not credentials:
        logger.warning("Request without bearer token")
        raise AuthError("Missing authentication token")

    token_data = decode_token(credentials.credentials)

    if token_data is None:
        logger.warning("Invalid or expired token")
        raise AuthError(
            "Invalid or expired authentication token",
            status_code=status.HTTP_403_FORBIDDEN,
        )

    if token_data.token_type != "access":
        logger.warning("Wrong token type: %s", token_data.token_type)
        raise AuthError(
            "Invalid token type",
            status_code=status.HTTP_403_FORBIDDEN,
        )

    return token_data


# Type aliases for cleaner route signatures
Authenticated = Annotated[TokenData, Depends(require_token)]
DbSession = Annotated[AsyncSession, Depends(get_db)]
