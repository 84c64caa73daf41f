"""
Security utilities for authentication.
JWT token handling for the open token endpoint and the bearer gate.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from pydantic import BaseModel

from repairdesk.core.config import settings
from repairdesk.schemas.auth import TokenPair


# Subject stamped on tokens issued by the open endpoint
DEFAULT_SUBJECT = "repairdesk"


class TokenData(BaseModel):
    """Token payload data."""
    subject: Optional[str] = None
    token_type: str = "access"


def _encode(data: dict, token_type: str, expires_delta: timedelta) -> str:
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    to_encode.update({
        "exp": now + expires_delta,
        "iat": now,
        "type": token_type,
    })
    return jwt.encode(
        to_encode,
        settings.SECRET_KEY,
        algorithm=settings.ALGORITHM
    )


def create_access_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT access token.

    Args:
        data: Payload data to encode
        expires_delta: Token expiration time

    Returns:
        Encoded JWT token
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    return _encode(data, "access", expires_delta)


def create_refresh_token(
    data: dict,
    expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create JWT refresh token.

    Args:
        data: Payload data to encode
        expires_delta: Token expiration time

    Returns:
        Encoded JWT token
    """
    if expires_delta is None:
        expires_delta = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)
    return _encode(data, "refresh", expires_delta)


def create_token_pair(subject: str = DEFAULT_SUBJECT) -> TokenPair:
    """Create access and refresh token pair for a subject."""
    token_data = {"sub": subject, "status": "ok"}

    return TokenPair(
        access_token=create_access_token(token_data),
        refresh_token=create_refresh_token(token_data),
    )


def decode_token(token: str) -> Optional[TokenData]:
    """
    Decode and validate JWT token (signature and expiry).

    Returns:
        TokenData if valid, None otherwise
    """
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.ALGORITHM]
        )
    except JWTError:
        return None

    subject = payload.get("sub")
    if subject is None:
        return None

    return TokenData(
        subject=subject,
        token_type=payload.get("type", "access"),
    )
