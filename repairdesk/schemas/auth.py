"""
Authentication schemas.
"""

from pydantic import BaseModel


class TokenPair(BaseModel):
    """Access and refresh token pair response."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"


class RefreshTokenRequest(BaseModel):
    """Refresh token request schema."""

    refresh_token: str
