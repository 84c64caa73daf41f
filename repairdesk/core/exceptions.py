"""
Application errors.
Each one is an HTTPException so services can raise them directly;
the handlers in main render them as {"message": ...}.
"""

from uuid import UUID

from fastapi import HTTPException, status


class AuthError(HTTPException):
    """Missing, invalid or expired credential."""

    def __init__(self, detail: str, status_code: int = status.HTTP_401_UNAUTHORIZED):
        super().__init__(
            status_code=status_code,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class InvalidIdentifierError(HTTPException):
    """Identifier is not a well-formed reference token."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class InvalidReferenceError(HTTPException):
    """References are well-formed but do not fit together."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class NotFoundError(HTTPException):
    """Referenced entity does not exist."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class StoreError(HTTPException):
    """Underlying store failure."""

    def __init__(self, detail: str = "Store operation failed"):
        super().__init__(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail)


def parse_identifier(value: str | UUID | None, label: str = "identifier") -> UUID:
    """
    Parse an opaque identifier before it reaches the store.

    Raises:
        InvalidIdentifierError: If the value is not a UUID
    """
    if isinstance(value, UUID):
        return value
    try:
        return UUID(str(value))
    except (TypeError, ValueError):
        raise InvalidIdentifierError(f"Invalid {label} format: {value}")
