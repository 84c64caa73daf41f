"""
Client schemas for request/response validation.
"""

from datetime import datetime
from uuid import UUID
from pydantic import EmailStr, Field, field_validator

from repairdesk.schemas.base import BaseSchema


def blank_to_none(value):
    """Forms send empty strings for untouched optional inputs."""
    if isinstance(value, str) and not value.strip():
        return None
    return value


class ClientBase(BaseSchema):
    """Base client schema with common fields."""

    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    phone_number: str | None = Field(None, max_length=50)
    email: EmailStr | None = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, value):
        return blank_to_none(value)


class ClientCreate(ClientBase):
    """Schema for creating a new client."""
    pass


class ClientUpdate(BaseSchema):
    """Schema for updating a client."""

    first_name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    phone_number: str | None = Field(None, max_length=50)
    email: EmailStr | None = None

    @field_validator("first_name", "last_name")
    @classmethod
    def names_not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, value):
        return blank_to_none(value)


class ClientResponse(ClientBase):
    """Client response schema."""

    id: UUID
    email: str | None = None
    created_at: datetime
    updated_at: datetime
