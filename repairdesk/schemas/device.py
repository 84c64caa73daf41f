"""
Device schemas for request/response validation.
"""

from datetime import datetime
from uuid import UUID
from pydantic import Field, field_validator

from repairdesk.schemas.base import BaseSchema


class DeviceBase(BaseSchema):
    """Base device schema with common fields."""

    type: str = Field(..., min_length=1, max_length=100)
    brand: str | None = Field(None, max_length=100)
    model: str | None = Field(None, max_length=100)
    serial: str | None = Field(None, max_length=100)


class DeviceCreate(DeviceBase):
    """Schema for creating a device. The owner must already exist."""

    client_id: str


class DeviceUpdate(BaseSchema):
    """Schema for updating a device."""

    client_id: str | None = None
    type: str | None = Field(None, min_length=1, max_length=100)
    brand: str | None = Field(None, max_length=100)
    model: str | None = Field(None, max_length=100)
    serial: str | None = Field(None, max_length=100)

    @field_validator("type")
    @classmethod
    def type_not_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not null")
        return value


class DeviceResponse(DeviceBase):
    """Device response schema."""

    id: UUID
    client_id: UUID
    created_at: datetime
    updated_at: datetime
