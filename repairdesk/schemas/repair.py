"""
Repair job schemas for request/response validation.
"""

from datetime import datetime
from uuid import UUID
from pydantic import AliasChoices, EmailStr, Field, field_validator, model_validator

from repairdesk.core.config import settings
from repairdesk.models.repair import EmergencyLevel
from repairdesk.schemas.base import BaseSchema
from repairdesk.schemas.client import blank_to_none


# Sentinel sent by the front end when the client/device must be created
NEW_ENTITY = "new"


def validate_status(value: str) -> str:
    if value not in settings.JOB_STATUSES:
        allowed = ", ".join(settings.JOB_STATUSES)
        raise ValueError(f"status must be one of: {allowed}")
    return value


def default_status() -> str:
    return settings.JOB_STATUSES[0]


class EntityRef(BaseSchema):
    """Reference to an existing entity, or inline data for a new one."""

    id: str | None = Field(None, validation_alias=AliasChoices("_id", "id"))

    @property
    def is_new(self) -> bool:
        return not self.id or self.id == NEW_ENTITY


class ClientRef(EntityRef):
    """Client part of a job submission."""

    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    phone_number: str | None = Field(None, max_length=50)
    email: EmailStr | None = None

    @field_validator("email", mode="before")
    @classmethod
    def blank_email(cls, value):
        return blank_to_none(value)

    @model_validator(mode="after")
    def require_names_for_new(self):
        if self.is_new and not (self.first_name and self.last_name):
            raise ValueError("firstName and lastName are required for a new client")
        return self


class DeviceRef(EntityRef):
    """Device part of a job submission."""

    type: str | None = Field(None, max_length=100)
    brand: str | None = Field(None, max_length=100)
    model: str | None = Field(None, max_length=100)
    serial: str | None = Field(None, max_length=100)

    @model_validator(mode="after")
    def require_type_for_new(self):
        if self.is_new and not self.type:
            raise ValueError("type is required for a new device")
        return self


class JobFields(BaseSchema):
    """Job part of a job submission."""

    emergency_level: EmergencyLevel = EmergencyLevel.LOW
    status: str = Field(default_factory=default_status)
    issue: str | None = None
    notes: str | None = None
    exit_date: datetime | None = None

    @field_validator("status")
    @classmethod
    def check_status(cls, value: str) -> str:
        return validate_status(value)


class RepairJobCreate(BaseSchema):
    """Job submission: client and device are resolved or created first."""

    client: ClientRef
    device: DeviceRef
    job: JobFields = Field(default_factory=JobFields)


class RepairJobUpdate(BaseSchema):
    """Job update: client and device must reference existing entities."""

    client: ClientRef
    device: DeviceRef
    job: JobFields


class RepairStatusUpdate(BaseSchema):
    """Status change, optionally with an explicit exit date."""

    status: str
    exit_date: datetime | None = None

    @field_validator("status")
    @classmethod
    def check_status(cls, value: str) -> str:
        return validate_status(value)


class RepairJobResponse(BaseSchema):
    """Repair job response schema."""

    id: UUID
    device_id: UUID
    unique_code: str
    entry_date: datetime
    exit_date: datetime | None = None
    emergency_level: str
    status: str
    issue: str | None = None
    notes: str | None = None


class RepairJobExpanded(RepairJobResponse):
    """Job flattened with its device and the device's client."""

    device_type: str | None = None
    brand: str | None = None
    model: str | None = None
    serial: str | None = None
    client_id: UUID | None = None
    client_name: str | None = None
    client_firstname: str | None = None
    client_lastname: str | None = None
    client_email: str | None = None
    client_phone: str | None = None
