"""
Base schema configuration and common schemas.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class BaseSchema(BaseModel):
    """
    Base schema with common configuration.
    Wire keys are camelCase, attributes stay snake_case.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
        alias_generator=to_camel,
    )


class MessageResponse(BaseSchema):
    """Simple message response."""

    message: str
    success: bool = True


class UpdateResponse(MessageResponse):
    """Result of an update on a single entity."""

    matched_count: int
    modified_count: int


class DeleteResponse(MessageResponse):
    """Result of deleting a single entity with no dependents."""

    deleted_count: int


class DeviceDeleteResponse(MessageResponse):
    """Result of deleting a device and its jobs."""

    device_deletion_count: int
    jobs_deletion_count: int


class ClientDeleteResponse(DeviceDeleteResponse):
    """Result of deleting a client, its devices and their jobs."""

    client_deletion_count: int
