"""
Device service.
Handles device CRUD operations and the device -> jobs cascade.
"""

import logging
from typing import NamedTuple
from uuid import UUID

from sqlalchemy import delete

from repairdesk.models.device import Device
from repairdesk.models.repair import RepairJob
from repairdesk.schemas.device import DeviceCreate, DeviceUpdate
from repairdesk.services.base import CRUDService, UpdateResult
from repairdesk.services.client import ClientService


logger = logging.getLogger(__name__)


class DeviceDeletion(NamedTuple):
    devices: int
    jobs: int


class DeviceService(CRUDService[Device]):
    """Service for device operations."""

    model = Device
    label = "Device"

    async def create(self, data: DeviceCreate) -> Device:
        """
        Create a device for an existing client.

        Raises:
            InvalidIdentifierError: If clientId is malformed
            NotFoundError: If the client does not exist
        """
        client = await ClientService(self.db).get_or_404(data.client_id)
        return await self.insert(
            client_id=client.id,
            **data.model_dump(exclude={"client_id"}),
        )

    async def for_client(self, client_id: str | UUID | None = None) -> list[Device]:
        """All devices, or only those owned by one client."""
        if client_id is None:
            return await self.list()
        uid = ClientService(self.db).parse_id(client_id)
        return await self.list(Device.client_id == uid)

    async def update(self, device_id: str | UUID, data: DeviceUpdate) -> UpdateResult:
        """
        Update the fields present in the request.
        A new owner must exist.
        """
        values = data.model_dump(exclude_unset=True)
        if values.get("client_id") is not None:
            client = await ClientService(self.db).get_or_404(values["client_id"])
            values["client_id"] = client.id
        else:
            values.pop("client_id", None)
        return await self.update_fields(device_id, values)

    async def cascade_delete(self, device_id: str | UUID) -> DeviceDeletion:
        """
        Delete a device and every job referencing it.

        The existence check gates the cascade: an unknown device deletes nothing.

        Raises:
            NotFoundError: If the device does not exist
        """
        device = await self.get_or_404(device_id)

        result = await self.db.execute(
            delete(RepairJob).where(RepairJob.device_id == device.id)
        )
        jobs_deleted = result.rowcount or 0
        devices_deleted = await self.delete_by_id(device.id)

        logger.info(
            "Deleted device %s and %d job(s)", device.id, jobs_deleted,
        )
        return DeviceDeletion(devices_deleted, jobs_deleted)
