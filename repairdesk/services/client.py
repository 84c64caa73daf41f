"""
Client service.
Handles client CRUD operations and the cascading delete.
"""

import logging
from typing import NamedTuple
from uuid import UUID

from sqlalchemy import delete, select, or_

from repairdesk.models.client import Client
from repairdesk.models.device import Device
from repairdesk.models.repair import RepairJob
from repairdesk.schemas.client import ClientCreate, ClientUpdate
from repairdesk.services.base import CRUDService, UpdateResult


logger = logging.getLogger(__name__)


class ClientDeletion(NamedTuple):
    clients: int
    devices: int
    jobs: int


class ClientService(CRUDService[Client]):
    """Service for client operations."""

    model = Client
    label = "Client"

    async def create(self, data: ClientCreate) -> Client:
        """Create a new client."""
        return await self.insert(**data.model_dump())

    async def search(self, search: str | None = None) -> list[Client]:
        """
        List clients, optionally filtered by name, email or phone.

        Args:
            search: Case-insensitive fragment
        """
        if not search:
            return await self.list()

        pattern = f"%{search}%"
        return await self.list(
            or_(
                Client.first_name.ilike(pattern),
                Client.last_name.ilike(pattern),
                Client.email.ilike(pattern),
                Client.phone_number.ilike(pattern),
            )
        )

    async def update(self, client_id: str | UUID, data: ClientUpdate) -> UpdateResult:
        """Update the fields present in the request."""
        return await self.update_fields(client_id, data.model_dump(exclude_unset=True))

    async def cascade_delete(self, client_id: str | UUID) -> ClientDeletion:
        """
        Delete a client together with its devices and their jobs.

        Jobs go first, then devices, then the client, so no read can see a
        job whose device is gone or a device whose client is gone. The steps
        share the request transaction.

        Raises:
            NotFoundError: If the client does not exist
        """
        client = await self.get_or_404(client_id)

        result = await self.db.execute(
            select(Device.id).where(Device.client_id == client.id)
        )
        device_ids = list(result.scalars().all())

        jobs_deleted = 0
        devices_deleted = 0
        if device_ids:
            jobs_deleted = await self._delete_jobs(device_ids)
            devices_deleted = await self._delete_devices(device_ids)

        clients_deleted = await self.delete_by_id(client.id)

        logger.info(
            "Deleted client %s with %d device(s) and %d job(s)",
            client.id, devices_deleted, jobs_deleted,
        )
        return ClientDeletion(clients_deleted, devices_deleted, jobs_deleted)

    async def _delete_jobs(self, device_ids: list[UUID]) -> int:
        result = await self.db.execute(
            delete(RepairJob).where(RepairJob.device_id.in_(device_ids))
        )
        return result.rowcount or 0

    async def _delete_devices(self, device_ids: list[UUID]) -> int:
        result = await self.db.execute(
            delete(Device).where(Device.id.in_(device_ids))
        )
        return result.rowcount or 0
