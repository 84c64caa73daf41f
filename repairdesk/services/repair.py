"""
Repair job service.
Job submission, updates, status changes and code assignment.
"""

import logging
from uuid import UUID

from repairdesk.core.config import settings
from repairdesk.core.exceptions import InvalidReferenceError, NotFoundError
from repairdesk.models.base import utcnow
from repairdesk.models.client import Client
from repairdesk.models.device import Device
from repairdesk.models.repair import RepairJob
from repairdesk.schemas.repair import (
    ClientRef,
    DeviceRef,
    RepairJobCreate,
    RepairJobUpdate,
    RepairStatusUpdate,
)
from repairdesk.services.base import CRUDService, UpdateResult
from repairdesk.services.client import ClientService
from repairdesk.services.device import DeviceService
from repairdesk.services.sequence import SequenceService


logger = logging.getLogger(__name__)


class RepairService(CRUDService[RepairJob]):
    """Service for repair job operations."""

    model = RepairJob
    label = "Repair job"

    async def next_code(self) -> str:
        """Mint the next human-readable job code."""
        value = await SequenceService(self.db).next_value(settings.JOB_SEQUENCE_NAME)
        return f"{settings.CODE_PREFIX}{value}"

    async def create(self, data: RepairJobCreate) -> RepairJob:
        """
        Register a repair job.

        An absent or "new" client/device identifier creates the entity from
        the submitted fields; otherwise the referenced entity must exist.
        Everything runs in the request transaction.

        Args:
            data: Client, device and job parts of the submission

        Returns:
            Created job
        """
        client = await self._resolve_client(data.client)
        device = await self._resolve_device(data.device, client)

        unique_code = await self.next_code()

        job = await self.insert(
            device_id=device.id,
            unique_code=unique_code,
            entry_date=utcnow(),
            exit_date=data.job.exit_date,
            emergency_level=data.job.emergency_level.value,
            status=data.job.status,
            issue=data.job.issue,
            notes=data.job.notes,
        )

        logger.info("Repair job %s registered for device %s", unique_code, device.id)
        return job

    async def _resolve_client(self, ref: ClientRef) -> Client:
        service = ClientService(self.db)
        if not ref.is_new:
            return await service.get_or_404(ref.id)

        return await service.insert(
            first_name=ref.first_name,
            last_name=ref.last_name,
            phone_number=ref.phone_number,
            email=ref.email,
        )

    async def _resolve_device(self, ref: DeviceRef, owner: Client) -> Device:
        service = DeviceService(self.db)
        if not ref.is_new:
            return await service.get_or_404(ref.id)

        return await service.insert(
            client_id=owner.id,
            type=ref.type,
            brand=ref.brand,
            model=ref.model,
            serial=ref.serial,
        )

    async def for_device(self, device_id: str | UUID | None = None) -> list[RepairJob]:
        """All jobs, or only those of one device."""
        if device_id is None:
            return await self.list()
        uid = DeviceService(self.db).parse_id(device_id)
        return await self.list(RepairJob.device_id == uid)

    async def update(self, job_id: str | UUID, data: RepairJobUpdate) -> UpdateResult:
        """
        Update a job's device reference, emergency level, status, issue and notes.

        The unique code and entry date never change. Client and device must
        already exist (updates never create them) and the device must
        belong to the client.

        Raises:
            InvalidIdentifierError: If an identifier is malformed
            InvalidReferenceError: If a reference is "new" or the device
                belongs to another client
            NotFoundError: If the job, client or device does not exist
        """
        job = await self.get_or_404(job_id)

        if data.client.is_new or data.device.is_new:
            raise InvalidReferenceError(
                "A repair job update must reference an existing client and device"
            )

        client = await ClientService(self.db).get_or_404(data.client.id)
        device = await DeviceService(self.db).get_or_404(data.device.id)
        if device.client_id != client.id:
            raise InvalidReferenceError("Device does not belong to the given client")

        values = data.job.model_dump(
            include={"emergency_level", "status", "issue", "notes"},
            exclude_unset=True,
        )
        if "emergency_level" in values:
            values["emergency_level"] = values["emergency_level"].value
        values["device_id"] = device.id

        return await self.update_fields(job.id, values)

    async def set_status(self, job_id: str | UUID, data: RepairStatusUpdate) -> RepairJob:
        """
        Move a job to another stage.

        An explicit exit date always wins; otherwise reaching the terminal
        stage stamps the exit date with the current time. Any stage may be
        set from any other.

        Raises:
            NotFoundError: If the job does not exist
        """
        job = await self.get_or_404(job_id)

        job.status = data.status
        if data.exit_date is not None:
            job.exit_date = data.exit_date
        elif data.status == settings.terminal_status:
            job.exit_date = utcnow()

        await self.db.flush()
        await self.db.refresh(job)

        logger.info("Repair job %s moved to %s", job.unique_code, job.status)
        return job

    async def delete(self, job_id: str | UUID) -> int:
        """
        Delete a job.

        Raises:
            NotFoundError: If the job does not exist
        """
        deleted = await self.delete_by_id(job_id)
        if not deleted:
            raise NotFoundError(f"{self.label} not found")
        return deleted
