"""
Aggregation service.
Read views composed across clients, devices and repair jobs.
"""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Iterable, Optional
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from repairdesk.core.config import settings
from repairdesk.models.client import Client
from repairdesk.models.device import Device
from repairdesk.models.repair import EmergencyLevel, RepairJob
from repairdesk.schemas.client import ClientResponse
from repairdesk.schemas.device import DeviceResponse
from repairdesk.schemas.repair import RepairJobExpanded, RepairJobResponse
from repairdesk.schemas.views import (
    ClientWithDevices,
    ClientWithDevicesAndJobs,
    DeviceWithJobs,
)
from repairdesk.services.client import ClientService
from repairdesk.services.repair import RepairService


logger = logging.getLogger(__name__)


def status_rank(status: str) -> int:
    """Position of a stage in the lifecycle; unknown values sort last."""
    try:
        return settings.JOB_STATUSES.index(status)
    except ValueError:
        return len(settings.JOB_STATUSES)


def emergency_rank(level: str) -> int:
    try:
        return EmergencyLevel(level).rank
    except ValueError:
        return 0


def job_sort_key(job) -> tuple:
    """
    Canonical order for job listings:
    status ascending, then emergency level descending (not for completed
    jobs), then entry date descending.
    """
    urgency = 0
    if job.status != settings.terminal_status:
        urgency = -emergency_rank(job.emergency_level)

    entry: Optional[datetime] = job.entry_date
    newest_first = -entry.timestamp() if entry else 0.0

    return (status_rank(job.status), urgency, newest_first)


def sort_jobs(jobs: Iterable) -> list:
    return sorted(jobs, key=job_sort_key)


def expand_job(
    job: RepairJob,
    device: Device | None = None,
    client: Client | None = None,
) -> RepairJobExpanded:
    """Flatten a job with its device and client fields."""
    data = RepairJobResponse.model_validate(job).model_dump()

    if device is not None:
        data.update(
            device_type=device.type,
            brand=device.brand,
            model=device.model,
            serial=device.serial,
            client_id=device.client_id,
        )

    if client is not None:
        data.update(
            client_id=client.id,
            client_name=client.full_name,
            client_firstname=client.first_name,
            client_lastname=client.last_name,
            client_email=client.email,
            client_phone=client.phone_number,
        )

    return RepairJobExpanded(**data)


class AggregationService:
    """Service for cross-table views."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _devices_by_client(self, client_ids: list[UUID]) -> dict[UUID, list[Device]]:
        grouped: dict[UUID, list[Device]] = defaultdict(list)
        if not client_ids:
            return grouped

        result = await self.db.execute(
            select(Device)
            .where(Device.client_id.in_(client_ids))
            .order_by(Device.created_at, Device.id)
        )
        for device in result.scalars().all():
            grouped[device.client_id].append(device)
        return grouped

    async def _jobs_by_device(
        self,
        device_ids: list[UUID],
        exclude_status: str | None = None,
    ) -> dict[UUID, list[RepairJob]]:
        grouped: dict[UUID, list[RepairJob]] = defaultdict(list)
        if not device_ids:
            return grouped

        query = select(RepairJob).where(RepairJob.device_id.in_(device_ids))
        if exclude_status:
            query = query.where(RepairJob.status != exclude_status)

        result = await self.db.execute(query.order_by(RepairJob.created_at, RepairJob.id))
        for job in result.scalars().all():
            grouped[job.device_id].append(job)
        return grouped

    @staticmethod
    def _devices_with_jobs(
        devices: list[Device],
        jobs: dict[UUID, list[RepairJob]],
        include_without_jobs: bool,
    ) -> list[DeviceWithJobs]:
        views = []
        for device in devices:
            device_jobs = jobs.get(device.id, [])
            if not device_jobs and not include_without_jobs:
                continue
            views.append(
                DeviceWithJobs(
                    **DeviceResponse.model_validate(device).model_dump(),
                    jobs=[RepairJobResponse.model_validate(j) for j in device_jobs],
                )
            )
        return views

    async def clients_with_devices(self) -> list[ClientWithDevices]:
        """Every client with every device it owns."""
        clients = await ClientService(self.db).list()
        devices = await self._devices_by_client([c.id for c in clients])

        return [
            ClientWithDevices(
                **ClientResponse.model_validate(client).model_dump(),
                devices=[DeviceResponse.model_validate(d) for d in devices.get(client.id, [])],
            )
            for client in clients
        ]

    async def clients_with_devices_and_jobs(
        self,
        exclude_status: str | None = None,
    ) -> list[ClientWithDevicesAndJobs]:
        """
        Every client with its devices and their jobs.

        Jobs in `exclude_status` are left out and devices left with no job
        are dropped from the view (nothing is deleted).
        """
        clients = await ClientService(self.db).list()
        devices = await self._devices_by_client([c.id for c in clients])

        all_device_ids = [d.id for owned in devices.values() for d in owned]
        jobs = await self._jobs_by_device(all_device_ids, exclude_status)

        views = []
        for client in clients:
            device_views = self._devices_with_jobs(
                devices.get(client.id, []),
                jobs,
                include_without_jobs=False,
            )
            views.append(
                ClientWithDevicesAndJobs(
                    **ClientResponse.model_validate(client).model_dump(),
                    devices=device_views,
                )
            )
        return views

    async def client_devices_and_jobs(
        self,
        client_id: str | UUID,
        exclude_status: str | None = None,
        include_without_jobs: bool = False,
    ) -> ClientWithDevicesAndJobs:
        """
        One client with its devices and jobs.

        Raises:
            InvalidIdentifierError: If the client ID is malformed
            NotFoundError: If the client does not exist
        """
        client = await ClientService(self.db).get_or_404(client_id)
        devices = (await self._devices_by_client([client.id])).get(client.id, [])
        jobs = await self._jobs_by_device([d.id for d in devices], exclude_status)

        device_views = self._devices_with_jobs(devices, jobs, include_without_jobs)
        return ClientWithDevicesAndJobs(
            **ClientResponse.model_validate(client).model_dump(),
            devices=device_views,
        )

    async def client_job_details(self, client_id: str | UUID) -> list[RepairJobExpanded]:
        """All jobs of a client's devices, flattened and sorted."""
        client = await ClientService(self.db).get_or_404(client_id)
        devices = (await self._devices_by_client([client.id])).get(client.id, [])
        jobs = await self._jobs_by_device([d.id for d in devices])

        details = [
            expand_job(job, device, client)
            for device in devices
            for job in jobs.get(device.id, [])
        ]
        return sort_jobs(details)

    async def repair_jobs_expanded(self) -> list[RepairJobExpanded]:
        """
        Every job joined with its device and client, sorted.

        Jobs whose device or client is missing are skipped and logged.
        """
        jobs = await RepairService(self.db).list()

        device_ids = {job.device_id for job in jobs}
        devices: dict[UUID, Device] = {}
        if device_ids:
            result = await self.db.execute(select(Device).where(Device.id.in_(device_ids)))
            devices = {d.id: d for d in result.scalars().all()}

        client_ids = {d.client_id for d in devices.values()}
        clients: dict[UUID, Client] = {}
        if client_ids:
            result = await self.db.execute(select(Client).where(Client.id.in_(client_ids)))
            clients = {c.id: c for c in result.scalars().all()}

        expanded = []
        for job in jobs:
            device = devices.get(job.device_id)
            if device is None:
                logger.warning("Device not found for job %s, skipping", job.id)
                continue
            client = clients.get(device.client_id)
            if client is None:
                logger.warning("Client not found for device %s, skipping job %s", device.id, job.id)
                continue
            expanded.append(expand_job(job, device, client))

        return sort_jobs(expanded)

    async def job_details(self, job_id: str | UUID) -> RepairJobExpanded:
        """
        One job with its device and client.
        Device/client fields stay empty if the chain is broken.

        Raises:
            NotFoundError: If the job does not exist
        """
        job = await RepairService(self.db).get_or_404(job_id)

        device = await self.db.get(Device, job.device_id)
        client = await self.db.get(Client, device.client_id) if device else None
        if device is None or client is None:
            logger.warning("Incomplete ownership chain for job %s", job.id)

        return expand_job(job, device, client)
