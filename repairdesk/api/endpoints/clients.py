"""
Client management endpoints.
CRUD operations for clients and the client-centred views.
"""

from fastapi import APIRouter, Query, status

from repairdesk.api.deps import Authenticated, DbSession
from repairdesk.core.config import settings
from repairdesk.core.exceptions import NotFoundError
from repairdesk.schemas.base import ClientDeleteResponse, UpdateResponse
from repairdesk.schemas.client import ClientCreate, ClientResponse, ClientUpdate
from repairdesk.schemas.repair import RepairJobExpanded
from repairdesk.schemas.views import ClientWithDevices, ClientWithDevicesAndJobs
from repairdesk.services.aggregation import AggregationService
from repairdesk.services.client import ClientService


router = APIRouter()


@router.post(
    "/clients",
    response_model=ClientResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a client",
)
async def create_client(
    data: ClientCreate,
    token: Authenticated,
    db: DbSession,
) -> ClientResponse:
    """Create a new client."""
    client = await ClientService(db).create(data)
    return ClientResponse.model_validate(client)


@router.get(
    "/clients",
    response_model=list[ClientResponse],
    summary="List clients",
)
async def list_clients(
    token: Authenticated,
    db: DbSession,
    search: str | None = Query(None, description="Filter by name, email or phone"),
) -> list[ClientResponse]:
    """List all clients in insertion order."""
    clients = await ClientService(db).search(search)
    return [ClientResponse.model_validate(c) for c in clients]


@router.get(
    "/clients-with-devices",
    response_model=list[ClientWithDevices],
    summary="Clients with their devices",
)
async def clients_with_devices(
    token: Authenticated,
    db: DbSession,
) -> list[ClientWithDevices]:
    return await AggregationService(db).clients_with_devices()


@router.get(
    "/clients-with-devices-and-jobs",
    response_model=list[ClientWithDevicesAndJobs],
    summary="Clients with devices and open jobs",
    description="Devices without a job outside `excludeStatus` are omitted. "
                "`excludeStatus` defaults to the terminal stage.",
)
async def clients_with_devices_and_jobs(
    token: Authenticated,
    db: DbSession,
    exclude_status: str | None = Query(None, alias="excludeStatus"),
) -> list[ClientWithDevicesAndJobs]:
    return await AggregationService(db).clients_with_devices_and_jobs(
        exclude_status or settings.terminal_status
    )


@router.get(
    "/client/{client_id}/devices-and-jobs",
    response_model=ClientWithDevicesAndJobs,
    summary="One client with devices and jobs",
)
async def client_devices_and_jobs(
    client_id: str,
    token: Authenticated,
    db: DbSession,
    exclude_status: str | None = Query(None, alias="excludeStatus"),
    include_without_jobs: bool = Query(False, alias="includeWithoutJobs"),
) -> ClientWithDevicesAndJobs:
    return await AggregationService(db).client_devices_and_jobs(
        client_id,
        exclude_status=exclude_status,
        include_without_jobs=include_without_jobs,
    )


@router.get(
    "/client-details/{client_id}",
    response_model=list[RepairJobExpanded],
    summary="All jobs of a client",
)
async def client_details(
    client_id: str,
    token: Authenticated,
    db: DbSession,
) -> list[RepairJobExpanded]:
    """Jobs of every device of the client, flattened with device fields."""
    return await AggregationService(db).client_job_details(client_id)


@router.get(
    "/clients/{client_id}",
    response_model=ClientResponse,
    summary="Client details",
)
async def get_client(
    client_id: str,
    token: Authenticated,
    db: DbSession,
) -> ClientResponse:
    """Get client by ID."""
    client = await ClientService(db).get_or_404(client_id)
    return ClientResponse.model_validate(client)


@router.put(
    "/clients/{client_id}",
    response_model=UpdateResponse,
    summary="Update a client",
)
async def update_client(
    client_id: str,
    data: ClientUpdate,
    token: Authenticated,
    db: DbSession,
) -> UpdateResponse:
    """Update a client."""
    result = await ClientService(db).update(client_id, data)
    if not result.matched:
        raise NotFoundError("Client not found")
    return UpdateResponse(
        message="Client updated successfully",
        matched_count=result.matched,
        modified_count=result.modified,
    )


@router.delete(
    "/clients/{client_id}",
    response_model=ClientDeleteResponse,
    summary="Delete a client",
    description="Deletes the client, its devices and their repair jobs",
)
async def delete_client(
    client_id: str,
    token: Authenticated,
    db: DbSession,
) -> ClientDeleteResponse:
    """Delete a client with everything it owns."""
    deletion = await ClientService(db).cascade_delete(client_id)
    return ClientDeleteResponse(
        message="Client, devices and related jobs deleted successfully",
        client_deletion_count=deletion.clients,
        device_deletion_count=deletion.devices,
        jobs_deletion_count=deletion.jobs,
    )
