"""
Device management endpoints.
"""

from fastapi import APIRouter, Query, status

from repairdesk.api.deps import Authenticated, DbSession
from repairdesk.core.exceptions import NotFoundError
from repairdesk.schemas.base import DeviceDeleteResponse, UpdateResponse
from repairdesk.schemas.device import DeviceCreate, DeviceResponse, DeviceUpdate
from repairdesk.services.device import DeviceService


router = APIRouter()


@router.post(
    "",
    response_model=DeviceResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create a device",
    description="The owning client must exist",
)
async def create_device(
    data: DeviceCreate,
    token: Authenticated,
    db: DbSession,
) -> DeviceResponse:
    device = await DeviceService(db).create(data)
    return DeviceResponse.model_validate(device)


@router.get(
    "",
    response_model=list[DeviceResponse],
    summary="List devices",
)
async def list_devices(
    token: Authenticated,
    db: DbSession,
    client_id: str | None = Query(None, alias="clientId", description="Only this client's devices"),
) -> list[DeviceResponse]:
    devices = await DeviceService(db).for_client(client_id)
    return [DeviceResponse.model_validate(d) for d in devices]


@router.get(
    "/{device_id}",
    response_model=DeviceResponse,
    summary="Device details",
)
async def get_device(
    device_id: str,
    token: Authenticated,
    db: DbSession,
) -> DeviceResponse:
    device = await DeviceService(db).get_or_404(device_id)
    return DeviceResponse.model_validate(device)


@router.put(
    "/{device_id}",
    response_model=UpdateResponse,
    summary="Update a device",
)
async def update_device(
    device_id: str,
    data: DeviceUpdate,
    token: Authenticated,
    db: DbSession,
) -> UpdateResponse:
    result = await DeviceService(db).update(device_id, data)
    if not result.matched:
        raise NotFoundError("Device not found")
    return UpdateResponse(
        message="Device updated successfully",
        matched_count=result.matched,
        modified_count=result.modified,
    )


@router.delete(
    "/{device_id}",
    response_model=DeviceDeleteResponse,
    summary="Delete a device",
    description="Deletes the device and its repair jobs",
)
async def delete_device(
    device_id: str,
    token: Authenticated,
    db: DbSession,
) -> DeviceDeleteResponse:
    deletion = await DeviceService(db).cascade_delete(device_id)
    return DeviceDeleteResponse(
        message="Device and related jobs deleted successfully",
        device_deletion_count=deletion.devices,
        jobs_deletion_count=deletion.jobs,
    )
