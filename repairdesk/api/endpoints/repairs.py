"""
Repair job endpoints.
Submission, updates, status changes and the expanded listings.
"""

from fastapi import APIRouter, Query, status

from repairdesk.api.deps import Authenticated, DbSession
from repairdesk.core.exceptions import NotFoundError
from repairdesk.schemas.base import DeleteResponse, MessageResponse, UpdateResponse
from repairdesk.schemas.repair import (
    RepairJobCreate,
    RepairJobExpanded,
    RepairJobResponse,
    RepairJobUpdate,
    RepairStatusUpdate,
)
from repairdesk.services.aggregation import AggregationService
from repairdesk.services.repair import RepairService


router = APIRouter()


@router.post(
    "/repairs",
    response_model=RepairJobResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a repair job",
    description='A client or device `_id` that is absent or "new" creates it from the submitted fields',
)
async def create_repair(
    data: RepairJobCreate,
    token: Authenticated,
    db: DbSession,
) -> RepairJobResponse:
    job = await RepairService(db).create(data)
    return RepairJobResponse.model_validate(job)


@router.get(
    "/repairs",
    response_model=list[RepairJobResponse],
    summary="List repair jobs",
)
async def list_repairs(
    token: Authenticated,
    db: DbSession,
    device_id: str | None = Query(None, alias="deviceId", description="Only this device's jobs"),
) -> list[RepairJobResponse]:
    jobs = await RepairService(db).for_device(device_id)
    return [RepairJobResponse.model_validate(j) for j in jobs]


@router.get(
    "/repair-jobs",
    response_model=list[RepairJobExpanded],
    summary="Repair jobs with device and client",
    description="Sorted by status, then emergency level, then newest entry",
)
async def list_repair_jobs_expanded(
    token: Authenticated,
    db: DbSession,
) -> list[RepairJobExpanded]:
    return await AggregationService(db).repair_jobs_expanded()


@router.get(
    "/repairs_get_infos/{job_id}",
    response_model=RepairJobExpanded,
    summary="One repair job with device and client",
)
async def get_repair_infos(
    job_id: str,
    token: Authenticated,
    db: DbSession,
) -> RepairJobExpanded:
    return await AggregationService(db).job_details(job_id)


@router.get(
    "/repairs/{job_id}",
    response_model=RepairJobResponse,
    summary="Repair job details",
)
async def get_repair(
    job_id: str,
    token: Authenticated,
    db: DbSession,
) -> RepairJobResponse:
    job = await RepairService(db).get_or_404(job_id)
    return RepairJobResponse.model_validate(job)


@router.put(
    "/repairs/{job_id}",
    response_model=UpdateResponse,
    summary="Update a repair job",
    description="Client and device must already exist; code and entry date are never changed",
)
async def update_repair(
    job_id: str,
    data: RepairJobUpdate,
    token: Authenticated,
    db: DbSession,
) -> UpdateResponse:
    result = await RepairService(db).update(job_id, data)
    if not result.matched:
        raise NotFoundError("Repair job not found")
    return UpdateResponse(
        message="Repair job updated successfully",
        matched_count=result.matched,
        modified_count=result.modified,
    )


@router.put(
    "/repairs_status/{job_id}",
    response_model=MessageResponse,
    summary="Change a repair job's status",
)
async def update_repair_status(
    job_id: str,
    data: RepairStatusUpdate,
    token: Authenticated,
    db: DbSession,
) -> MessageResponse:
    await RepairService(db).set_status(job_id, data)
    return MessageResponse(message="Repair job status updated successfully")


@router.delete(
    "/repairs/{job_id}",
    response_model=DeleteResponse,
    summary="Delete a repair job",
)
async def delete_repair(
    job_id: str,
    token: Authenticated,
    db: DbSession,
) -> DeleteResponse:
    deleted = await RepairService(db).delete(job_id)
    return DeleteResponse(message="Repair job deleted successfully", deleted_count=deleted)
