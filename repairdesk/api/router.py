"""
API router - aggregates all endpoint routers.
"""

from fastapi import APIRouter

from repairdesk.api.endpoints import (
    auth,
    clients,
    devices,
    repairs,
)

api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(
    auth.router,
    tags=["Authentication"],
)

api_router.include_router(
    clients.router,
    tags=["Clients"],
)

api_router.include_router(
    devices.router,
    prefix="/devices",
    tags=["Devices"],
)

api_router.include_router(
    repairs.router,
    tags=["Repairs"],
)
