"""
Pydantic schemas for request/response validation.
"""

from repairdesk.schemas.client import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
)
from repairdesk.schemas.device import (
    DeviceCreate,
    DeviceUpdate,
    DeviceResponse,
)
from repairdesk.schemas.repair import (
    RepairJobCreate,
    RepairJobUpdate,
    RepairStatusUpdate,
    RepairJobResponse,
    RepairJobExpanded,
)
from repairdesk.schemas.views import (
    DeviceWithJobs,
    ClientWithDevices,
    ClientWithDevicesAndJobs,
)
from repairdesk.schemas.auth import (
    TokenPair,
    RefreshTokenRequest,
)

__all__ = [
    # Client
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    # Device
    "DeviceCreate",
    "DeviceUpdate",
    "DeviceResponse",
    # Repair
    "RepairJobCreate",
    "RepairJobUpdate",
    "RepairStatusUpdate",
    "RepairJobResponse",
    "RepairJobExpanded",
    # Views
    "DeviceWithJobs",
    "ClientWithDevices",
    "ClientWithDevicesAndJobs",
    # Auth
    "TokenPair",
    "RefreshTokenRequest",
]
