"""
Composite views assembled across clients, devices and repair jobs.
"""

from repairdesk.schemas.client import ClientResponse
from repairdesk.schemas.device import DeviceResponse
from repairdesk.schemas.repair import RepairJobResponse


class DeviceWithJobs(DeviceResponse):
    """Device with its (filtered) repair jobs."""

    jobs: list[RepairJobResponse]


class ClientWithDevices(ClientResponse):
    """Client with every device it owns."""

    devices: list[DeviceResponse]


class ClientWithDevicesAndJobs(ClientResponse):
    """Client with its devices, each carrying its jobs."""

    devices: list[DeviceWithJobs]
