"""
Database models module.
All SQLAlchemy models are exported from here for easy imports.
"""

from repairdesk.models.client import Client
from repairdesk.models.device import Device
from repairdesk.models.repair import RepairJob, EmergencyLevel
from repairdesk.models.counter import Counter


__all__ = [
    "Client",
    "Device",
    "RepairJob",
    "EmergencyLevel",
    "Counter",
]
