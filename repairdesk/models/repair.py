"""
RepairJob model.
A unit of repair work on one device, moving through the configured stages.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional
from sqlalchemy import String, Text, ForeignKey, DateTime, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from repairdesk.models.base import BaseModel, utcnow


class EmergencyLevel(str, Enum):
    """Emergency level enumeration, ordered Low < Medium < High."""
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @property
    def rank(self) -> int:
        return _EMERGENCY_RANK[self]


_EMERGENCY_RANK = {
    EmergencyLevel.LOW: 1,
    EmergencyLevel.MEDIUM: 2,
    EmergencyLevel.HIGH: 3,
}


class RepairJob(BaseModel):
    """
    Repair job model.

    Attributes:
        device_id: Device under repair
        unique_code: Human-readable code (prefix + sequence value), set once
        entry_date: When the job was registered, set once
        exit_date: When the device left the shop
        emergency_level: Low, Medium or High
        status: Current stage, one of settings.JOB_STATUSES
        issue: Problem reported by the client
        notes: Technician notes
    """

    __tablename__ = "repair_jobs"

    device_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("devices.id"),
        nullable=False,
        index=True,
    )

    unique_code: Mapped[str] = mapped_column(
        String(50),
        unique=True,
        index=True,
        nullable=False,
    )

    entry_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        nullable=False,
    )
    exit_date: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    emergency_level: Mapped[str] = mapped_column(
        String(20),
        default=EmergencyLevel.LOW.value,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
    )

    issue: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )
    notes: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<RepairJob(id={self.id}, code='{self.unique_code}', status='{self.status}')>"
