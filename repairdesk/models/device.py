"""
Device model: a physical item brought in by a client.
"""

import uuid
from typing import Optional
from sqlalchemy import String, ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from repairdesk.models.base import BaseModel


class Device(BaseModel):
    """
    Device model.

    Attributes:
        client_id: Owning client
        type: Kind of device (laptop, phone, ...)
        brand: Manufacturer
        model: Model name
        serial: Serial number
    """

    __tablename__ = "devices"

    client_id: Mapped[uuid.UUID] = mapped_column(
        Uuid,
        ForeignKey("clients.id"),
        nullable=False,
        index=True,
    )

    type: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    brand: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    model: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )
    serial: Mapped[Optional[str]] = mapped_column(
        String(100),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<Device(id={self.id}, type='{self.type}', client_id={self.client_id})>"
