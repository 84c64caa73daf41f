"""
Client model for repair-shop customers.
A client owns zero or more devices.
"""

from typing import Optional
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from repairdesk.models.base import BaseModel


class Client(BaseModel):
    """
    Client model representing a customer.

    Attributes:
        first_name: Client's first name
        last_name: Client's last name
        phone_number: Contact phone number
        email: Contact email address
    """

    __tablename__ = "clients"

    first_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    last_name: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )
    phone_number: Mapped[Optional[str]] = mapped_column(
        String(50),
        nullable=True,
    )
    email: Mapped[Optional[str]] = mapped_column(
        String(255),
        nullable=True,
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    def __repr__(self) -> str:
        return f"<Client(id={self.id}, name='{self.full_name}')>"
