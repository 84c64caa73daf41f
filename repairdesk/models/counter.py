"""
Named sequence counters used to mint human-readable codes.
"""

from sqlalchemy import String, BigInteger
from sqlalchemy.orm import Mapped, mapped_column

from repairdesk.core.database import Base


class Counter(Base):
    """
    One row per sequence.

    Attributes:
        name: Sequence name (e.g. "job_code")
        value: Last value issued
    """

    __tablename__ = "counters"

    name: Mapped[str] = mapped_column(String(50), primary_key=True)
    value: Mapped[int] = mapped_column(BigInteger, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<Counter(name='{self.name}', value={self.value})>"
