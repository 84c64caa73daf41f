"""
Sequence service.
Issues strictly increasing integers from a named counter row.
"""

import logging

from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from repairdesk.core.config import settings
from repairdesk.models.counter import Counter


logger = logging.getLogger(__name__)

_UPSERT_DIALECTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class SequenceService:
    """Service for sequence counters."""

    def __init__(self, db: AsyncSession):
        self.db = db

    def _insert(self):
        dialect = self.db.get_bind().dialect.name
        try:
            return _UPSERT_DIALECTS[dialect]
        except KeyError:
            raise NotImplementedError(f"Sequence counters are not supported on {dialect}")

    async def next_value(self, name: str | None = None) -> int:
        """
        Increment the counter and return the new value.

        A single INSERT ... ON CONFLICT DO UPDATE ... RETURNING creates the
        row on first use and increments it afterwards. The store's row lock
        serialises concurrent callers, so no value is issued twice even for
        a sequence that did not exist yet.
        """
        name = name or settings.JOB_SEQUENCE_NAME

        stmt = self._insert()(Counter).values(name=name, value=1)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Counter.name],
            set_={"value": Counter.value + 1},
        ).returning(Counter.value)

        value = (await self.db.execute(stmt)).scalar_one()
        if value == 1:
            logger.info("Sequence counter %r started", name)
        return value
