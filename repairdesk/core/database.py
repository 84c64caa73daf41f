"""
Database connection management.
The store handle is an explicit object created at startup and closed at shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all models."""
    pass


class Database:
    """
    Owns the async engine and the session factory.

    Usage:
        db = Database(settings.DATABASE_URL)
        await db.connect()
        ...
        await db.close()
    """

    def __init__(self, url: str, echo: bool = False, **engine_kwargs):
        self.url = url
        self.echo = echo
        self.engine_kwargs = engine_kwargs
        self.engine: AsyncEngine | None = None
        self._sessionmaker: async_sessionmaker[AsyncSession] | None = None

    @property
    def is_connected(self) -> bool:
        return self.engine is not None

    async def connect(self) -> None:
        """Create the engine and session factory."""
        if self.engine is not None:
            return
        self.engine = create_async_engine(self.url, echo=self.echo, **self.engine_kwargs)
        self._sessionmaker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Database engine created (%s)", self.engine.url.render_as_string(hide_password=True))

    async def close(self) -> None:
        """Dispose of every pooled connection."""
        if self.engine is None:
            return
        await self.engine.dispose()
        self.engine = None
        self._sessionmaker = None
        logger.info("Database engine disposed")

    async def create_all(self) -> None:
        """Create missing tables (development only, production uses Alembic)."""
        # Import models so they register on Base.metadata
        import repairdesk.models  # noqa: F401

        async with self._require_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def ping(self) -> bool:
        """Return True if the store answers a trivial query."""
        if self.engine is None:
            return False
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """
        One session per unit of work.
        Commits if the caller finished cleanly, rolls back otherwise.
        """
        if self._sessionmaker is None:
            raise RuntimeError("Database.connect() has not been called")

        async with self._sessionmaker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    def _require_engine(self) -> AsyncEngine:
        if self.engine is None:
            raise RuntimeError("Database.connect() has not been called")
        return self.engine


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: request-scoped session from the application's Database."""
    database: Database = request.app.state.db
    async with database.session() as session:
        yield session
