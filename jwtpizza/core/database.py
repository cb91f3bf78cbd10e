"""
Database configuration with SQLAlchemy async support.
Uses SQLite (aiosqlite) by default; any async SQLAlchemy URL works.
"""

from typing import Any, AsyncIterator

from fastapi import Request
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""
    pass


def _set_sqlite_pragma(dbapi_connection, connection_record):
    """Enable foreign keys so sessions are removed with their user."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


class Database:
    """Owns the async engine and session factory for one application."""

    def __init__(self, url: str, echo: bool = False, **engine_kwargs: Any):
        self.url = url
        self.engine: AsyncEngine = create_async_engine(
            url, echo=echo, future=True, **engine_kwargs
        )
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autocommit=False,
            autoflush=False,
        )
        if self.engine.dialect.name == "sqlite":
            event.listen(self.engine.sync_engine, "connect", _set_sqlite_pragma)

    def session(self) -> AsyncSession:
        return self.session_maker()

    async def init(self) -> None:
        """Create all tables."""
        # Models must be imported so their tables are registered on Base
        import jwtpizza.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def close(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """Dependency for getting a database session bound to the app's Database."""
    database: Database = request.app.state.database
    async with database.session() as session:
        try:
            yield session
        finally:
            await session.close()
