"""API dependencies for dependency injection."""

from collections.abc import AsyncIterator
from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from project_hub.database import Database, ProjectLocks


def get_database(request: Request) -> Database:
    """The record store opened by the application lifespan."""
    return request.app.state.database


async def get_db(database: Annotated[Database, Depends(get_database)]) -> AsyncIterator[AsyncSession]:
    """One session per request."""
    async with database.session() as session:
        yield session


def get_locks(database: Annotated[Database, Depends(get_database)]) -> ProjectLocks:
    return database.locks


# Type aliases for cleaner signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]
Locks = Annotated[ProjectLocks, Depends(get_locks)]
