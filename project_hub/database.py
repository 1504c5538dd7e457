"""Database engine, sessions and transaction helpers."""

import asyncio
import logging
import uuid
from collections import Counter
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from project_hub.exceptions import StorageError

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all models."""


def generate_id(prefix: str) -> str:
    """Return a collision-resistant record id such as ``commit_3f2a...``."""
    return f"{prefix}_{uuid.uuid4().hex}"


def utcnow() -> datetime:
    """Naive UTC timestamp, the format stored in every table."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class ProjectLocks:
    """One asyncio lock per project id.

    Held around read-then-write sequences on branches and commits so that
    two callers cannot both build on the same branch head. A project's lock
    is dropped once no caller holds or waits for it.
    """

    def __init__(self):
        self._locks: dict[str, asyncio.Lock] = {}
        self._users: Counter[str] = Counter()

    def __len__(self) -> int:
        return len(self._locks)

    @asynccontextmanager
    async def hold(self, project_id: str) -> AsyncIterator[None]:
        lock = self._locks.setdefault(project_id, asyncio.Lock())
        self._users[project_id] += 1
        try:
            async with lock:
                yield
        finally:
            self._users[project_id] -= 1
            if not self._users[project_id]:
                del self._users[project_id]
                del self._locks[project_id]


def _enable_sqlite_transactions(engine: AsyncEngine) -> None:
    """Take over BEGIN from the driver and turn on foreign keys.

    pysqlite/aiosqlite defer BEGIN until the first DML statement, which
    leaves reads outside the transaction that later writes happen in.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


class Database:
    """Process-wide record store: one engine, its session factory and project locks."""

    def __init__(self, url: str, echo: bool = False):
        self.url = make_url(url)
        self.engine = create_async_engine(url, echo=echo)
        if self.url.get_backend_name() == "sqlite":
            _enable_sqlite_transactions(self.engine)
        self.session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False
        )
        self.locks = ProjectLocks()

    async def create_schema(self) -> None:
        """Create any missing tables."""
        # Register every model on Base.metadata
        import project_hub.models  # noqa: F401

        if self.url.get_backend_name() == "sqlite" and self.url.database not in (None, "", ":memory:"):
            Path(self.url.database).expanduser().parent.mkdir(parents=True, exist_ok=True)

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database schema ready at %s", self.url.render_as_string(hide_password=True))

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        async with self.session_factory() as session:
            yield session

    async def dispose(self) -> None:
        await self.engine.dispose()
        logger.info("Database connections closed")


async def init_db(database: Database, create_schema: bool = True) -> None:
    """Prepare the database at application startup."""
    if create_schema:
        await database.create_schema()


@asynccontextmanager
async def atomic(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """Run a block of writes as one transaction.

    Commits when the block finishes and rolls back every statement of the
    block when it raises. Driver failures surface as ``StorageError``.
    """
    try:
        yield session
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Transaction rolled back after storage failure")
        raise StorageError("Internal storage error") from exc
    except BaseException:
        await session.rollback()
        raise
