"""Pytest configuration and fixtures."""

import itertools
from datetime import datetime, timedelta

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from project_hub.config import Settings
from project_hub.database import Database
from project_hub.main import create_app
from project_hub.models import Change, ChangeFile, FileSnapshot, Project

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0)


@pytest.fixture
def settings(tmp_path) -> Settings:
    """Settings pointing at a throwaway SQLite file."""
    return Settings(
        _env_file=None,
        database_url=f"sqlite+aiosqlite:///{(tmp_path / 'project_hub.db').as_posix()}",
        cors_origins=["http://localhost:3000"],
    )


@pytest.fixture
def workspace(tmp_path):
    """Project working directory on disk."""
    path = tmp_path / "workspace"
    path.mkdir()
    return path


@pytest_asyncio.fixture
async def database(settings):
    """Record store with the full schema."""
    database = Database(settings.database_url)
    await database.create_schema()
    yield database
    await database.dispose()


@pytest_asyncio.fixture
async def db(database):
    """A session on the test database."""
    async with database.session() as session:
        yield session


@pytest.fixture
def locks(database):
    return database.locks


@pytest_asyncio.fixture
async def project(db, workspace) -> Project:
    """Project P1 with no local repository yet."""
    project = Project(
        id="P1",
        name="Demo",
        description="Demo project",
        type="web",
        path=str(workspace),
        repository_owner="octo",
        repository_name="demo",
        status="active",
        technologies=["python", "react"],
    )
    db.add(project)
    await db.commit()
    return project


@pytest_asyncio.fixture
async def other_project(db) -> Project:
    project = Project(id="P2", name="Another", status="active")
    db.add(project)
    await db.commit()
    return project


@pytest.fixture
def add_change(db):
    """Factory recording a pending change, as the change tracker would."""
    counter = itertools.count(1)

    async def _add_change(
        project_id: str = "P1",
        kind: str = "modify",
        files: tuple[str, ...] = (),
        description: str | None = None,
    ) -> Change:
        n = next(counter)
        change = Change(
            id=f"change_{n}",
            project_id=project_id,
            kind=kind,
            description=description or f"change {n}",
            timestamp=BASE_TIME + timedelta(minutes=n),
            committed=False,
        )
        db.add(change)
        await db.flush()
        db.add_all(ChangeFile(change_id=change.id, file_path=path) for path in files)
        await db.commit()
        return change

    return _add_change


@pytest.fixture
def add_snapshot(db):
    """Factory writing an authoritative file snapshot row."""

    async def _add_snapshot(
        snapshot_id: str,
        commit_id: str,
        file_path: str,
        operation: str = "modify",
        content: str | None = None,
    ) -> FileSnapshot:
        snapshot = FileSnapshot(
            id=snapshot_id,
            commit_id=commit_id,
            file_path=file_path,
            operation=operation,
            content=content,
        )
        db.add(snapshot)
        await db.commit()
        return snapshot

    return _add_snapshot


@pytest_asyncio.fixture
async def client(settings, database):
    """HTTP client against the app, sharing the test database."""
    app = create_app(settings)
    app.state.database = database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
