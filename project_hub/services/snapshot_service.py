"""Snapshot resolver: the file list of a commit.

Resolution stops at the first tier that yields entries:

1. authoritative rows from ``file_snapshots``
2. entries derived from the commit's changes and their ``change_files``
3. a fixed placeholder set, only for commits that exist

Derived and placeholder entries are flagged ``synthetic`` and keep the
``synthetic_`` / ``dummy_`` id prefixes the dashboard already knows.
"""

import logging
import os
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from pathlib import Path

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from project_hub.database import utcnow
from project_hub.exceptions import SnapshotNotFoundError
from project_hub.models.change import Change, ChangeFile
from project_hub.models.commit import CommitChange, LocalCommit
from project_hub.models.file_snapshot import FileSnapshot
from project_hub.models.project import Project

logger = logging.getLogger(__name__)

SOURCE_AUTHORITATIVE = "authoritative"
SOURCE_DERIVED = "derived"
SOURCE_PLACEHOLDER = "placeholder"

DERIVED_ID_PREFIX = "synthetic_"
PLACEHOLDER_ID_PREFIX = "dummy_"

SYNTHETIC_CONTENT_MESSAGE = (
    "Content not available for this file. "
    "This is a synthetic snapshot created from change records."
)

STATUS_BY_OPERATION = {
    "add": "Added",
    "delete": "Deleted",
    "modify": "Modified",
}

# (file path, operation, size, created offset, modified offset)
PLACEHOLDER_FILES = [
    ("example/path/file1.js", "modify", 1024, timedelta(days=1), timedelta(0)),
    ("example/path/file2.js", "add", 2048, timedelta(0), timedelta(0)),
    ("example/path/file3.js", "delete", 512, timedelta(days=2), timedelta(hours=12)),
]

_UNSAFE_PATH_CHARS = re.compile(r"[^a-zA-Z0-9]")


@dataclass
class SnapshotEntry:
    """One file touched by a commit."""

    id: str
    commit_id: str
    file_path: str
    operation: str
    status: str
    source: str = SOURCE_AUTHORITATIVE
    size: int | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None

    @property
    def full_path(self) -> str:
        return self.file_path

    @property
    def synthetic(self) -> bool:
        return self.source != SOURCE_AUTHORITATIVE


@dataclass
class FileContent:
    content: str | None
    operation: str
    file_path: str
    synthetic: bool = False


def operation_status(operation: str) -> str:
    """Past-tense label for a change kind: add -> Added, rename -> Rename."""
    if operation in STATUS_BY_OPERATION:
        return STATUS_BY_OPERATION[operation]
    return operation[:1].upper() + operation[1:]


def derived_snapshot_id(change_id: str, file_path: str) -> str:
    return f"{DERIVED_ID_PREFIX}{change_id}_{_UNSAFE_PATH_CHARS.sub('_', file_path)}"


def is_synthetic_id(snapshot_id: str) -> bool:
    return snapshot_id.startswith((DERIVED_ID_PREFIX, PLACEHOLDER_ID_PREFIX))


def _utc(timestamp: float) -> datetime:
    return datetime.fromtimestamp(timestamp, timezone.utc).replace(tzinfo=None)


def _file_metadata(root: Path, file_path: str) -> tuple[int | None, datetime | None, datetime | None]:
    """Size, creation and modification time of a project file, if readable.

    The path is always taken relative to ``root``; anything resolving outside
    the project directory gets no metadata.
    """
    try:
        base = root.resolve()
        full_path = (base / file_path.lstrip("/\\")).resolve()
        if not full_path.is_relative_to(base):
            logger.debug("Skipping metadata for %r outside %s", file_path, base)
            return None, None, None
        stat = full_path.stat()
    except (OSError, ValueError) as exc:
        logger.debug("No metadata for %r under %s: %s", file_path, root, exc)
        return None, None, None

    created = getattr(stat, "st_birthtime", stat.st_ctime)
    return (
        stat.st_size,
        _utc(created),
        _utc(stat.st_mtime),
    )


class SnapshotService:
    """Materializes per-file views of commits."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_file_snapshots(self, commit_id: str) -> list[SnapshotEntry]:
        """Resolve the files of a commit through the fallback tiers.

        An unknown commit id does not raise: it yields no authoritative or
        derived rows, skips the placeholder tier and returns an empty list.
        """
        snapshots = await self._authoritative_snapshots(commit_id)
        if snapshots:
            return snapshots

        commit = await self.db.get(LocalCommit, commit_id)

        derived = await self._derived_snapshots(commit_id, commit)
        if derived:
            logger.debug("Derived %d snapshots for commit %s", len(derived), commit_id)
            return derived

        if commit is None:
            logger.debug("Commit %s not found, no snapshots", commit_id)
            return []

        logger.debug("Using placeholder snapshots for commit %s", commit_id)
        return self._placeholder_snapshots(commit_id)

    async def _authoritative_snapshots(self, commit_id: str) -> list[SnapshotEntry]:
        result = await self.db.execute(
            select(FileSnapshot)
            .where(FileSnapshot.commit_id == commit_id)
            .order_by(FileSnapshot.file_path)
        )
        return [
            SnapshotEntry(
                id=row.id,
                commit_id=row.commit_id,
                file_path=row.file_path,
                operation=row.operation,
                status=operation_status(row.operation),
                size=row.size,
                created_at=row.created_at,
                modified_at=row.modified_at,
            )
            for row in result.scalars().all()
        ]

    async def _derived_snapshots(
        self, commit_id: str, commit: LocalCommit | None
    ) -> list[SnapshotEntry]:
        result = await self.db.execute(
            select(Change.id, Change.kind, ChangeFile.file_path)
            .join(CommitChange, CommitChange.change_id == Change.id)
            .join(ChangeFile, ChangeFile.change_id == Change.id)
            .where(CommitChange.commit_id == commit_id)
            .order_by(ChangeFile.file_path)
        )
        rows = result.all()
        if not rows:
            return []

        root = None
        if commit is not None:
            project = await self.db.get(Project, commit.project_id)
            if project is not None and project.path:
                root = Path(os.path.expanduser(project.path))

        entries = []
        for change_id, kind, file_path in rows:
            operation = kind or "modify"
            size = created_at = modified_at = None
            if root is not None:
                size, created_at, modified_at = _file_metadata(root, file_path)

            entries.append(
                SnapshotEntry(
                    id=derived_snapshot_id(change_id, file_path),
                    commit_id=commit_id,
                    file_path=file_path,
                    operation=operation,
                    status=operation_status(operation),
                    source=SOURCE_DERIVED,
                    size=size,
                    created_at=created_at,
                    modified_at=modified_at,
                )
            )
        return entries

    def _placeholder_snapshots(self, commit_id: str) -> list[SnapshotEntry]:
        now = utcnow()
        return [
            SnapshotEntry(
                id=f"{PLACEHOLDER_ID_PREFIX}{commit_id}_{index}",
                commit_id=commit_id,
                file_path=file_path,
                operation=operation,
                status=operation_status(operation),
                source=SOURCE_PLACEHOLDER,
                size=size,
                created_at=now - created_ago,
                modified_at=now - modified_ago,
            )
            for index, (file_path, operation, size, created_ago, modified_ago) in enumerate(
                PLACEHOLDER_FILES, start=1
            )
        ]

    async def get_file_content(self, snapshot_id: str) -> FileContent:
        """Stored content of an authoritative snapshot.

        Synthetic ids get a fixed explanatory message. A derived id whose
        change still lists the file reports that change's kind and path;
        otherwise both are decoded from the id on a best-effort basis.

        Raises:
            SnapshotNotFoundError: No authoritative snapshot has this id.
        """
        if is_synthetic_id(snapshot_id):
            resolved = None
            if snapshot_id.startswith(DERIVED_ID_PREFIX):
                resolved = await self._resolve_derived_id(snapshot_id)
            operation, file_path = resolved or self._decode_synthetic_id(snapshot_id)
            return FileContent(
                content=SYNTHETIC_CONTENT_MESSAGE,
                operation=operation,
                file_path=file_path,
                synthetic=True,
            )

        snapshot = await self.db.get(FileSnapshot, snapshot_id)
        if snapshot is None:
            raise SnapshotNotFoundError(snapshot_id)

        return FileContent(
            content=snapshot.content,
            operation=snapshot.operation,
            file_path=snapshot.file_path,
        )

    async def _resolve_derived_id(self, snapshot_id: str) -> tuple[str, str] | None:
        """(operation, path) of the change file a derived id was built from."""
        encoded = snapshot_id[len(DERIVED_ID_PREFIX):]
        # Change ids may contain underscores; try every split point
        candidates = [encoded[:index] for index, char in enumerate(encoded) if char == "_"]
        if not candidates:
            return None

        result = await self.db.execute(
            select(Change.id, Change.kind, ChangeFile.file_path)
            .join(ChangeFile, ChangeFile.change_id == Change.id)
            .where(Change.id.in_(candidates))
        )
        for change_id, kind, file_path in result.all():
            if derived_snapshot_id(change_id, file_path) == snapshot_id:
                return kind or "modify", file_path
        return None

    def _decode_synthetic_id(self, snapshot_id: str) -> tuple[str, str]:
        """Best-effort (operation, path) from a synthetic snapshot id."""
        if snapshot_id.startswith(PLACEHOLDER_ID_PREFIX):
            _, _, index = snapshot_id.rpartition("_")
            if index.isdigit() and 1 <= int(index) <= len(PLACEHOLDER_FILES):
                file_path, operation, *_ = PLACEHOLDER_FILES[int(index) - 1]
                return operation, file_path

        if "_add_" in snapshot_id:
            operation = "add"
        elif "_delete_" in snapshot_id:
            operation = "delete"
        else:
            operation = "modify"

        file_path = "/".join(snapshot_id.split("_")[2:])
        return operation, file_path
