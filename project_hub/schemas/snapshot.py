"""File snapshot schemas."""

from datetime import datetime
from typing import Literal

from project_hub.schemas.common import CamelModel


class CommitIdRequest(CamelModel):
    commit_id: str


class SnapshotIdRequest(CamelModel):
    snapshot_id: str


class FileSnapshotResponse(CamelModel):
    """One file of a commit; ``synthetic`` entries have no stored content."""

    id: str
    commit_id: str
    file_path: str
    full_path: str
    operation: str
    status: str
    size: int | None = None
    created_at: datetime | None = None
    modified_at: datetime | None = None
    source: Literal["authoritative", "derived", "placeholder"]
    synthetic: bool


class FileContentResponse(CamelModel):
    content: str | None = None
    operation: str
    file_path: str
    synthetic: bool = False
