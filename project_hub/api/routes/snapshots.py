"""File snapshot routes."""

from fastapi import APIRouter

from project_hub.api.deps import DbSession
from project_hub.schemas.snapshot import (
    CommitIdRequest,
    FileContentResponse,
    FileSnapshotResponse,
    SnapshotIdRequest,
)
from project_hub.services.snapshot_service import SnapshotService

router = APIRouter()


@router.post("/get_file_snapshots", response_model=list[FileSnapshotResponse])
async def get_file_snapshots(body: CommitIdRequest, db: DbSession):
    """Files of a commit; see ``SnapshotService`` for the fallback tiers."""
    entries = await SnapshotService(db).get_file_snapshots(body.commit_id)
    return [FileSnapshotResponse.model_validate(e) for e in entries]


@router.post("/get_file_content", response_model=FileContentResponse)
async def get_file_content(body: SnapshotIdRequest, db: DbSession):
    content = await SnapshotService(db).get_file_content(body.snapshot_id)
    return FileContentResponse.model_validate(content)
