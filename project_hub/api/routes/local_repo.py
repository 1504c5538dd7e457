"""Local repository routes: branches, commits and pending changes."""

from fastapi import APIRouter

from project_hub.api.deps import DbSession, Locks
from project_hub.schemas.common import MessageResponse, SuccessResponse
from project_hub.schemas.project import ProjectIdRequest
from project_hub.schemas.vcs import (
    BranchNameRequest,
    BranchResponse,
    ChangeResponse,
    CommitResponse,
    CreateBranchRequest,
    CreateCommitRequest,
    RestoreCommitRequest,
)
from project_hub.services.branch_service import BranchService
from project_hub.services.change_service import ChangeService
from project_hub.services.commit_service import CommitService

router = APIRouter()


@router.post("/init_local_repository", response_model=MessageResponse)
async def init_local_repository(body: ProjectIdRequest, db: DbSession, locks: Locks):
    """Create the main branch and initial commit; no-op when already initialized."""
    created = await BranchService(db, locks).initialize_repository(body.project_id)
    if not created:
        return MessageResponse(message="Repository already initialized")
    return MessageResponse(message="Local repository initialized successfully")


@router.post("/get_local_commit_history", response_model=list[CommitResponse])
async def get_local_commit_history(body: ProjectIdRequest, db: DbSession, locks: Locks):
    """Commits of a project, newest first, with their changes."""
    history = await CommitService(db, locks).get_commit_history(body.project_id)
    return [CommitResponse.from_entry(entry) for entry in history]


@router.post("/get_pending_changes", response_model=list[ChangeResponse])
async def get_pending_changes(body: ProjectIdRequest, db: DbSession):
    changes = await ChangeService(db).get_pending_changes(body.project_id)
    return [ChangeResponse.model_validate(c) for c in changes]


@router.post("/list_local_branches", response_model=list[BranchResponse])
async def list_local_branches(body: ProjectIdRequest, db: DbSession, locks: Locks):
    branches = await BranchService(db, locks).list_branches(body.project_id)
    return [BranchResponse.model_validate(b) for b in branches]


@router.post("/create_local_commit", response_model=CommitResponse)
async def create_local_commit(body: CreateCommitRequest, db: DbSession, locks: Locks):
    """Commit all pending changes onto the active branch."""
    entry = await CommitService(db, locks).create_commit(
        project_id=body.project_id,
        message=body.message,
        author_name=body.author_name,
        author_email=body.author_email,
    )
    return CommitResponse.from_entry(entry)


@router.post("/create_local_branch", response_model=BranchResponse)
async def create_local_branch(body: CreateBranchRequest, db: DbSession, locks: Locks):
    branch = await BranchService(db, locks).create_branch(
        project_id=body.project_id,
        name=body.name,
        starting_commit_id=body.starting_commit_id,
    )
    return BranchResponse.model_validate(branch)


@router.post("/switch_local_branch", response_model=BranchResponse)
async def switch_local_branch(body: BranchNameRequest, db: DbSession, locks: Locks):
    branch = await BranchService(db, locks).switch_active_branch(
        body.project_id, body.branch_name
    )
    return BranchResponse.model_validate(branch)


@router.post("/restore_to_local_commit", response_model=SuccessResponse)
async def restore_to_local_commit(body: RestoreCommitRequest, db: DbSession, locks: Locks):
    """Move the active branch's head to a commit."""
    await BranchService(db, locks).restore_active_head_to_commit(body.project_id, body.commit_id)
    return SuccessResponse(message=f"Project restored to commit {body.commit_id}")


@router.post("/restore_to_local_branch", response_model=SuccessResponse)
async def restore_to_local_branch(body: BranchNameRequest, db: DbSession, locks: Locks):
    """Copy another branch's head onto the active branch."""
    await BranchService(db, locks).restore_active_head_to_branch(
        body.project_id, body.branch_name
    )
    return SuccessResponse(message=f"Project restored to branch {body.branch_name}")
