"""Local branch, commit and change schemas."""

from datetime import datetime

from pydantic import AliasChoices, Field

from project_hub.schemas.common import CamelModel


class CreateCommitRequest(CamelModel):
    project_id: str
    message: str = Field(..., min_length=1)
    author_name: str | None = None
    author_email: str | None = None


class CreateBranchRequest(CamelModel):
    project_id: str
    name: str = Field(..., min_length=1, max_length=255)
    starting_commit_id: str | None = None


class BranchNameRequest(CamelModel):
    """Switch or restore by branch name."""

    project_id: str
    branch_name: str = Field(..., min_length=1)


class RestoreCommitRequest(CamelModel):
    project_id: str
    commit_id: str


class ChangeResponse(CamelModel):
    id: str
    project_id: str
    type: str = Field(validation_alias=AliasChoices("kind", "type"))
    description: str | None = None
    timestamp: datetime
    committed: bool


class BranchResponse(CamelModel):
    id: str
    project_id: str
    name: str
    current_commit_id: str | None = None
    is_active: bool


class CommitResponse(CamelModel):
    """Commit with the changes it consumed."""

    id: str
    project_id: str
    message: str
    author_name: str
    author_email: str | None = None
    timestamp: datetime
    parent_commit_id: str | None = None
    pushed_to_remote: bool = False
    remote_commit_sha: str | None = None
    changes: list[ChangeResponse] = []

    @classmethod
    def from_entry(cls, entry) -> "CommitResponse":
        """Build from a ``CommitWithChanges``."""
        response = cls.model_validate(entry.commit)
        response.changes = [ChangeResponse.model_validate(c) for c in entry.changes]
        return response
