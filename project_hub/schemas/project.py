"""Project schemas."""

from datetime import datetime

from pydantic import field_validator

from project_hub.schemas.common import CamelModel


class ProjectIdRequest(CamelModel):
    """Body of every command scoped to one project."""

    project_id: str


class RepositoryRef(CamelModel):
    owner: str
    name: str | None = None


class ProjectResponse(CamelModel):
    """Project response schema."""

    id: str
    name: str
    description: str | None = None
    type: str | None = None
    path: str | None = None
    status: str | None = None
    last_commit: str | None = None
    technologies: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None
    repository: RepositoryRef | None = None

    @field_validator("technologies", mode="before")
    @classmethod
    def default_technologies(cls, v):
        return v or []


class ProjectListResponse(CamelModel):
    projects: list[ProjectResponse]
