"""Project directory routes."""

from fastapi import APIRouter

from project_hub.api.deps import DbSession
from project_hub.schemas.project import ProjectIdRequest, ProjectListResponse, ProjectResponse
from project_hub.services.project_service import ProjectService

router = APIRouter()


@router.post("/list_projects", response_model=ProjectListResponse)
async def list_projects(db: DbSession):
    """List all tracked projects by name."""
    projects = await ProjectService(db).list_projects()
    return ProjectListResponse(
        projects=[ProjectResponse.model_validate(p) for p in projects],
    )


@router.post("/get_project", response_model=ProjectResponse)
async def get_project(body: ProjectIdRequest, db: DbSession):
    """Get a project by ID."""
    project = await ProjectService(db).get_project(body.project_id)
    return ProjectResponse.model_validate(project)
