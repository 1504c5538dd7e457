"""Read-only directory of tracked projects."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from project_hub.exceptions import ProjectNotFoundError
from project_hub.models.project import Project


class ProjectService:
    """Lists and looks up project metadata."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_projects(self) -> list[Project]:
        result = await self.db.execute(select(Project).order_by(Project.name))
        return list(result.scalars().all())

    async def get_project(self, project_id: str) -> Project:
        """Get a project by id.

        Raises:
            ProjectNotFoundError: No project has this id.
        """
        project = await self.db.get(Project, project_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project
