"""Branch ledger: local branches and the active-branch pointer."""

import logging

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from project_hub.config import Settings, get_settings
from project_hub.database import ProjectLocks, atomic, generate_id, utcnow
from project_hub.exceptions import (
    BranchExistsError,
    BranchNotFoundError,
    CommitNotFoundError,
    NoActiveBranchError,
)
from project_hub.models.branch import LocalBranch
from project_hub.models.commit import LocalCommit
from project_hub.services.project_service import ProjectService

logger = logging.getLogger(__name__)

INITIAL_BRANCH_NAME = "main"
INITIAL_COMMIT_MESSAGE = "Initial commit"


class BranchService:
    """Owns branch rows and the one-active-branch-per-project rule.

    Every mutation runs under the project's lock and inside a single
    transaction, so readers never see zero or two active branches.
    """

    def __init__(
        self,
        db: AsyncSession,
        locks: ProjectLocks,
        settings: Settings | None = None,
    ):
        self.db = db
        self.locks = locks
        self.settings = settings or get_settings()

    async def initialize_repository(self, project_id: str) -> bool:
        """Create the ``main`` branch and its initial commit.

        Returns:
            False when the project already has branches (nothing is written),
            True when the repository was created.

        Raises:
            ProjectNotFoundError: No project has this id.
        """
        async with self.locks.hold(project_id):
            async with atomic(self.db):
                await ProjectService(self.db).get_project(project_id)

                result = await self.db.execute(
                    select(func.count())
                    .select_from(LocalBranch)
                    .where(LocalBranch.project_id == project_id)
                )
                if result.scalar_one() > 0:
                    return False

                branch = LocalBranch(
                    id=generate_id("branch"),
                    project_id=project_id,
                    name=INITIAL_BRANCH_NAME,
                    is_active=True,
                )
                self.db.add(branch)
                await self.db.flush()

                commit = LocalCommit(
                    id=generate_id("commit"),
                    project_id=project_id,
                    message=INITIAL_COMMIT_MESSAGE,
                    author_name=self.settings.system_author_name,
                    author_email=self.settings.system_author_email,
                    timestamp=utcnow(),
                    parent_commit_id=None,
                    pushed_to_remote=False,
                )
                self.db.add(commit)
                await self.db.flush()

                branch.current_commit_id = commit.id

        logger.info("Initialized local repository for project %s (head %s)", project_id, commit.id)
        return True

    async def list_branches(self, project_id: str) -> list[LocalBranch]:
        """All branches of a project, active first, then by name."""
        result = await self.db.execute(
            select(LocalBranch)
            .where(LocalBranch.project_id == project_id)
            .order_by(LocalBranch.is_active.desc(), LocalBranch.name)
        )
        return list(result.scalars().all())

    async def get_active_branch(self, project_id: str) -> LocalBranch | None:
        result = await self.db.execute(
            select(LocalBranch)
            .where(LocalBranch.project_id == project_id)
            .where(LocalBranch.is_active.is_(True))
        )
        return result.scalar_one_or_none()

    async def get_branch(self, project_id: str, name: str) -> LocalBranch | None:
        result = await self.db.execute(
            select(LocalBranch)
            .where(LocalBranch.project_id == project_id)
            .where(LocalBranch.name == name)
        )
        return result.scalar_one_or_none()

    async def _require_commit(self, project_id: str, commit_id: str) -> LocalCommit:
        commit = await self.db.get(LocalCommit, commit_id)
        if commit is None or commit.project_id != project_id:
            raise CommitNotFoundError(commit_id)
        return commit

    async def create_branch(
        self,
        project_id: str,
        name: str,
        starting_commit_id: str | None = None,
    ) -> LocalBranch:
        """Create an inactive branch.

        Args:
            project_id: Owning project
            name: Branch name, unique within the project
            starting_commit_id: Head of the new branch; defaults to the
                active branch's head

        Raises:
            BranchExistsError: The name is taken in this project.
            NoActiveBranchError: No starting commit given and no active branch.
            CommitNotFoundError: The starting commit is not in this project.
        """
        async with self.locks.hold(project_id):
            async with atomic(self.db):
                if await self.get_branch(project_id, name) is not None:
                    raise BranchExistsError(name)

                if starting_commit_id:
                    await self._require_commit(project_id, starting_commit_id)
                    head = starting_commit_id
                else:
                    active = await self.get_active_branch(project_id)
                    if active is None:
                        raise NoActiveBranchError()
                    head = active.current_commit_id

                branch = LocalBranch(
                    id=generate_id("branch"),
                    project_id=project_id,
                    name=name,
                    current_commit_id=head,
                    is_active=False,
                )
                self.db.add(branch)

        logger.info("Created branch %s in project %s at %s", name, project_id, head)
        return branch

    async def switch_active_branch(self, project_id: str, name: str) -> LocalBranch:
        """Make the named branch the project's only active branch.

        Raises:
            BranchNotFoundError: No branch of that name in the project.
        """
        async with self.locks.hold(project_id):
            async with atomic(self.db):
                branch = await self.get_branch(project_id, name)
                if branch is None:
                    raise BranchNotFoundError(name)

                # Clear first: the partial unique index allows one active row
                await self.db.execute(
                    update(LocalBranch)
                    .where(LocalBranch.project_id == project_id)
                    .values(is_active=False)
                )
                branch.is_active = True

        logger.info("Switched project %s to branch %s", project_id, name)
        return branch

    async def restore_active_head_to_commit(self, project_id: str, commit_id: str) -> LocalBranch:
        """Point the active branch at an existing commit of the project.

        Other branches are left untouched.

        Raises:
            CommitNotFoundError: The commit is not in this project.
            NoActiveBranchError: The project has no active branch.
        """
        async with self.locks.hold(project_id):
            async with atomic(self.db):
                await self._require_commit(project_id, commit_id)

                active = await self.get_active_branch(project_id)
                if active is None:
                    raise NoActiveBranchError()
                active.current_commit_id = commit_id

        logger.info("Restored branch %s of project %s to commit %s", active.name, project_id, commit_id)
        return active

    async def restore_active_head_to_branch(self, project_id: str, branch_name: str) -> LocalBranch:
        """Copy another branch's head pointer onto the active branch.

        The copy is taken at call time; later moves of the source branch do
        not affect the active branch.

        Raises:
            BranchNotFoundError: No branch of that name in the project.
            NoActiveBranchError: The project has no active branch.
        """
        async with self.locks.hold(project_id):
            async with atomic(self.db):
                source = await self.get_branch(project_id, branch_name)
                if source is None:
                    raise BranchNotFoundError(branch_name)

                active = await self.get_active_branch(project_id)
                if active is None:
                    raise NoActiveBranchError()
                active.current_commit_id = source.current_commit_id

        logger.info(
            "Restored branch %s of project %s to head of %s (%s)",
            active.name,
            project_id,
            branch_name,
            source.current_commit_id,
        )
        return active
