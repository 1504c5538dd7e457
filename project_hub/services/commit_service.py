"""Commit chain: creating commits and reading a project's history."""

import logging
from dataclasses import dataclass, field
from datetime import timedelta

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from project_hub.config import Settings, get_settings
from project_hub.database import ProjectLocks, atomic, generate_id, utcnow
from project_hub.exceptions import NoActiveBranchError, NoPendingChangesError
from project_hub.models.change import Change
from project_hub.models.commit import LocalCommit
from project_hub.services.branch_service import BranchService
from project_hub.services.change_service import ChangeService

logger = logging.getLogger(__name__)


@dataclass
class CommitWithChanges:
    """A commit together with the changes it consumed."""

    commit: LocalCommit
    changes: list[Change] = field(default_factory=list)


class CommitService:
    """Creates commits on the active branch and reads commit history."""

    def __init__(
        self,
        db: AsyncSession,
        locks: ProjectLocks,
        settings: Settings | None = None,
    ):
        self.db = db
        self.locks = locks
        self.settings = settings or get_settings()
        self.branches = BranchService(db, locks, self.settings)
        self.changes = ChangeService(db)

    async def create_commit(
        self,
        project_id: str,
        message: str,
        author_name: str | None = None,
        author_email: str | None = None,
    ) -> CommitWithChanges:
        """Commit every pending change of the project onto the active branch.

        Inserts the commit with the active head as parent, advances the head,
        and marks the consumed changes committed, all in one transaction.

        Args:
            project_id: Owning project
            message: Commit message
            author_name: Defaults to the configured default author
            author_email: Defaults to an empty string

        Raises:
            NoPendingChangesError: The project has nothing to commit.
            NoActiveBranchError: The project has no active branch.
        """
        async with self.locks.hold(project_id):
            async with atomic(self.db):
                pending = await self.changes.get_pending_changes(project_id)
                if not pending:
                    raise NoPendingChangesError()

                branch = await self.branches.get_active_branch(project_id)
                if branch is None:
                    raise NoActiveBranchError()

                parent_id = branch.current_commit_id
                timestamp = utcnow()
                if parent_id is not None:
                    parent = await self.db.get(LocalCommit, parent_id)
                    # Keep the parent strictly older than its child
                    if parent is not None and parent.timestamp >= timestamp:
                        timestamp = parent.timestamp + timedelta(microseconds=1)

                commit = LocalCommit(
                    id=generate_id("commit"),
                    project_id=project_id,
                    message=message,
                    author_name=author_name or self.settings.default_author_name,
                    author_email=author_email or "",
                    timestamp=timestamp,
                    parent_commit_id=parent_id,
                    pushed_to_remote=False,
                )
                self.db.add(commit)
                await self.db.flush()

                branch.current_commit_id = commit.id
                await self.changes.mark_committed([c.id for c in pending], commit.id)
                changes = await self.changes.get_commit_changes(commit.id)

        logger.info(
            "Created commit %s on branch %s of project %s (parent %s, %d changes)",
            commit.id,
            branch.name,
            project_id,
            parent_id,
            len(pending),
        )
        return CommitWithChanges(commit=commit, changes=changes)

    async def get_commit_history(self, project_id: str) -> list[CommitWithChanges]:
        """All commits of a project, newest first, each with its changes."""
        result = await self.db.execute(
            select(LocalCommit)
            .where(LocalCommit.project_id == project_id)
            .order_by(LocalCommit.timestamp.desc())
        )
        commits = list(result.scalars().all())

        changes = await self.changes.get_changes_for_commits([c.id for c in commits])
        return [CommitWithChanges(commit=c, changes=changes.get(c.id, [])) for c in commits]
