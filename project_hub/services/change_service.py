"""Change ledger: pending changes and their promotion into commits."""

import logging
from collections import defaultdict

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from project_hub.models.change import Change
from project_hub.models.commit import CommitChange

logger = logging.getLogger(__name__)


class ChangeService:
    """Tracks uncommitted changes per project."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_pending_changes(self, project_id: str) -> list[Change]:
        """Changes not yet consumed by a commit, newest first."""
        result = await self.db.execute(
            select(Change)
            .where(Change.project_id == project_id)
            .where(Change.committed.is_(False))
            .order_by(Change.timestamp.desc())
        )
        return list(result.scalars().all())

    async def get_commit_changes(self, commit_id: str) -> list[Change]:
        """Committed changes associated with one commit."""
        changes = await self.get_changes_for_commits([commit_id])
        return changes.get(commit_id, [])

    async def get_changes_for_commits(self, commit_ids: list[str]) -> dict[str, list[Change]]:
        """Committed changes for several commits, keyed by commit id."""
        if not commit_ids:
            return {}

        result = await self.db.execute(
            select(CommitChange.commit_id, Change)
            .join(Change, Change.id == CommitChange.change_id)
            .where(CommitChange.commit_id.in_(commit_ids))
            .where(Change.committed.is_(True))
            .order_by(Change.timestamp)
        )

        by_commit: dict[str, list[Change]] = defaultdict(list)
        for commit_id, change in result.all():
            by_commit[commit_id].append(change)
        return dict(by_commit)

    async def mark_committed(self, change_ids: list[str], commit_id: str) -> list[str]:
        """Flag changes as committed and associate them with a commit.

        Only called from commit creation, inside its transaction. Ids that
        already have an association row keep it and are not linked again.

        Args:
            change_ids: Changes consumed by the commit
            commit_id: The commit consuming them

        Returns:
            Ids of the changes newly associated with the commit
        """
        if not change_ids:
            return []

        result = await self.db.execute(
            select(CommitChange.change_id).where(CommitChange.change_id.in_(change_ids))
        )
        already_linked = set(result.scalars().all())
        to_link = [change_id for change_id in change_ids if change_id not in already_linked]

        await self.db.execute(
            update(Change)
            .where(Change.id.in_(change_ids))
            .values(committed=True)
            .execution_options(synchronize_session="fetch")
        )

        self.db.add_all(
            CommitChange(commit_id=commit_id, change_id=change_id) for change_id in to_link
        )
        await self.db.flush()

        if already_linked:
            logger.warning(
                "Skipped %d changes already associated with a commit", len(already_linked)
            )
        return to_link
