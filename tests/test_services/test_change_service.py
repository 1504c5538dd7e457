"""Tests for the change ledger."""

import pytest
import pytest_asyncio
from sqlalchemy import select

from project_hub.models import CommitChange, LocalCommit
from project_hub.services.branch_service import BranchService
from project_hub.services.change_service import ChangeService


class TestPendingChanges:
    """Test listing pending changes."""

    @pytest.mark.asyncio
    async def test_newest_first(self, db, project, add_change):
        first = await add_change()
        second = await add_change()
        third = await add_change()

        pending = await ChangeService(db).get_pending_changes("P1")

        assert [c.id for c in pending] == [third.id, second.id, first.id]

    @pytest.mark.asyncio
    async def test_excludes_committed_and_other_projects(
        self, db, project, other_project, add_change
    ):
        """Only uncommitted changes of the requested project are listed."""
        kept = await add_change()
        done = await add_change()
        await add_change(project_id="P2")
        done.committed = True
        await db.commit()

        pending = await ChangeService(db).get_pending_changes("P1")

        assert [c.id for c in pending] == [kept.id]

    @pytest.mark.asyncio
    async def test_empty_for_unknown_project(self, db):
        assert await ChangeService(db).get_pending_changes("nope") == []


class TestMarkCommitted:
    """Test promotion of changes into a commit."""

    @pytest_asyncio.fixture
    async def two_commits(self, db, locks, settings, project):
        await BranchService(db, locks, settings).initialize_repository("P1")
        first = (await db.execute(select(LocalCommit))).scalar_one()
        second = LocalCommit(
            id="commit_second",
            project_id="P1",
            message="second",
            author_name="Test",
            parent_commit_id=first.id,
        )
        db.add(second)
        await db.commit()
        return first, second

    @pytest.mark.asyncio
    async def test_flags_and_links(self, db, two_commits, add_change):
        first, _ = two_commits
        a = await add_change()
        b = await add_change()

        linked = await ChangeService(db).mark_committed([a.id, b.id], first.id)
        await db.commit()

        assert linked == [a.id, b.id]
        await db.refresh(a)
        await db.refresh(b)
        assert a.committed is True
        assert b.committed is True

    @pytest.mark.asyncio
    async def test_skips_changes_already_linked(self, db, two_commits, add_change):
        """A second invocation never re-associates a change."""
        first, second = two_commits
        change = await add_change()
        service = ChangeService(db)
        await service.mark_committed([change.id], first.id)
        await db.commit()

        linked = await service.mark_committed([change.id], second.id)
        await db.commit()

        assert linked == []
        rows = (
            await db.execute(select(CommitChange).where(CommitChange.change_id == change.id))
        ).scalars().all()
        assert [(r.commit_id, r.change_id) for r in rows] == [(first.id, change.id)]

    @pytest.mark.asyncio
    async def test_empty_input(self, db):
        assert await ChangeService(db).mark_committed([], "commit_x") == []

    @pytest.mark.asyncio
    async def test_commit_changes_only_committed(self, db, two_commits, add_change):
        """History joins only changes flagged committed."""
        first, _ = two_commits
        change = await add_change()
        db.add(CommitChange(commit_id=first.id, change_id=change.id))
        await db.commit()

        assert await ChangeService(db).get_commit_changes(first.id) == []

        change.committed = True
        await db.commit()

        assert [c.id for c in await ChangeService(db).get_commit_changes(first.id)] == [change.id]
