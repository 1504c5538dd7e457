"""Tests for project notes."""

import pytest

from project_hub.exceptions import NoteNotFoundError, ProjectNotFoundError
from project_hub.services.note_service import NoteService


class TestNoteService:
    """Test note CRUD."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, db, project):
        service = NoteService(db)

        note = await service.create_note("P1", "Ideas", "Add dark mode", "ux", ["ui", "later"])

        assert note.id.startswith("note_")
        assert note.created_at == note.updated_at
        notes = await service.get_project_notes("P1")
        assert [n.id for n in notes] == [note.id]
        assert notes[0].tags == ["ui", "later"]
        assert notes[0].category == "ux"

    @pytest.mark.asyncio
    async def test_list_most_recently_updated_first(self, db, project):
        service = NoteService(db)
        older = await service.create_note("P1", "One", "first")
        newer = await service.create_note("P1", "Two", "second")

        await service.update_note(older.id, "One", "first, revised")

        notes = await service.get_project_notes("P1")
        assert [n.id for n in notes] == [older.id, newer.id]

    @pytest.mark.asyncio
    async def test_update(self, db, project):
        service = NoteService(db)
        note = await service.create_note("P1", "Draft", "text", tags=["a"])

        updated = await service.update_note(note.id, "Final", "better text", "docs")

        assert updated.title == "Final"
        assert updated.content == "better text"
        assert updated.category == "docs"
        assert updated.tags is None
        assert updated.updated_at >= updated.created_at

    @pytest.mark.asyncio
    async def test_update_missing(self, db):
        with pytest.raises(NoteNotFoundError):
            await NoteService(db).update_note("note_missing", "t", "c")

    @pytest.mark.asyncio
    async def test_delete(self, db, project):
        service = NoteService(db)
        note = await service.create_note("P1", "Temp", "remove me")

        await service.delete_note(note.id)

        assert await service.get_project_notes("P1") == []

    @pytest.mark.asyncio
    async def test_create_for_missing_project(self, db):
        with pytest.raises(ProjectNotFoundError):
            await NoteService(db).create_note("nope", "t", "c")
