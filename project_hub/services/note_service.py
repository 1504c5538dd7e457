"""Project notes."""

import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from project_hub.database import atomic, generate_id, utcnow
from project_hub.exceptions import NoteNotFoundError
from project_hub.models.note import Note
from project_hub.services.project_service import ProjectService

logger = logging.getLogger(__name__)


class NoteService:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_project_notes(self, project_id: str) -> list[Note]:
        result = await self.db.execute(
            select(Note).where(Note.project_id == project_id).order_by(Note.updated_at.desc())
        )
        return list(result.scalars().all())

    async def create_note(
        self,
        project_id: str,
        title: str,
        content: str,
        category: str | None = None,
        tags: list[str] | None = None,
    ) -> Note:
        await ProjectService(self.db).get_project(project_id)

        now = utcnow()
        note = Note(
            id=generate_id("note"),
            project_id=project_id,
            title=title,
            content=content,
            category=category or None,
            tags=tags or None,
            created_at=now,
            updated_at=now,
        )
        async with atomic(self.db):
            self.db.add(note)

        logger.info("Created note %s for project %s", note.id, project_id)
        return note

    async def update_note(
        self,
        note_id: str,
        title: str,
        content: str,
        category: str | None = None,
        tags: list[str] | None = None,
    ) -> Note:
        async with atomic(self.db):
            note = await self.db.get(Note, note_id)
            if note is None:
                raise NoteNotFoundError(note_id)

            note.title = title
            note.content = content
            note.category = category or None
            note.tags = tags or None
            note.updated_at = utcnow()

        return note

    async def delete_note(self, note_id: str) -> None:
        async with atomic(self.db):
            await self.db.execute(delete(Note).where(Note.id == note_id))
        logger.info("Deleted note %s", note_id)
