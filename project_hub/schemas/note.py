"""Note schemas."""

from datetime import datetime

from pydantic import Field, field_validator

from project_hub.schemas.common import CamelModel


class NoteFields(CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    category: str | None = None
    tags: list[str] | None = None


class CreateNoteRequest(NoteFields):
    project_id: str


class UpdateNoteRequest(NoteFields):
    note_id: str = Field(..., min_length=1)


class NoteIdRequest(CamelModel):
    note_id: str = Field(..., min_length=1)


class NoteResponse(CamelModel):
    id: str
    project_id: str
    title: str
    content: str
    category: str | None = None
    tags: list[str] = []
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def default_tags(cls, v):
        return v or []
