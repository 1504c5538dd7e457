"""Project note routes."""

from fastapi import APIRouter

from project_hub.api.deps import DbSession
from project_hub.schemas.common import SuccessResponse
from project_hub.schemas.note import (
    CreateNoteRequest,
    NoteIdRequest,
    NoteResponse,
    UpdateNoteRequest,
)
from project_hub.schemas.project import ProjectIdRequest
from project_hub.services.note_service import NoteService

router = APIRouter()


@router.post("/get_project_notes", response_model=list[NoteResponse])
async def get_project_notes(body: ProjectIdRequest, db: DbSession):
    notes = await NoteService(db).get_project_notes(body.project_id)
    return [NoteResponse.model_validate(n) for n in notes]


@router.post("/create_note", response_model=NoteResponse)
async def create_note(body: CreateNoteRequest, db: DbSession):
    note = await NoteService(db).create_note(
        project_id=body.project_id,
        title=body.title,
        content=body.content,
        category=body.category,
        tags=body.tags,
    )
    return NoteResponse.model_validate(note)


@router.post("/update_note", response_model=NoteResponse)
async def update_note(body: UpdateNoteRequest, db: DbSession):
    note = await NoteService(db).update_note(
        note_id=body.note_id,
        title=body.title,
        content=body.content,
        category=body.category,
        tags=body.tags,
    )
    return NoteResponse.model_validate(note)


@router.post("/delete_note", response_model=SuccessResponse)
async def delete_note(body: NoteIdRequest, db: DbSession):
    await NoteService(db).delete_note(body.note_id)
    return SuccessResponse(message=f"Note {body.note_id} deleted successfully")
