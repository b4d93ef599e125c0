"""
NoteTime Backend — Notes Route Handlers
========================================

What:  CRUD endpoints for notes.
How:   Extract path/query/body input, delegate to NoteService, return the
       schema it produces. Errors are raised, never returned; the handlers
       in main.py turn them into JSON responses.

Endpoints:
    GET    /api/notes?sort=creation_date|last_modified
    POST   /api/notes
    GET    /api/notes/{id}
    PUT    /api/notes/{id}
    DELETE /api/notes/{id}

Note ids use the router's `int` convertor: /api/notes/abc matches no API
route and falls through to the static frontend (404 when absent).
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from notetime.database import get_db_session
from notetime.schemas.note import (
    ErrorResponse,
    MessageResponse,
    NoteCreate,
    NoteResponse,
    NoteSort,
    NoteUpdate,
    UpdatedNoteResponse,
)
from notetime.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List all notes",
)
async def list_notes(
    sort: Optional[str] = Query(
        default=None,
        description="'creation_date' or 'last_modified' (default); both descending",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    """
    List every note, newest first.

    Unknown sort values are treated like the default rather than rejected.
    """
    return await note_service.list_notes(db, sort=NoteSort.parse(sort))


@router.post(
    "/notes",
    status_code=201,
    response_model=NoteResponse,
    responses={
        400: {"description": "Invalid request payload", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    payload: NoteCreate,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """Create a note; an empty title becomes 'Untitled Diary'."""
    return await note_service.create_note(db, title=payload.title, content=payload.content)


@router.get(
    "/notes/{note_id:int}",
    response_model=NoteResponse,
    responses={
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Get a single note by id",
)
async def get_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.get_note(db, note_id)


@router.put(
    "/notes/{note_id:int}",
    response_model=UpdatedNoteResponse,
    responses={
        400: {"description": "Invalid request payload", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Overwrite a note's title and content",
)
async def update_note(
    note_id: int,
    payload: NoteUpdate,
    db: AsyncSession = Depends(get_db_session),
) -> UpdatedNoteResponse:
    """
    Replace title and content and bump last_modified.

    Fields missing from the body are stored as empty strings. The id is not
    checked: updating a missing note returns 200 and changes nothing.
    """
    return await note_service.update_note(
        db,
        note_id=note_id,
        title=payload.title,
        content=payload.content,
    )


@router.delete(
    "/notes/{note_id:int}",
    response_model=MessageResponse,
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="Delete a note and its lines",
)
async def delete_note(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> MessageResponse:
    """Idempotent: deleting a missing note also returns 200."""
    await note_service.delete_note(db, note_id)
    return MessageResponse(message="Note deleted successfully")
