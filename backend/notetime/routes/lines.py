"""
NoteTime Backend — Line Route Handlers
=======================================

What:  Timestamped lines of a note.

Endpoints:
    GET  /api/notes/{id}/lines   chronological list
    POST /api/notes/{id}/lines   append; also bumps the note's last_modified
"""

import logging
from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from notetime.database import get_db_session
from notetime.schemas.note import ErrorResponse, LineCreate, LineResponse
from notetime.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Lines"])


@router.get(
    "/notes/{note_id:int}/lines",
    response_model=List[LineResponse],
    responses={500: {"description": "Store error", "model": ErrorResponse}},
    summary="List the lines of a note",
)
async def list_lines(
    note_id: int,
    db: AsyncSession = Depends(get_db_session),
) -> List[LineResponse]:
    """Oldest line first. A note without lines, or no note at all, gives []."""
    return await note_service.list_lines(db, note_id)


@router.post(
    "/notes/{note_id:int}/lines",
    status_code=201,
    response_model=LineResponse,
    responses={
        400: {"description": "Invalid request payload", "model": ErrorResponse},
        500: {"description": "Store error (e.g. unknown note)", "model": ErrorResponse},
    },
    summary="Append a line to a note",
)
async def add_line(
    note_id: int,
    payload: LineCreate,
    db: AsyncSession = Depends(get_db_session),
) -> LineResponse:
    """
    Append a line stamped with the server's current time.

    The line insert and the parent's last_modified update commit together.
    """
    return await note_service.add_line(db, note_id=note_id, content=payload.content)
