"""
NoteTime Backend — Search Route Handler
========================================

What:  GET /api/search?q=term — substring search over note titles and bodies.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from notetime.database import get_db_session
from notetime.exceptions import ValidationError
from notetime.schemas.note import ErrorResponse, NoteResponse
from notetime.services.note_service import note_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Search"])


@router.get(
    "/search",
    response_model=List[NoteResponse],
    responses={
        400: {"description": "Search query is required", "model": ErrorResponse},
        500: {"description": "Store error", "model": ErrorResponse},
    },
    summary="Search notes by title or content",
)
async def search_notes(
    q: Optional[str] = Query(default=None, description="Text to look for"),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    """
    Notes whose title or content contains `q`, most recently modified first.

    A missing or empty `q` is a client error, not an empty result.
    """
    if not q:
        raise ValidationError(message="Search query is required", field="q")

    return await note_service.search_notes(db, q)
