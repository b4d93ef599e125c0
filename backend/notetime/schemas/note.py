"""
NoteTime Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract between frontend and backend.
How:   FastAPI validates request bodies against the *Create/*Update models
       and serializes responses through the *Response models (which also
       drive the OpenAPI docs).

Optional fields:
    Request bodies are forgiving in the same places the frontend relies on:
    every text field may be omitted or null and becomes "" before it reaches
    NoteService. A body that is not JSON, not an object, or carries a field of
    the wrong type is rejected with 400 by the handler in main.py.
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Optional

from pydantic import BaseModel, BeforeValidator, Field


def _none_to_empty(v: Optional[str]) -> Optional[str]:
    return "" if v is None else v


# A text field where JSON null means ""
BodyText = Annotated[str, BeforeValidator(_none_to_empty)]


# ══════════════════════════════════════════════════════════════════════════
# Request Models: What the client sends
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /api/notes. An empty title is replaced by the default."""
    title: BodyText = Field(default="", description="Note title; empty means 'Untitled Diary'")
    content: BodyText = Field(default="", description="Note body")


class NoteUpdate(BaseModel):
    """
    Body of PUT /api/notes/{id}.

    Full overwrite: a field left out is stored as an empty string, not kept.
    """
    title: BodyText = Field(default="", description="New title")
    content: BodyText = Field(default="", description="New body")


class LineCreate(BaseModel):
    """Body of POST /api/notes/{id}/lines."""
    content: BodyText = Field(default="", description="Text of the line")


class NoteSort(str, Enum):
    """
    Sort keys accepted by GET /api/notes?sort=...

    Each key maps to one fixed ORDER BY column in NoteService; the raw query
    string never reaches SQL.
    """
    CREATION_DATE = "creation_date"
    LAST_MODIFIED = "last_modified"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "NoteSort":
        """Unknown or empty values fall back to last_modified."""
        try:
            return cls(raw)
        except ValueError:
            return cls.LAST_MODIFIED


# ══════════════════════════════════════════════════════════════════════════
# Response Models: What the API returns to clients
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    Full representation of a note.

    Returned by GET/POST /api/notes, GET /api/notes/{id} and /api/search.
    """
    id: int = Field(description="Note identifier")
    title: str = Field(description="Note title")
    content: str = Field(description="Note body")
    created_at: datetime = Field(description="When the note was created (UTC ISO 8601)")
    last_modified: datetime = Field(description="Last edit or line append (UTC ISO 8601)")

    model_config = {"from_attributes": True}


class UpdatedNoteResponse(NoteResponse):
    """
    Returned by PUT /api/notes/{id}.

    Updates do not check that the note exists; for a missing id the
    submitted fields are echoed back and created_at is null.
    """
    created_at: Optional[datetime] = Field(
        default=None,
        description="Creation time, null when no note had this id",
    )


class LineResponse(BaseModel):
    """One timestamped line of a note."""
    id: int = Field(description="Line identifier")
    note_id: int = Field(description="Parent note identifier")
    content: str = Field(description="Text of the line")
    timestamp: datetime = Field(description="When the line was appended (UTC ISO 8601)")

    model_config = {"from_attributes": True}


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. after a delete."""
    message: str


class HealthResponse(BaseModel):
    """Liveness payload of GET /api/health."""
    status: str = Field(default="healthy", description="Always 'healthy' while the process serves")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Model: Consistent error format across all endpoints
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    Standardized error response format for all API errors.

    Example:
        {
            "error": "Note not found",
            "code": "not_found",
            "request_id": "1f0c9a2b"
        }
    """
    error: str = Field(description="Human-readable error description")
    code: str = Field(description="Machine-readable error class")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")
