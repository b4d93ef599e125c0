"""
NoteTime Backend — Health Check Route
======================================

What:  Liveness endpoint for container health checks and the frontend.
How:   Answers without touching the database; a running process is healthy.
"""

from fastapi import APIRouter

from notetime.schemas.note import HealthResponse

router = APIRouter(prefix="/api", tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service liveness check",
)
async def health_check() -> HealthResponse:
    return HealthResponse(status="healthy")
