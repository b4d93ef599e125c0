"""
NoteTime Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() returns a configured FastAPI instance
       with its own engine and session factory on `app.state`.
Who:   uvicorn (`uvicorn notetime.main:app`, or `python -m notetime`) and the
       test suite, which builds apps against scratch databases.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware:  Request ID → Logging → GZip → CORS    │
    │                                                     │
    │  Routes:      /api/health   /api/notes[/{id}]       │
    │               /api/notes/{id}/lines   /api/search   │
    │               /*  → frontend bundle                 │
    │                                                     │
    │  Exception Handlers:                                │
    │    ValidationError / bad payload → 400              │
    │    NotFoundError → 404     StoreError → 500         │
    └─────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create missing tables. A store that cannot
              be opened raises here and the process exits.
    Shutdown: dispose the engine (close pooled connections).
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from notetime import __version__
from notetime.config import Settings, settings as default_settings
from notetime.database import create_engine, create_session_factory, init_db
from notetime.exceptions import NotFoundError, StoreError, ValidationError
from notetime.frontend import mount_frontend
from notetime.middleware.logging import RequestLoggingMiddleware
from notetime.middleware.request_id import RequestIDMiddleware, request_id_var
from notetime.routes import health, lines, notes, search

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure the root logger once for the whole process.

    Format: 2026-10-18T12:00:00 [INFO] notetime.access: GET /api/notes 200 3.1ms ...
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Per-request noise; our own access log covers it
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    if level != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Create the schema on startup; release the connection pool on shutdown."""
    app_settings: Settings = app.state.settings
    setup_logging(app_settings.log_level)
    logger.info("NoteTime backend %s starting up...", __version__)

    # Errors propagate: uvicorn aborts startup if the store is unusable
    await init_db(app.state.engine)

    logger.info("Server ready at http://%s:%d", app_settings.host, app_settings.port)

    yield

    logger.info("NoteTime backend shutting down...")
    await app.state.engine.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the ErrorResponse shape.

    `error` carries the human-readable message the frontend displays;
    `code` is the machine-readable class.

    Handler table:
        RequestValidationError → 400 "Invalid request payload"
        ValidationError        → 400
        NotFoundError          → 404
        StoreError             → 500, driver message passed through
        Exception (fallback)   → 500, generic message, traceback logged
    """

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        """Body was not JSON, not an object, or had a field of the wrong type."""
        rid = request_id_var.get("")
        errors = exc.errors()
        first = errors[0] if errors else {}
        logger.warning("[%s] Invalid request payload: %s", rid, first.get("msg", ""))
        return JSONResponse(
            status_code=400,
            content={
                "error": "Invalid request payload",
                "code": "validation_error",
                "details": {
                    "loc": [str(part) for part in first.get("loc", ())],
                    "reason": first.get("msg", ""),
                },
                "request_id": rid,
            },
        )

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        rid = request_id_var.get("")
        logger.warning("[%s] Validation error: %s", rid, exc.message)
        return JSONResponse(
            status_code=400,
            content={
                "error": exc.message,
                "code": "validation_error",
                "details": exc.context,
                "request_id": rid,
            },
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        rid = request_id_var.get("")
        return JSONResponse(
            status_code=404,
            content={
                "error": exc.message,
                "code": "not_found",
                "request_id": rid,
            },
        )

    @app.exception_handler(StoreError)
    async def handle_store_error(request: Request, exc: StoreError):
        """The driver's error text is returned unmodified."""
        rid = request_id_var.get("")
        logger.error("[%s] Store error: %s | Context: %s", rid, exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content={
                "error": exc.message,
                "code": "store_error",
                "request_id": rid,
            },
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error("[%s] Unexpected error: %s", rid, str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content={
                "error": "An unexpected error occurred.",
                "code": "internal_server_error",
                "request_id": rid,
            },
        )


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(app_settings: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        app_settings: Settings to build the app from; the environment-loaded
                      defaults when omitted.

    The engine is created here (no connection is opened until first use) so
    that `app.state` is complete even when the lifespan does not run, as
    with httpx's ASGITransport in tests.
    """
    app_settings = app_settings or default_settings

    app = FastAPI(
        title="NoteTime API",
        description="Diary notes with timestamped lines, stored in SQLite.",
        version=__version__,
        lifespan=lifespan,
    )

    engine = create_engine(app_settings)
    app.state.settings = app_settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(health.router)
    app.include_router(notes.router)
    app.include_router(lines.router)
    app.include_router(search.router)

    # Catch-all; must come after the API routers
    mount_frontend(app, app_settings.static_dir)

    return app


app = create_app()
