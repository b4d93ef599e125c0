"""
NoteTime Backend — Frontend Static Files
=========================================

What:  Serves the compiled frontend bundle for every path no API route
       claimed, so one process ships both the API and the UI.
How:   Starlette StaticFiles mounted at "/" after the API routers. A missing
       file outside /api/ is answered with index.html, letting the
       frontend's client-side router handle deep links.
"""

import logging
from pathlib import Path
from typing import Optional

from fastapi import FastAPI
from starlette.exceptions import HTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"


class FrontendStaticFiles(StaticFiles):
    """StaticFiles with an index.html fallback for non-API paths."""

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except HTTPException as exc:
            if exc.status_code != 404 or path == "api" or path.startswith("api/"):
                raise
            return await super().get_response(INDEX_FILE, scope)


def mount_frontend(app: FastAPI, static_dir: str) -> Optional[Path]:
    """
    Mount the bundle at "/" if `static_dir` exists.

    Must run after the API routers are included; routes are matched in
    registration order. Returns the mounted directory, or None when skipped.
    """
    directory = Path(static_dir)
    if not directory.is_dir():
        logger.warning("Frontend directory %s not found; serving API only", directory)
        return None

    app.mount("/", FrontendStaticFiles(directory=str(directory), html=True), name="frontend")
    logger.info("Serving frontend from %s", directory.resolve())
    return directory
