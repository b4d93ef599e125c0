# Middleware package init
"""
NoteTime Backend — Middleware Package
======================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [GZip] → [CORS] → Route / Static files

    The request id is assigned first so the access log line and any error
    body carry it; the logging middleware sees the final status code.
"""
