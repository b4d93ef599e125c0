# Routes package init
"""
NoteTime Backend — API Routes Package
======================================

Route Inventory:
    - health.py:  GET  /api/health
    - notes.py:   GET/POST /api/notes, GET/PUT/DELETE /api/notes/{id}
    - lines.py:   GET/POST /api/notes/{id}/lines
    - search.py:  GET  /api/search?q=

Routes stay thin: they extract input, call NoteService and return its
result. Status codes for errors come from the handlers in main.py.
"""
