# Services package init
"""
NoteTime Backend — Services Layer
==================================

What:  Data access between routes (HTTP) and the database (persistence).

Service Inventory:
    - NoteService: notes and lines CRUD, sorting and substring search
"""
