"""
Noteful Backend — API Routes Package
======================================

Route Inventory:
    - notes.py:   /api/notes, /api/notes/{id}  (CRUD + title search)
    - health.py:  GET /health                   (service health check)

Routes are thin: they read the request, call NoteService, and set status
codes and headers. Validation and store access live in the service.
"""
