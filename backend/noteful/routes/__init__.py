"""
Noteful Backend — API Routes Package
======================================

Route Inventory:
    - folders.py:  GET/POST /api/folders, GET/PUT/DELETE /api/folders/{id}
    - tags.py:     GET/POST /api/tags,    GET/PUT/DELETE /api/tags/{id}
    - notes.py:    GET/POST /api/notes,   GET/PUT/DELETE /api/notes/{id}
                   (GET /api/notes accepts searchTerm, folderId, tagId)
    - health.py:   GET /health

Design Principle:
    Routes are thin. They pull inputs out of the request, call a service,
    and pick the status code: 201 + Location for creates, 204 for deletes,
    404 when a service reports no match.
"""
