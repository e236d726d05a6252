"""
Noteful Backend — Services Layer
==================================

Service Inventory:
    - NoteService: list/get/create/update/delete against the notes table
"""
