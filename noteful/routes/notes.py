"""
Noteful Backend — Notes Route Handlers
========================================

What:  CRUD endpoints for notes under /api/notes.
Why:   The HTTP surface of the service.
How:   Extracts path/query/body data, delegates to NoteService, sets status
       codes and headers. No store access happens here.

Route Inventory:
    GET    /api/notes            list (optional ?searchTerm=)
    GET    /api/notes/{note_id}  get one
    POST   /api/notes            create → 201 + Location
    PUT    /api/notes/{note_id}  field-level update
    DELETE /api/notes/{note_id}  delete → 204 (idempotent)
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.config import settings
from noteful.database import get_db_session
from noteful.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from noteful.services.note_service import note_service

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api", tags=["Notes"])


@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={
        400: {"description": "searchTerm too long", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="List notes, optionally filtered by title",
    description=(
        "Returns every note sorted by creation time (oldest first). "
        "With `searchTerm`, only notes whose title contains the term "
        "(case-insensitive, matched literally) are returned."
    ),
)
async def list_notes(
    search_term: str | None = Query(
        default=None,
        alias="searchTerm",
        max_length=settings.search_term_max_length,
        description="Case-insensitive substring to look for in note titles",
    ),
    db: AsyncSession = Depends(get_db_session),
) -> List[NoteResponse]:
    return await note_service.list_notes(db=db, search_term=search_term)


@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Malformed note id", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Get a single note by ID",
)
async def get_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.get_note(db=db, note_id=note_id)


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=201,
    responses={
        400: {"description": "Missing `title` in request body", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
)
async def create_note(
    response: Response,
    payload: Optional[NoteCreate] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    """
    Create a note and point the Location header at it.

    The Location path is built from the identifier the store generated,
    not from anything in the request body.
    """
    # No body (or a JSON null) is a create without a title
    note = await note_service.create_note(db=db, payload=payload or NoteCreate())
    response.headers["Location"] = f"{router.prefix}/notes/{note.id}"
    return note


@router.put(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={
        400: {"description": "Malformed note id or empty title", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Update a note's title and/or content",
)
async def update_note(
    note_id: str,
    payload: Optional[NoteUpdate] = Body(default=None),
    db: AsyncSession = Depends(get_db_session),
) -> NoteResponse:
    return await note_service.update_note(
        db=db, note_id=note_id, payload=payload or NoteUpdate()
    )


@router.delete(
    "/notes/{note_id}",
    status_code=204,
    response_class=Response,
    responses={
        400: {"description": "Malformed note id", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Delete a note (idempotent)",
)
async def delete_note(
    note_id: str,
    db: AsyncSession = Depends(get_db_session),
) -> Response:
    await note_service.delete_note(db=db, note_id=note_id)
    return Response(status_code=204)
