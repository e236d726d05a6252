"""
Noteful Backend — Note Service
================================

What:  The five note operations: list, get, create, update, delete.
Why:   Keeps store access and validation independent of HTTP concerns.
How:   Each method issues exactly one store operation on the session it is
       given, commits writes itself, and translates store failures into
       DatabaseError.
Who:   Called by route handlers in noteful/routes/notes.py.

Error Handling Strategy:
    - Client mistakes raise ValidationError (400) before the store is touched
    - Unknown identifiers raise NotFoundError (404) for get/update
    - Any SQLAlchemy failure is logged and re-raised as DatabaseError (500);
      nothing is swallowed, so every request gets a response
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import asc, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.exceptions import DatabaseError, NotFoundError, ValidationError
from noteful.models.note import Note
from noteful.schemas.note import NoteCreate, NoteResponse, NoteUpdate

logger = logging.getLogger(__name__)

MISSING_TITLE_MESSAGE = "Missing `title` in request body"
EMPTY_TITLE_MESSAGE = "`title` must not be empty"
INVALID_ID_MESSAGE = "The `id` is not valid"


def parse_note_id(raw_id: str) -> uuid.UUID:
    """
    Validate a path identifier before it reaches the store.

    Raises:
        ValidationError: raw_id is not a UUID (→ 400)
    """
    try:
        return uuid.UUID(raw_id)
    except (ValueError, TypeError, AttributeError):
        raise ValidationError(
            message=INVALID_ID_MESSAGE,
            field="id",
            context={"value": raw_id},
        )


class NoteService:
    """
    Business logic layer for note operations.

    NoteService is stateless; it receives the request's session for each
    call, so a single module-level instance serves every request.
    """

    async def list_notes(
        self,
        db: AsyncSession,
        search_term: Optional[str] = None,
    ) -> List[NoteResponse]:
        """
        Return all notes, oldest first, optionally filtered by title.

        The filter is a case-insensitive substring match. The term is
        matched literally: `%` and `_` are escaped (autoescape) so client
        input never acts as a pattern.

        Query plan:
            SELECT ... FROM notes [WHERE lower(title) LIKE lower(:term) ESCAPE '/']
            ORDER BY created ASC
        """
        query = select(Note)
        if search_term:
            query = query.where(Note.title.icontains(search_term, autoescape=True))
        query = query.order_by(asc(Note.created))

        try:
            result = await db.execute(query)
            notes = list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not retrieve notes. Please try again.",
                context={"error_type": type(e).__name__},
            )

        return [NoteResponse.model_validate(note) for note in notes]

    async def get_note(self, db: AsyncSession, note_id: str) -> NoteResponse:
        """
        Retrieve a single note by ID.

        Raises:
            ValidationError: note_id is not a valid identifier (→ 400)
            NotFoundError: no note has this identifier (→ 404)
            DatabaseError: query execution failed (→ 500)
        """
        nid = parse_note_id(note_id)
        try:
            note = await db.get(Note, nid)
        except SQLAlchemyError as e:
            logger.error("Database error fetching note %s: %s", note_id, str(e))
            raise DatabaseError(
                message="Could not retrieve the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

        if note is None:
            raise NotFoundError(resource="note", resource_id=note_id)

        return NoteResponse.model_validate(note)

    async def create_note(self, db: AsyncSession, payload: NoteCreate) -> NoteResponse:
        """
        Insert a new note.

        `id` and `created` are always generated here, never taken from the
        client. A missing, null or empty title is rejected before any write.

        Raises:
            ValidationError: title missing or empty (→ 400)
            DatabaseError: insert or commit failed (→ 500)
        """
        if not payload.title:
            raise ValidationError(message=MISSING_TITLE_MESSAGE, field="title")

        note = Note(title=payload.title, content=payload.content)
        try:
            db.add(note)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Could not save the note. Please try again.",
                context={"error_type": type(e).__name__},
            )

        logger.info("Note created: %s", note.id)
        return NoteResponse.model_validate(note)

    async def update_note(
        self,
        db: AsyncSession,
        note_id: str,
        payload: NoteUpdate,
    ) -> NoteResponse:
        """
        Apply a field-level update to an existing note.

        Only keys present in the request body are written; `id` and
        `created` are never touched. If `title` is present it must be
        non-empty. Concurrent updates are last-write-wins.

        Raises:
            ValidationError: malformed id or empty title (→ 400)
            NotFoundError: no note has this identifier (→ 404)
            DatabaseError: lookup or commit failed (→ 500)
        """
        nid = parse_note_id(note_id)
        changes = payload.model_dump(exclude_unset=True)
        if "title" in changes and not changes["title"]:
            raise ValidationError(message=EMPTY_TITLE_MESSAGE, field="title")

        try:
            note = await db.get(Note, nid)
            if note is None:
                raise NotFoundError(resource="note", resource_id=note_id)

            for field, value in changes.items():
                setattr(note, field, value)
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error updating note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not update the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

        logger.info("Note updated: %s (fields: %s)", note_id, ", ".join(sorted(changes)) or "none")
        return NoteResponse.model_validate(note)

    async def delete_note(self, db: AsyncSession, note_id: str) -> None:
        """
        Remove a note if it exists.

        Deleting an unknown (but well-formed) identifier is a successful
        no-op, so repeated deletes behave identically.

        Raises:
            ValidationError: malformed id (→ 400)
            DatabaseError: delete or commit failed (→ 500)
        """
        nid = parse_note_id(note_id)
        try:
            result = await db.execute(delete(Note).where(Note.id == nid))
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting note %s: %s", note_id, str(e), exc_info=True)
            raise DatabaseError(
                message="Could not delete the note. Please try again.",
                context={"note_id": note_id, "error_type": type(e).__name__},
            )

        if result.rowcount:
            logger.info("Note deleted: %s", note_id)
        else:
            logger.info("Delete for unknown note %s (no-op)", note_id)


# ── Singleton Instance ────────────────────────────────────────────────────
note_service = NoteService()
