"""
Noteful Backend — Note SQLAlchemy Model
=========================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe store operations.
How:   Inherits from SQLAlchemy's DeclarativeBase; Alembic reads this for migrations.
Who:   Used by NoteService for CRUD operations and by Alembic for schema management.

Table Design:
    - id: UUID generated on insert; clients never choose it
    - title: required, non-empty (enforced by the service layer)
    - content: optional free text
    - created: UTC timestamp set on insert, never updated

    Index on created ASC:
        Listing always sorts oldest-first by creation time.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Index, Text, Uuid, text
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Note(Base):
    """
    A single note.

    Lifecycle:
        1. Created by POST /api/notes (id and created assigned here)
        2. title/content mutated in place by PUT /api/notes/{id}
        3. Removed by DELETE /api/notes/{id} (hard delete)
    """

    __tablename__ = "notes"

    # Generic Uuid type: native UUID on PostgreSQL, CHAR(32) on SQLite
    id: Mapped[uuid.UUID] = mapped_column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
    )

    title: Mapped[str] = mapped_column(Text, nullable=False)

    content: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        default=None,
    )

    created: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=utc_now,
        server_default=text("CURRENT_TIMESTAMP"),
    )

    __table_args__ = (
        Index("idx_notes_created", created.asc()),
    )

    def __repr__(self) -> str:
        return f"<Note(id={self.id}, title={self.title!r}, created='{self.created}')>"
