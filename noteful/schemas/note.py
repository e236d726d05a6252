"""
Noteful Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract between clients and backend.
Why:   Automatic serialization and OpenAPI doc generation.
How:   FastAPI uses these models to parse request bodies, serialize responses,
       and generate Swagger/OpenAPI documentation automatically.

Design Decision:
    Request models are deliberately lenient: `title` is optional on
    NoteCreate so that a missing title reaches the service and produces the
    400 "Missing `title` in request body" error rather than FastAPI's
    generic 422. Unknown keys (a client-sent `id`, `tags`, ...) are ignored.
"""

import uuid
from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """Body of POST /api/notes."""
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(default=None, description="Note title (required, non-empty)")
    content: Optional[str] = Field(default=None, description="Note body text")


class NoteUpdate(BaseModel):
    """
    Body of PUT /api/notes/{id}.

    Only the fields actually present in the body are applied
    (see `model_dump(exclude_unset=True)` in NoteService.update_note).
    """
    model_config = ConfigDict(extra="ignore")

    title: Optional[str] = Field(default=None, description="New title (non-empty if supplied)")
    content: Optional[str] = Field(default=None, description="New body text")


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    What:  Serialized Note: {id, title, content, created}.
    Who:   Returned by every notes endpoint except DELETE.
    """
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID = Field(description="Store-generated note identifier")
    title: str = Field(description="Note title")
    content: Optional[str] = Field(default=None, description="Note body text")
    created: datetime = Field(description="When the note was created (UTC ISO 8601)")

    @field_validator("created")
    @classmethod
    def ensure_utc(cls, v: datetime) -> datetime:
        """SQLite hands back naive datetimes; everything is stored as UTC."""
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


# ══════════════════════════════════════════════════════════════════════════
# Error / Health Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorResponse(BaseModel):
    """
    What:  Standardized error response format for all API errors.

    Example:
        {
            "error": "validation_error",
            "message": "Missing `title` in request body",
            "details": {"field": "title"},
            "request_id": "1a2b3c4d"
        }
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    details: Optional[dict] = Field(default=None, description="Additional error context")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(BaseModel):
    """Returned by GET /health for monitoring and container health checks."""
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
