"""Note Schemas — the sole persistent entity and its create/update payloads.

Invariants:
    - Note.id is server-assigned; drafts never carry one
    - title is non-blank after trimming (stored as given, trimming is the caller's choice)
    - body is HTML-like markup and may be empty
    - Note is frozen: the store replaces entries, it never edits them in place

Design Decisions:
    - NotePatch is a full replacement, not a partial: every mutable field is required
    - Shared _NoteFields base keeps draft/patch/note validation identical
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _NoteFields(BaseModel):
    title: str = Field(min_length=1, max_length=500)
    body: str = ""
    completed: bool = False

    @field_validator("title")
    @classmethod
    def title_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("title cannot be empty or whitespace")
        return v


class NoteDraft(_NoteFields):
    """User-supplied fields for a new note, before the server assigns an id."""


class NotePatch(_NoteFields):
    """Full replacement set of mutable fields for an existing note."""
    body: str
    completed: bool


class Note(_NoteFields):
    """A note as confirmed by the server."""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int = Field(ge=1)
