"""Boundary Protocols — contracts between the notes store and its collaborators.

Invariants:
    - Core and services depend on these Protocols, never on httpx or SQLAlchemy
    - Every service call is a single-shot request/response (no streaming, no batching)
    - Failures are raised as NotesError subclasses (core/errors.py)

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async in Protocol: implementations do IO; the pure cache rules in
      core/notes_state.py stay synchronous and the services layer awaits around them
    - RichTextEditor is a capability handed to the editor session by its owner,
      instead of shared mutable state reached through a widget ref
"""

from collections.abc import Callable
from typing import Protocol

from notesync.core.domain_types import NoteId, SessionToken
from notesync.core.notes_state import NotesSnapshot
from notesync.schemas.note import Note, NoteDraft, NotePatch


class NotesService(Protocol):
    """Contract for the remote notes endpoints — implemented by infrastructure."""
    async def list_notes(self) -> list[Note]: ...
    async def create_note(self, draft: NoteDraft) -> Note: ...
    async def update_note(self, note_id: NoteId, patch: NotePatch) -> Note: ...
    async def delete_note(self, note_id: NoteId) -> None: ...


class AuthService(Protocol):
    """Contract for the remote auth endpoints — implemented by infrastructure."""
    async def login(self, identifier: str, secret: str) -> SessionToken: ...
    async def register(self, identifier: str, secret: str) -> None: ...
    async def logout(self) -> None: ...


class SessionStore(Protocol):
    """Process-wide key-value store holding the session token across restarts."""
    async def get(self, key: str) -> str | None: ...
    async def set(self, key: str, value: str) -> None: ...
    async def delete(self, key: str) -> None: ...


class RichTextEditor(Protocol):
    """Handle on a rich-text editing widget, owned by the screen that shows it."""
    def set_content(self, html: str) -> None: ...
    def get_content(self) -> str: ...


StoreListener = Callable[[NotesSnapshot], None]
