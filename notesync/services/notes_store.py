"""Notes Store — the single in-process owner of the user's notes.

Invariants:
    - Only the store's own operations mutate the cache; readers get NotesSnapshot
    - load() absorbs failures into `error`; create/update/delete re-raise to the caller
    - No optimistic edits: a note appears, changes or disappears only after the
      service confirms it, so there is nothing to roll back
    - load() replaces the cache wholesale; mutations patch only the record they touched
    - Results of requests started before reset() are discarded, not applied
    - A cancelled load settles its pending count and leaves notes and error untouched
    - Listeners are notified after every state change; a failing listener is logged
      and does not affect the store or the other listeners

Design Decisions:
    - Pure cache rules live in core/notes_state.py; this module only awaits the
      service around them
    - Overlapping calls are not serialized: the last response wins for the fields it
      touches (single user, single device)
    - Generation counter over request cancellation: screens that go away simply
      unsubscribe, the store keeps applying results until a reset makes them stale
"""

import asyncio
import logging
from collections.abc import Callable

from notesync.core.domain_types import NoteId, StoreOperation
from notesync.core.errors import NotesError
from notesync.core.notes_state import NotesSnapshot, NotesState
from notesync.core.repository_protocols import NotesService, StoreListener
from notesync.schemas.note import Note, NoteDraft, NotePatch

logger = logging.getLogger(__name__)

LOAD_FAILED_MESSAGE = "Could not load notes"


class NotesStore:
    """Cache of the current user's notes, kept consistent with the notes service."""

    def __init__(self, service: NotesService):
        self._service = service
        self._state = NotesState()
        self._listeners: list[StoreListener] = []

    # ─── Read access ─────────────────────────────────────────────

    @property
    def snapshot(self) -> NotesSnapshot:
        return self._state.snapshot()

    @property
    def notes(self) -> tuple[Note, ...]:
        return tuple(self._state.notes)

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def error(self) -> str | None:
        return self._state.error

    def get(self, note_id: NoteId) -> Note | None:
        return self._state.find(note_id)

    def subscribe(self, listener: StoreListener) -> Callable[[], None]:
        """Register a listener; returns a callable that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ─── Operations ──────────────────────────────────────────────

    async def load(self) -> None:
        """Fetch the full collection; failures end up in `error`, never raised."""
        generation = self._state.generation
        self._state.begin_load()
        self._notify()
        try:
            notes = await self._service.list_notes()
        except asyncio.CancelledError:
            if not self._is_stale(generation, StoreOperation.LOAD):
                self._state.abandon_load()
                logger.info(
                    "Notes load cancelled",
                    extra={"operation": StoreOperation.LOAD.value},
                )
                self._notify()
            raise
        except NotesError as e:
            self._load_failed(generation, e.message, e.code)
            return
        except Exception as e:
            logger.error(f"Unexpected error loading notes: {e}", exc_info=True)
            self._load_failed(generation, LOAD_FAILED_MESSAGE, "INTERNAL_ERROR")
            return

        if self._is_stale(generation, StoreOperation.LOAD):
            return
        self._state.finish_load(notes)
        logger.info(
            "Notes loaded",
            extra={"operation": StoreOperation.LOAD.value, "count": len(notes)},
        )
        self._notify()

    async def create(self, draft: NoteDraft) -> Note:
        """Create on the server, then append the confirmed note."""
        generation = self._state.generation
        note = await self._call(
            StoreOperation.CREATE, None, self._service.create_note(draft),
        )
        if not self._is_stale(generation, StoreOperation.CREATE, note.id):
            self._state.apply_created(note)
            self._notify()
        return note

    async def update(self, note_id: NoteId, patch: NotePatch) -> Note:
        """Replace the note's mutable fields on the server, then in the cache."""
        generation = self._state.generation
        note = await self._call(
            StoreOperation.UPDATE, note_id,
            self._service.update_note(note_id, patch),
        )
        if not self._is_stale(generation, StoreOperation.UPDATE, note_id):
            self._state.apply_updated(note)
            self._notify()
        return note

    async def delete(self, note_id: NoteId) -> None:
        """Delete on the server, then drop the note from the cache."""
        generation = self._state.generation
        await self._call(
            StoreOperation.DELETE, note_id, self._service.delete_note(note_id),
        )
        if not self._is_stale(generation, StoreOperation.DELETE, note_id):
            self._state.apply_deleted(note_id)
            self._notify()

    def reset(self) -> None:
        """Forget everything (logout); in-flight results will be discarded."""
        self._state.reset()
        logger.info("Notes store reset")
        self._notify()

    # ─── Internals ───────────────────────────────────────────────

    async def _call(self, operation: StoreOperation, note_id: int | None, awaitable):
        try:
            return await awaitable
        except NotesError as e:
            logger.warning(
                f"Note {operation.value} failed: {e.message}",
                extra={
                    "operation": operation.value,
                    "note_id": note_id,
                    "error_code": e.code,
                },
            )
            raise

    def _load_failed(self, generation: int, message: str, code: str) -> None:
        if self._is_stale(generation, StoreOperation.LOAD):
            return
        self._state.fail_load(message)
        logger.warning(
            f"Notes load failed: {message}",
            extra={"operation": StoreOperation.LOAD.value, "error_code": code},
        )
        self._notify()

    def _is_stale(
        self, generation: int, operation: StoreOperation, note_id: int | None = None,
    ) -> bool:
        if generation == self._state.generation:
            return False
        logger.debug(
            "Discarding result of a request started before reset",
            extra={"operation": operation.value, "note_id": note_id},
        )
        return True

    def _notify(self) -> None:
        snapshot = self._state.snapshot()
        for listener in list(self._listeners):
            try:
                listener(snapshot)
            except Exception as e:
                logger.error(f"Notes store listener failed: {e}", exc_info=True)
