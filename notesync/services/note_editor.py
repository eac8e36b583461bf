"""Note Editor Session — the create/edit screen's state, driven through the store.

Invariants:
    - The rich-text editor is reached only through the RichTextEditor handle it was given
    - Opening an existing note copies title/completed and pushes the body into the editor
    - save() rejects a blank title before contacting the service
    - New notes are sent with a trimmed title; edits keep the title as typed
    - A failed save leaves title, completed and editor content untouched and re-raises
    - A successful create switches the session to editing that note, so saving
      again updates it instead of creating a second one

Design Decisions:
    - Body is read from the editor at save time, not mirrored on every keystroke
"""

import logging

from pydantic import ValidationError as SchemaValidationError

from notesync.core.domain_types import NoteId
from notesync.core.errors import InputValidationError
from notesync.core.repository_protocols import RichTextEditor
from notesync.core.validation import validate_title
from notesync.schemas.note import Note, NoteDraft, NotePatch
from notesync.services.notes_store import NotesStore

logger = logging.getLogger(__name__)


class NoteEditorSession:
    """Editing state for one new or existing note."""

    def __init__(
        self,
        store: NotesStore,
        editor: RichTextEditor,
        note_id: NoteId | None = None,
    ):
        self._store = store
        self._editor = editor
        self.note_id = note_id
        self.title = ""
        self.completed = False

    @property
    def is_new(self) -> bool:
        return self.note_id is None

    def open(self) -> bool:
        """Fill the session from the cached note; False if it isn't cached."""
        if self.note_id is None:
            return False
        note = self._store.get(self.note_id)
        if note is None:
            logger.warning(
                "Note to edit is not in the store",
                extra={"note_id": self.note_id},
            )
            return False
        self.title = note.title
        self.completed = note.completed
        self._editor.set_content(note.body)
        return True

    async def save(self) -> Note:
        trimmed = validate_title(self.title)
        body = self._editor.get_content()
        try:
            if self.note_id is None:
                payload = NoteDraft(
                    title=trimmed, body=body, completed=self.completed,
                )
            else:
                payload = NotePatch(
                    title=self.title, body=body, completed=self.completed,
                )
        except SchemaValidationError as e:
            first = e.errors()[0]
            raise InputValidationError(
                first["msg"], field=".".join(str(p) for p in first["loc"]),
            )

        if isinstance(payload, NoteDraft):
            note = await self._store.create(payload)
            self.note_id = NoteId(note.id)
            self.title = note.title
            return note
        return await self._store.update(self.note_id, payload)
