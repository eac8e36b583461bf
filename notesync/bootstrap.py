"""Client Bootstrap — wires settings, session store, service client and notes store.

Invariants:
    - One NotesStore per NotesClient: every screen shares it
    - The same session store instance backs the service client and the auth session
    - close() releases the HTTP client and the session database

Design Decisions:
    - Async factory over module-level singletons: the host decides when IO starts
      and tests can hand in their own transport and session store
"""

import logging
from dataclasses import dataclass

import httpx

from notesync.config import Settings, get_settings
from notesync.core.domain_types import NoteId
from notesync.core.repository_protocols import RichTextEditor, SessionStore
from notesync.infrastructure.notes_api_client import NotesApiClient
from notesync.infrastructure.observability import setup_logging
from notesync.infrastructure.session_store import SqlSessionStore
from notesync.services.auth_session import AuthSession
from notesync.services.note_editor import NoteEditorSession
from notesync.services.notes_store import NotesStore

logger = logging.getLogger(__name__)


@dataclass
class NotesClient:
    """Everything a presentation layer needs, already connected."""
    settings: Settings
    session_store: SessionStore
    api: NotesApiClient
    store: NotesStore
    auth: AuthSession

    def editor(
        self, editor: RichTextEditor, note_id: NoteId | None = None,
    ) -> NoteEditorSession:
        session = NoteEditorSession(self.store, editor, note_id)
        session.open()
        return session

    async def close(self) -> None:
        await self.api.aclose()
        if isinstance(self.session_store, SqlSessionStore):
            await self.session_store.close()


async def build_client(
    settings: Settings | None = None,
    session_store: SessionStore | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    configure_logging: bool = False,
) -> NotesClient:
    settings = settings or get_settings()
    if configure_logging:
        setup_logging(settings.log_level, settings.log_format)
    if session_store is None:
        session_store = await SqlSessionStore.open(settings.session_database_url)

    api = NotesApiClient(
        session_store,
        base_url=settings.api_base_url,
        timeout_seconds=settings.api_timeout_seconds,
        token_key=settings.session_token_key,
        transport=transport,
    )
    store = NotesStore(api)
    auth = AuthSession(
        api, store, session_store, token_key=settings.session_token_key,
    )
    logger.info(f"Notes client ready for {settings.api_base_url}")
    return NotesClient(settings, session_store, api, store, auth)
