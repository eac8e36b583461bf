"""Auth Session — login, registration and logout glue around the notes store.

Invariants:
    - Credentials are validated locally before the service is contacted
    - Register sends the trimmed email and password; login sends them as typed
    - Logout clears the stored token AND resets the notes store, so no notes from
      the previous user survive and in-flight results are discarded
    - After logout every authenticated call fails with AuthError (no crash)
"""

import logging

from notesync.core.domain_types import SessionToken
from notesync.core.repository_protocols import AuthService, SessionStore
from notesync.core.validation import validate_login, validate_registration
from notesync.services.notes_store import NotesStore

logger = logging.getLogger(__name__)


class AuthSession:
    """Ties the auth endpoints, the token store and the notes store together."""

    def __init__(
        self,
        auth: AuthService,
        store: NotesStore,
        session_store: SessionStore,
        token_key: str = "token",
    ):
        self._auth = auth
        self._store = store
        self._session_store = session_store
        self._token_key = token_key

    async def is_authenticated(self) -> bool:
        return bool(await self._session_store.get(self._token_key))

    async def login(self, email: str, password: str) -> SessionToken:
        validate_login(email, password)
        return await self._auth.login(email, password)

    async def register(self, email: str, password: str) -> None:
        email, password = validate_registration(email, password)
        await self._auth.register(email, password)
        logger.info("Account registered", extra={"operation": "register"})

    async def logout(self) -> None:
        await self._auth.logout()
        self._store.reset()
