"""Service test fixtures — notes store over a fake service, editor and auth fakes."""

import pytest

from notesync.infrastructure.session_store import InMemorySessionStore
from notesync.services.auth_session import AuthSession
from notesync.services.notes_store import NotesStore
from tests.fakes import FakeAuthService, FakeEditor, FakeNotesService


@pytest.fixture
def service():
    return FakeNotesService()


@pytest.fixture
def store(service):
    return NotesStore(service)


@pytest.fixture
def snapshots(store):
    """Every snapshot the store publishes, in order."""
    seen = []
    store.subscribe(seen.append)
    return seen


@pytest.fixture
def session_store():
    return InMemorySessionStore()


@pytest.fixture
def auth_service(session_store):
    return FakeAuthService(session_store)


@pytest.fixture
def auth_session(auth_service, store, session_store):
    return AuthSession(auth_service, store, session_store)


@pytest.fixture
def editor():
    return FakeEditor()
