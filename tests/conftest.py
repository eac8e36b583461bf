"""Root conftest — shared test configuration."""

import os

# Never touch on-disk databases or a real notes service from tests
os.environ.setdefault("NOTESYNC_API_BASE_URL", "http://test")
os.environ.setdefault(
    "NOTESYNC_SESSION_DATABASE_URL", "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault(
    "NOTESYNC_SERVER_DATABASE_URL", "sqlite+aiosqlite:///:memory:",
)
os.environ.setdefault("NOTESYNC_LOG_FORMAT", "text")
