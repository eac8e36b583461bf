"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - get_settings() is cached (lru_cache) — single instance per process
    - Every setting has a default: the client and the reference server run out-of-the-box

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - NOTESYNC_ prefix: keeps client settings apart from whatever else the host process reads
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Client and reference-server settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", env_prefix="NOTESYNC_", case_sensitive=False,
    )

    # Notes service client
    api_base_url: str = "http://localhost:8000"
    api_timeout_seconds: float = 15.0

    # Session store
    session_token_key: str = "token"
    session_database_url: str = "sqlite+aiosqlite:///notesync_session.db"

    # Reference server
    server_database_url: str = "sqlite+aiosqlite:///notesync_server.db"
    server_token_ttl_hours: int = 24 * 7

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator("api_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @field_validator("session_database_url", "server_database_url", mode="before")
    @classmethod
    def convert_sqlite_url(cls, v: str) -> str:
        """Plain sqlite:// URLs need the async driver."""
        if isinstance(v, str) and v.startswith("sqlite://"):
            return v.replace("sqlite://", "sqlite+aiosqlite://", 1)
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()
