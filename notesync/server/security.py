"""Password hashing and token issuing for the reference server."""

import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone

_ITERATIONS = 200_000


def hash_password(password: str) -> str:
    salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), bytes.fromhex(salt), _ITERATIONS,
    )
    return f"{salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    salt, _, expected = stored.partition("$")
    digest = hashlib.pbkdf2_hmac(
        "sha256", password.encode(), bytes.fromhex(salt), _ITERATIONS,
    )
    return hmac.compare_digest(digest.hex(), expected)


def new_token() -> str:
    return secrets.token_urlsafe(32)


def token_expiry(ttl_hours: int) -> datetime:
    return datetime.now(timezone.utc) + timedelta(hours=ttl_hours)


def is_expired(expires_at: datetime) -> bool:
    # SQLite hands back naive datetimes; they were written as UTC
    if expires_at.tzinfo is None:
        expires_at = expires_at.replace(tzinfo=timezone.utc)
    return expires_at <= datetime.now(timezone.utc)
