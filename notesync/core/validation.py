"""Input Validation — checks run before anything is sent to the notes service.

Invariants:
    - Every check raises InputValidationError with a user-facing message and the field name
    - Nothing here performs IO: a failed check never reaches the service
    - Register trims email and password before checking; login only checks presence

Design Decisions:
    - Plain functions over a pydantic model: the editor and auth screens need one
      message per failure, in the order the user would fix them
"""

import re

from notesync.core.errors import InputValidationError

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
MIN_PASSWORD_LENGTH = 8


def validate_title(title: str) -> str:
    """Return the trimmed title, or raise if it is blank."""
    trimmed = title.strip()
    if not trimmed:
        raise InputValidationError(
            "Please enter a title for the note", field="title",
        )
    return trimmed


def validate_login(email: str, password: str) -> None:
    if not email or not password:
        raise InputValidationError(
            "Please enter your email and password", field="credentials",
        )


def validate_registration(email: str, password: str) -> tuple[str, str]:
    """Return trimmed (email, password) or raise on the first problem."""
    email = email.strip()
    password = password.strip()
    if not email or not password:
        raise InputValidationError(
            "Please fill in all fields", field="credentials",
        )
    if not EMAIL_PATTERN.match(email):
        raise InputValidationError(
            "Enter a valid email address", field="email",
        )
    if len(password) < MIN_PASSWORD_LENGTH:
        raise InputValidationError(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters",
            field="password",
        )
    return email, password
