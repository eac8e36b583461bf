"""Error Hierarchy — typed, categorized exceptions for every notes sync failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Input/auth/conflict/not-found errors are 400-level; network/server/database are 500-level
    - to_response() produces the REST envelope shared by the reference server and the client
    - str(error) is the human-readable message (what the store records in `error`)

Design Decisions:
    - Single hierarchy with NotesError base: client, store and server catch one type
    - InputValidationError instead of ValidationError: avoids shadowing pydantic's
    - ErrorContext as dataclass: rich observability without coupling to logging framework
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHENTICATION = "authentication"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    NETWORK = "network"
    SERVER = "server"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    note_id: int | None = None
    status_code: int | None = None
    debug_info: dict[str, Any] | None = None


class NotesError(Exception):
    """Base exception for all notes sync errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
            }
        }


# ─── Caller Errors (400-level) ──────────────────────────────────

class InputValidationError(NotesError):
    """Bad input: blank title, malformed email, short password, rejected payload."""
    def __init__(
        self, message: str, field: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "VALIDATION_ERROR", ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, context, 400,
        )
        self.field = field


class AuthError(NotesError):
    """Bad credentials, or an expired or missing session token."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "AUTH_ERROR", ErrorCategory.AUTHENTICATION,
            ErrorSeverity.ERROR, context, 401,
        )


class ConflictError(NotesError):
    """Resource already exists (e.g. registering a taken email)."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "CONFLICT", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class NoteNotFoundError(NotesError):
    """Note does not exist or is not owned by the session's user."""
    def __init__(
        self, note_id: int | None, message: str | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message or f"Note '{note_id}' not found",
            "NOTE_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.note_id = note_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class NetworkError(NotesError):
    """Service unreachable: connection refused, DNS failure, timeout."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, "NETWORK_ERROR", ErrorCategory.NETWORK,
            ErrorSeverity.CRITICAL, context, 503,
        )


class ServerError(NotesError):
    """Service answered with a 5xx or an unreadable body."""
    def __init__(
        self, message: str, status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "SERVER_ERROR", ErrorCategory.SERVER,
            ErrorSeverity.CRITICAL, context, 502,
        )
        self.status_code = status_code


class DatabaseError(NotesError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
