"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - NoteId wraps the server-assigned int — never a client-generated placeholder
    - SessionToken wraps the opaque credential string issued at login
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON and log fields without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

NoteId = NewType("NoteId", int)
SessionToken = NewType("SessionToken", str)


# ─── Enums ───────────────────────────────────────────────────────

class StoreOperation(str, Enum):
    """Operations the notes store mediates — used as the `operation` log field."""
    LOAD = "load"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
