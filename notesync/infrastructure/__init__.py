"""Infrastructure Layer — notes service client, session storage, database and logging.

Invariants:
    - Infrastructure never imports from services/
    - Every external call is wrapped with timeout and error mapping to NotesError

Design Decisions:
    - Thin wrappers over httpx and SQLAlchemy: the store only sees core Protocols
"""
