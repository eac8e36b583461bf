"""Reference Notes Service — FastAPI implementation of the notes endpoint contract.

Invariants:
    - Same JSON shapes as the client's schemas/ (one source of truth for the wire)
    - Every error leaves as the NotesError envelope (error_handlers.py)

Design Decisions:
    - Lives beside the client so integration tests exercise the real contract
      in-process through httpx.ASGITransport
"""
