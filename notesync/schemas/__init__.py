"""Pydantic Schemas — the JSON shapes exchanged with the notes service.

Invariants:
    - Schemas validate at system boundary (client decode, server request bodies)
    - The same models are used on both sides of the wire

Design Decisions:
    - Separate from server ORM models: schemas are API contracts, models are persistence
"""
