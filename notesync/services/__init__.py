"""Services Layer — notes store, auth session and note editor orchestration.

Invariants:
    - Services await collaborators through core Protocols only
    - Cache rules are delegated to core/notes_state.py

Design Decisions:
    - One module per screen-facing concern (store, auth, editor) for locality
"""
