"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, infrastructure/, or server/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell: the store's reconciliation
      rules live here, the awaiting of the service lives in services/
"""
