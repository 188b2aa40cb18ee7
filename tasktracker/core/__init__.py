"""Core Layer - pure domain logic: validation rules, credentials, ownership checks.

Invariants:
    - No module in core/ imports from services/, api/, infrastructure/, models/ or db/
    - All functions are pure and deterministic

Design Decisions:
    - Functional core separated from imperative shell
"""
