"""Core Layer — pure domain logic, no IO, no async, no DB.

Invariants:
    - No module in core/ imports from services/, api/, repositories/ or infrastructure/
    - All functions are pure and deterministic

Design Decisions:
    - Message classification and input predicates live here so they are testable without a database
"""
