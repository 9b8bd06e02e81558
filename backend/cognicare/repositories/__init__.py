"""Repositories — one module per entity, one SQL statement per function.

Invariants:
    - Every statement calls a CC.* stored function or view (or a single table statement)
    - Rows are returned as dicts with no interpretation of their messages
"""
