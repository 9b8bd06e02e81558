"""API Layer — FastAPI routes, auth dependencies and error handlers.

Invariants:
    - Routes registered explicitly in main.py (no auto-discovery)
    - All endpoints return the {"success", "message", ...} JSON envelope

Design Decisions:
    - Thin routes delegate to services: one service call per endpoint
"""
