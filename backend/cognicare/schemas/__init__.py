"""Pydantic Schemas — request bodies for API endpoints.

Invariants:
    - Wire names are the camelCase Spanish keys clients send; Python fields are snake_case
    - Schemas only check shape; domain rules and user-facing messages live in services
"""
