"""Infrastructure Layer — database pool, logging and token/password security.

Invariants:
    - Infrastructure never imports from services/ or api/
    - Driver and library errors mapped to core/errors.py types at this boundary
"""
