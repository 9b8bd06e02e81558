"""Services Layer — one module per entity, between routes and repositories.

Invariants:
    - Services return ServiceResult on success and raise CogniCareError on failure
    - Raw driver errors never escape a service: they become typed client errors or a generic 500
"""
