"""Error Hierarchy — verifies status codes and the failure envelope.

Tests:
    - Each error class carries its HTTP status
    - to_response() has success=false, the message verbatim and error metadata
    - DatabaseError keeps driver details off the envelope
"""

import pytest

from cognicare.core.errors import (
    AuthenticationError, BusinessRuleError, CogniCareError, ConflictError,
    DatabaseError, DatabaseUnavailableError, PermissionDeniedError,
    RequestDataError, ResourceNotFoundError, UnexpectedResultError,
)


@pytest.mark.parametrize("error,status", [
    (RequestDataError("x"), 400),
    (BusinessRuleError("x"), 400),
    (AuthenticationError(), 401),
    (PermissionDeniedError(), 403),
    (ResourceNotFoundError("x"), 404),
    (ConflictError("x"), 409),
    (UnexpectedResultError("x"), 500),
    (DatabaseError("x", "op"), 500),
    (DatabaseUnavailableError("x"), 503),
])
def test_http_status(error, status):
    assert isinstance(error, CogniCareError)
    assert error.http_status == status


def test_to_response_envelope():
    body = ConflictError("El correo electrónico ingresado ya está registrado.").to_response()
    assert body["success"] is False
    assert body["message"] == "El correo electrónico ingresado ya está registrado."
    assert body["error"]["code"] == "CONFLICT"
    assert body["error"]["category"] == "conflict"
    assert "timestamp" in body["error"]


def test_database_error_keeps_driver_details_private():
    err = DatabaseError("duplicate key", "trainer_register", sqlstate="23505", detail="Key (correo)")
    assert err.sqlstate == "23505"
    assert err.context.operation == "trainer_register"
    body = err.to_response()
    assert "23505" not in str(body)
    assert "Key (correo)" not in str(body)


def test_default_messages_are_spanish():
    assert AuthenticationError().message == "No autorizado."
    assert PermissionDeniedError().message == "No tiene permisos para realizar esta acción."
