"""Platform Behaviour — verifies probes, routing fallbacks, auth gates and error envelopes.

Invariants:
    - Unknown routes answer {"message": "Ruta no encontrada: METHOD path"} with 404
    - Missing/invalid token → 401, wrong role → 403, both in the failure envelope
    - Validation errors → 400 with the first message and a field list
    - Database failures never leak driver text outside development
    - Every request writes one access-log line, including unhandled 500s
"""

import logging
from unittest.mock import AsyncMock

from cognicare.core.errors import DatabaseError
from cognicare.repositories import faculty_repository


async def test_liveness(client):
    res = await client.get("/api/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_readiness_without_database(client):
    res = await client.get("/api/health/ready")
    assert res.status_code == 503
    assert res.json()["reason"] == "database_unavailable"


async def test_smoke_route(client):
    res = await client.get("/test")
    assert res.status_code == 200
    assert "respondiendo" in res.text


async def test_unknown_route(client):
    res = await client.get("/api/no-existe")
    assert res.status_code == 404
    assert res.json() == {"message": "Ruta no encontrada: GET /api/no-existe"}


async def test_wrong_method_is_unknown_route(client):
    res = await client.delete("/api/facultades")
    assert res.status_code == 404
    assert res.json()["message"] == "Ruta no encontrada: DELETE /api/facultades"


async def test_missing_token(client):
    res = await client.get("/api/facultades")
    assert res.status_code == 401
    body = res.json()
    assert body["success"] is False
    assert body["message"] == "Token no proporcionado."


async def test_invalid_token(client):
    res = await client.get("/api/facultades", headers={"Authorization": "Bearer basura"})
    assert res.status_code == 401
    assert res.json()["message"] == "Token inválido."


async def test_trainer_cannot_use_admin_routes(client, trainer_headers):
    res = await client.get("/api/admin/entrenadores", headers=trainer_headers)
    assert res.status_code == 403
    assert res.json()["error"]["code"] == "PERMISSION_DENIED"


async def test_admin_cannot_use_trainer_routes(client, admin_headers):
    res = await client.post("/api/sesiones/crear", json={}, headers=admin_headers)
    assert res.status_code == 403


async def test_validation_error_envelope(client):
    res = await client.post("/api/login/admin", json={"correo": "admin@cognicare.test"})
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert body["errors"][0]["field"] == "password"


async def test_validator_message_without_prefix(client, trainer_headers):
    res = await client.put(
        "/api/entrenamientos-cognitivos/sesiones/8f4e2a51-0d5c-4c56-9d6b-0b7a4c1e9a10/observacion",
        json={"nuevaObservacion": "  "},
        headers=trainer_headers,
    )
    assert res.status_code == 400
    assert res.json()["message"] == "La observación no puede estar vacía."


async def test_database_error_hidden_outside_development(client, admin_headers, monkeypatch):
    monkeypatch.setattr(faculty_repository, "list_all", AsyncMock(side_effect=DatabaseError(
        'relation "cc.facultad" does not exist', "list_faculties", sqlstate="42P01",
    )))

    res = await client.get("/api/facultades", headers=admin_headers)

    assert res.status_code == 500
    assert res.json()["message"] == "Error interno del servidor."
    assert "cc.facultad" not in res.text


async def test_unhandled_exception_is_generic_500(client, admin_headers, monkeypatch):
    monkeypatch.setattr(faculty_repository, "list_all", AsyncMock(side_effect=RuntimeError("kaboom")))

    res = await client.get("/api/facultades", headers=admin_headers)

    assert res.status_code == 500
    assert res.json()["message"] == "Error interno del servidor."
    assert "kaboom" not in res.text


def _access_lines(caplog) -> list[logging.LogRecord]:
    return [r for r in caplog.records if r.name == "cognicare.access"]


async def test_access_log_line_per_request(client, caplog):
    with caplog.at_level(logging.INFO, logger="cognicare.access"):
        await client.get("/api/health")

    lines = _access_lines(caplog)
    assert len(lines) == 1
    assert lines[0].status_code == 200
    assert lines[0].path == "/api/health"


async def test_access_log_written_for_unhandled_exception(client, admin_headers, monkeypatch, caplog):
    monkeypatch.setattr(faculty_repository, "list_all", AsyncMock(side_effect=RuntimeError("kaboom")))

    with caplog.at_level(logging.INFO, logger="cognicare.access"):
        res = await client.get("/api/facultades", headers=admin_headers)

    assert res.status_code == 500
    lines = _access_lines(caplog)
    assert len(lines) == 1
    assert lines[0].status_code == 500
    assert lines[0].method == "GET"
