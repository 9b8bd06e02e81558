"""Routes — verifies status codes and envelope shapes for representative endpoints.

Tests:
    - Login returns a bearer token
    - Admin trainer listing merges its payload into the envelope
    - Creation endpoints answer 201
    - Faculty-by-email answers a bare list
    - Trainer reports use the id from the token
"""

from unittest.mock import AsyncMock
from uuid import uuid4

from cognicare.repositories import (
    catalog_repository, report_repository, session_repository,
    student_repository, trainer_repository, training_repository,
)


async def test_admin_login(client, admin_credentials):
    res = await client.post("/api/login/admin", json=admin_credentials)
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["tokenType"] == "Bearer"
    assert body["token"]


async def test_admin_login_wrong_password(client, admin_credentials):
    res = await client.post(
        "/api/login/admin", json={**admin_credentials, "password": "otra"},
    )
    assert res.status_code == 401
    assert res.json()["message"] == "Credenciales inválidas."


async def test_list_trainers(client, admin_headers, monkeypatch):
    list_all = AsyncMock(return_value=[{"id": str(uuid4()), "nombres": "Ana"}])
    monkeypatch.setattr(trainer_repository, "list_all", list_all)

    res = await client.get(
        "/api/admin/entrenadores", params={"nombreFacultad": "Ingeniería"}, headers=admin_headers,
    )

    assert res.status_code == 200
    body = res.json()
    assert body["total"] == 1
    assert body["filtrosAplicados"] == {"nombreFacultad": "Ingeniería"}
    assert list_all.await_args.args[1] == "Ingeniería"


async def test_register_trainer_validation_message(client, admin_headers):
    res = await client.post(
        "/api/admin/entrenadores", json={"siglaTipoDocumento": "CC"}, headers=admin_headers,
    )
    assert res.status_code == 400
    assert res.json()["message"] == "Los nombres del entrenador son requeridos."


async def test_register_student_created(client, trainer_headers, monkeypatch):
    student_id = str(uuid4())
    monkeypatch.setattr(student_repository, "register", AsyncMock(return_value={
        "mensaje": "Estudiante registrado exitosamente.", "estudianteid": student_id,
    }))

    res = await client.post("/api/estudiantes", headers=trainer_headers, json={
        "siglaTipoDocumento": "TI", "nombreGenero": "Femenino", "nombres": "Laura",
        "apellidos": "Pérez", "numeroDocumento": "990101", "fechaNacimiento": "2005-03-14",
        "correo": "laura@uni.edu.co", "programaNombres": ["Psicología"],
    })

    assert res.status_code == 201
    assert res.json()["estudianteId"] == student_id


async def test_get_student_not_found(client, trainer_headers, monkeypatch):
    monkeypatch.setattr(student_repository, "get_full_info", AsyncMock(return_value=[]))

    res = await client.get("/api/estudiantes/TI/990101", headers=trainer_headers)

    assert res.status_code == 404
    assert res.json()["message"] == "Estudiante no encontrado."


async def test_faculties_by_email_is_bare_list(client, trainer_headers, monkeypatch):
    monkeypatch.setattr(trainer_repository, "faculties_by_email", AsyncMock(
        return_value=[{"facultad": "Ingeniería"}],
    ))

    res = await client.get(
        "/api/entrenadores/facultad-entrenador/ana@uni.edu.co", headers=trainer_headers,
    )

    assert res.status_code == 200
    assert res.json() == [{"facultad": "Ingeniería"}]


async def test_trainer_reports_use_token_identity(client, trainer_headers, trainer_id, monkeypatch):
    lookup = AsyncMock(return_value=[{"entrenamientoid": "e-1"}])
    monkeypatch.setattr(report_repository, "trainer_trainings", lookup)

    res = await client.get("/api/entrenadores/informes", headers=trainer_headers)

    assert res.status_code == 200
    assert res.json()["total"] == 1
    assert lookup.await_args.args[1] == trainer_id


async def test_catalog_list_under_data(client, admin_headers, monkeypatch):
    monkeypatch.setattr(catalog_repository, "genders", AsyncMock(return_value=[{"nombre": "Femenino"}]))

    res = await client.get("/api/utilidades/generos", headers=admin_headers)

    assert res.status_code == 200
    assert res.json()["data"] == [{"nombre": "Femenino"}]


async def test_create_session_created(client, trainer_headers, monkeypatch):
    session_id = str(uuid4())
    monkeypatch.setattr(session_repository, "create_session", AsyncMock(return_value={
        "sesionentrenamientoid": session_id,
    }))

    res = await client.post("/api/sesiones/crear", headers=trainer_headers, json={
        "siglaTipoDocEstudiante": "TI", "numeroDocEstudiante": "990101",
        "nombreVariableCognitiva": "Memoria",
    })

    assert res.status_code == 201
    assert res.json()["data"]["sesionentrenamientoid"] == session_id


async def test_start_session_rejects_bad_id(client, trainer_headers):
    res = await client.post("/api/sesiones/123/iniciar", headers=trainer_headers)
    assert res.status_code == 400
    assert res.json()["message"] == "El ID de la sesión debe ser un UUID válido."


async def test_variable_progress_rejects_bad_id(client, trainer_headers, monkeypatch):
    progress = AsyncMock()
    monkeypatch.setattr(training_repository, "variable_progress", progress)

    res = await client.get("/api/entrenamientos-cognitivos/progreso/abc", headers=trainer_headers)

    assert res.status_code == 400
    assert res.json()["message"] == "El ID de la asignación de variable debe ser un UUID válido."
    progress.assert_not_awaited()
