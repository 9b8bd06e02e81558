"""Training Service — verifies training creation/modification, assignments and notes.

Invariants:
    - Validation failures never reach the repository
    - SQLSTATE P0001 raised by PL/pgSQL surfaces as 400 with the database text
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from cognicare.core.errors import (
    BusinessRuleError, ConflictError, DatabaseError, RequestDataError,
    ResourceNotFoundError, UnexpectedResultError,
)
from cognicare.repositories import training_repository
from cognicare.schemas.training import (
    AssignmentCreate, StudentDocument, TrainingCreate, TrainingUpdate,
)
from cognicare.services import training_service


# ─── Queries ─────────────────────────────────────────────────────

async def test_students_by_faculty_requires_uuid(db):
    with pytest.raises(RequestDataError):
        await training_service.students_by_faculty(db, "facultad-1")


async def test_students_by_faculty_empty_is_success(db, monkeypatch):
    monkeypatch.setattr(training_repository, "students_by_faculty", AsyncMock(return_value=[]))

    body = (await training_service.students_by_faculty(db, str(uuid4()))).to_body()

    assert body["data"] == []
    assert body["message"] == "No se encontraron estudiantes para la facultad especificada."


async def test_trainings_by_document(db, monkeypatch):
    lookup = AsyncMock(return_value=[{"entrenamientoid": "x"}])
    monkeypatch.setattr(training_repository, "trainings_by_document", lookup)

    body = (await training_service.trainings_by_document(
        db, StudentDocument(tipo_documento=" CC ", numero_documento="123"),
    )).to_body()

    assert body["data"] == [{"entrenamientoid": "x"}]
    lookup.assert_awaited_once_with(db, "CC", "123")


async def test_trainings_by_document_blank(db):
    with pytest.raises(RequestDataError):
        await training_service.trainings_by_document(db, StudentDocument(tipo_documento="CC"))


async def test_variable_progress_requires_uuid(db, monkeypatch):
    progress = AsyncMock()
    monkeypatch.setattr(training_repository, "variable_progress", progress)

    with pytest.raises(RequestDataError) as exc_info:
        await training_service.variable_progress(db, "abc")

    assert exc_info.value.message == "El ID de la asignación de variable debe ser un UUID válido."
    progress.assert_not_awaited()


async def test_variable_progress_not_found(db, monkeypatch):
    monkeypatch.setattr(training_repository, "variable_progress", AsyncMock(return_value=None))

    with pytest.raises(ResourceNotFoundError):
        await training_service.variable_progress(db, str(uuid4()))


# ─── create_training ─────────────────────────────────────────────

def _training(**overrides) -> TrainingCreate:
    data = {
        "siglaTipoDocEstudiante": "TI",
        "numeroDocEstudiante": "990101",
        "siglaTipoDocEntrenador": "CC",
        "numeroDocEntrenador": "1020",
        "variablesCognitivas": ["Memoria", "Atención"],
    }
    data.update(overrides)
    return TrainingCreate.model_validate(data)


async def test_create_training_without_end_date(db, monkeypatch):
    create = AsyncMock(return_value={
        "entrenamientocognitivoid": "e-1", "mensaje": "Entrenamiento creado exitosamente",
    })
    monkeypatch.setattr(training_repository, "create_training", create)

    result = await training_service.create_training(db, _training())

    assert result.status_code == 201
    assert create.await_args.kwargs["fecha_fin"] is None
    data = result.to_body()["data"]
    assert data["id"] == "e-1"
    assert data["mensajeBD"] == "Entrenamiento creado exitosamente"
    assert data["variablesCognitivas"] == ["Memoria", "Atención"]


async def test_create_training_with_end_datetime(db, monkeypatch):
    create = AsyncMock(return_value={"mensaje": "Creado exitosamente"})
    monkeypatch.setattr(training_repository, "create_training", create)

    await training_service.create_training(
        db, _training(fechaFinEntrenamiento="2026-06-30 18:00:00"),
    )

    assert create.await_args.kwargs["fecha_fin"].hour == 18


@pytest.mark.parametrize("overrides", [
    {"fechaFinEntrenamiento": "2026-06-30"},
    {"variablesCognitivas": []},
    {"variablesCognitivas": "Memoria"},
    {"siglaTipoDocEntrenador": " "},
])
async def test_create_training_validation(db, overrides):
    with pytest.raises(RequestDataError):
        await training_service.create_training(db, _training(**overrides))


async def test_create_training_already_exists(db, monkeypatch):
    monkeypatch.setattr(training_repository, "create_training", AsyncMock(return_value={
        "mensaje": "El estudiante ya tiene un entrenamiento activo",
    }))

    with pytest.raises(ConflictError):
        await training_service.create_training(db, _training())


# ─── modify_training ─────────────────────────────────────────────

async def test_modify_training_requires_both_trainer_fields(db):
    with pytest.raises(RequestDataError):
        await training_service.modify_training(
            db, "TI", "1", TrainingUpdate(sigla_tipo_doc_nuevo_entrenador="CC"),
        )


async def test_modify_training_arrays_must_be_lists(db):
    with pytest.raises(RequestDataError) as exc_info:
        await training_service.modify_training(
            db, "TI", "1", TrainingUpdate(variables_a_agregar="Memoria"),
        )
    assert exc_info.value.message == 'El campo "variablesAAgregar" debe ser un arreglo.'


async def test_modify_training_success(db, monkeypatch):
    modify = AsyncMock(return_value={
        "mensaje": "Entrenamiento modificado exitosamente", "entrenamientocognitivoid": "e-1",
    })
    monkeypatch.setattr(training_repository, "modify_training", modify)

    body = (await training_service.modify_training(
        db, "TI", "1", TrainingUpdate(variables_a_remover=["Memoria"]),
    )).to_body()

    assert body["entrenamientoId"] == "e-1"
    assert modify.await_args.args[3:5] == (None, ["Memoria"])


async def test_modify_training_not_found(db, monkeypatch):
    monkeypatch.setattr(training_repository, "modify_training", AsyncMock(return_value={
        "mensaje": "El estudiante no tiene un entrenamiento activo",
    }))

    with pytest.raises(ResourceNotFoundError):
        await training_service.modify_training(db, "TI", "1", TrainingUpdate())


async def test_modify_training_raise_exception_is_400(db, monkeypatch):
    monkeypatch.setattr(training_repository, "modify_training", AsyncMock(side_effect=DatabaseError(
        "No se puede remover la última variable", "modify_training", sqlstate="P0001",
    )))

    with pytest.raises(BusinessRuleError) as exc_info:
        await training_service.modify_training(db, "TI", "1", TrainingUpdate())
    assert exc_info.value.message == "No se puede remover la última variable"


async def test_modify_training_other_db_error_is_500(db, monkeypatch):
    monkeypatch.setattr(training_repository, "modify_training", AsyncMock(
        side_effect=DatabaseError("boom", "modify_training", sqlstate="XX000"),
    ))

    with pytest.raises(UnexpectedResultError):
        await training_service.modify_training(db, "TI", "1", TrainingUpdate())


# ─── register_assignment / finish_assignment ─────────────────────

def _assignment(**overrides) -> AssignmentCreate:
    data = {
        "estudianteId": str(uuid4()),
        "tiposVariablesCognitivasIds": [str(uuid4())],
        "fechaInicio": "2025-02-01 08:00:00",
        "nivelInicial": {"memoria": 2},
        "metricas": {},
    }
    data.update(overrides)
    return AssignmentCreate.model_validate(data)


async def test_register_assignment_created(db, monkeypatch):
    register = AsyncMock(return_value="Asignación registrada con éxito")
    monkeypatch.setattr(training_repository, "register_assignment", register)

    result = await training_service.register_assignment(db, _assignment())

    assert result.status_code == 201
    assert result.to_body() == {"success": True, "message": "Asignación registrada con éxito"}
    assert register.await_args.args[2].hour == 8


@pytest.mark.parametrize("overrides,field", [
    ({"estudianteId": "x"}, "estudianteId"),
    ({"tiposVariablesCognitivasIds": []}, "tiposVariablesCognitivasIds"),
    ({"tiposVariablesCognitivasIds": ["nope"]}, "tiposVariablesCognitivasIds"),
    ({"fechaInicio": "2025-02-01"}, "fechaInicio"),
    ({"nivelInicial": []}, "nivelInicial"),
    ({"metricas": None}, "metricas"),
])
async def test_register_assignment_validation(db, overrides, field):
    with pytest.raises(RequestDataError) as exc_info:
        await training_service.register_assignment(db, _assignment(**overrides))
    assert exc_info.value.field == field


async def test_register_assignment_rejected(db, monkeypatch):
    monkeypatch.setattr(training_repository, "register_assignment", AsyncMock(
        return_value="Estudiante no encontrado",
    ))

    with pytest.raises(BusinessRuleError):
        await training_service.register_assignment(db, _assignment())


async def test_finish_assignment_not_successful(db, monkeypatch):
    monkeypatch.setattr(training_repository, "finish_assignment", AsyncMock(return_value={
        "exito": False, "mensaje": "La asignación ya está finalizada",
    }))

    with pytest.raises(BusinessRuleError) as exc_info:
        await training_service.finish_assignment(db, str(uuid4()))
    assert exc_info.value.message == "La asignación ya está finalizada"


async def test_finish_assignment_success(db, monkeypatch):
    assignment_id = str(uuid4())
    monkeypatch.setattr(training_repository, "finish_assignment", AsyncMock(return_value={
        "exito": True, "mensaje": "Asignación finalizada", "asignacionid": assignment_id,
    }))

    body = (await training_service.finish_assignment(db, assignment_id)).to_body()

    assert body["data"]["asignacionId"] == assignment_id


# ─── update_observation ──────────────────────────────────────────

async def test_update_observation(db, monkeypatch):
    session_id = str(uuid4())
    monkeypatch.setattr(training_repository, "update_session_observation", AsyncMock(
        return_value={"sesionid": session_id, "mensaje": "Observación actualizada"},
    ))

    body = (await training_service.update_observation(db, session_id, "Buen avance")).to_body()

    assert body["data"]["sesionid"] == session_id


async def test_update_observation_without_session(db, monkeypatch):
    monkeypatch.setattr(training_repository, "update_session_observation", AsyncMock(
        return_value={"sesionid": None, "mensaje": "La sesión no existe"},
    ))

    with pytest.raises(BusinessRuleError) as exc_info:
        await training_service.update_observation(db, str(uuid4()), "x")
    assert exc_info.value.message == "La sesión no existe"
