"""Training Repository — cognitive trainings, variable assignments and progress.

Invariants:
    - JSON documents (nivel inicial, métricas) bound as JSONB, id lists as UUID[]
    - A training created without an end date receives the configured far-future date
"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import bindparam, text, String
from sqlalchemy.dialects.postgresql import ARRAY, JSONB, UUID
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.config import get_settings
from cognicare.infrastructure.database import fetch_all, fetch_one, fetch_scalar

logger = logging.getLogger(__name__)

_STUDENTS_BY_FACULTY = text(
    "SELECT * FROM CC.obtenerestudiantesporfacultaduft(:facultad_id)"
)

_TRAININGS_BY_DOCUMENT = text(
    'SELECT * FROM CC.DetalleEntrenamientoEstudianteUV '
    'WHERE "estudianteTipoDocumento" = :tipo AND "estudianteNumeroDocumento" = :numero'
)

_CREATE = text(
    "SELECT * FROM CC.CrearEntrenamientoCognitivoUFT("
    ":sigla_estudiante, :numero_estudiante, :sigla_entrenador, :numero_entrenador, "
    ":variables, :fecha_fin)"
).bindparams(bindparam("variables", type_=ARRAY(String)))

_REGISTER_ASSIGNMENT = text(
    "SELECT CC.RegistrarEntrenamientoAsignacionUFS("
    "CAST(:estudiante_id AS UUID), CAST(:fecha_inicio AS TIMESTAMP), "
    "CAST(:tipos_ids AS UUID[]), CAST(:nivel_inicial AS JSONB), "
    "CAST(:metricas AS JSONB)) AS mensaje"
).bindparams(
    bindparam("tipos_ids", type_=ARRAY(UUID(as_uuid=False))),
    bindparam("nivel_inicial", type_=JSONB),
    bindparam("metricas", type_=JSONB),
)

_PROGRESS = text(
    'SELECT * FROM CC.ProgresoVariableUV WHERE "asignacionVariableId" = :asignacion_id'
)

_UPDATE_OBSERVATION = text(
    "SELECT * FROM CC.ActualizarObservacionSesionUFT(:sesion_id, :observacion)"
)

_MODIFY = text(
    "SELECT * FROM cc.modificarentrenamientocognitivouft("
    ":sigla_estudiante, :numero_estudiante, :agregar, :remover, "
    ":sigla_entrenador, :numero_entrenador, :fecha_fin)"
).bindparams(
    bindparam("agregar", type_=ARRAY(String)),
    bindparam("remover", type_=ARRAY(String)),
)

_FINISH_ASSIGNMENT = text(
    "SELECT * FROM CC.FinalizarAsignacionVariableUFT(:asignacion_id)"
)


async def students_by_faculty(db: AsyncSession, facultad_id: str) -> list[dict[str, Any]]:
    return await fetch_all(
        db, _STUDENTS_BY_FACULTY, {"facultad_id": facultad_id},
        operation="students_by_faculty",
    )


async def trainings_by_document(
    db: AsyncSession, tipo_documento: str, numero_documento: str,
) -> list[dict[str, Any]]:
    return await fetch_all(db, _TRAININGS_BY_DOCUMENT, {
        "tipo": tipo_documento, "numero": numero_documento,
    }, operation="trainings_by_document")


async def create_training(
    db: AsyncSession,
    sigla_estudiante: str,
    numero_estudiante: str,
    sigla_entrenador: str,
    numero_entrenador: str,
    variables: list[str],
    fecha_fin: datetime | None = None,
) -> dict[str, Any] | None:
    if fecha_fin is None:
        fecha_fin = datetime.fromisoformat(get_settings().default_training_end_date)
    row = await fetch_one(db, _CREATE, {
        "sigla_estudiante": sigla_estudiante,
        "numero_estudiante": numero_estudiante,
        "sigla_entrenador": sigla_entrenador,
        "numero_entrenador": numero_entrenador,
        "variables": variables,
        "fecha_fin": fecha_fin,
    }, operation="create_training", commit=True)
    if row:
        logger.info(
            f"CrearEntrenamientoCognitivoUFT returned id={row.get('entrenamientocognitivoid')}",
            extra={"operation": "create_training"},
        )
    return row


async def register_assignment(
    db: AsyncSession,
    estudiante_id: str,
    fecha_inicio: datetime,
    tipos_ids: list[str],
    nivel_inicial: dict,
    metricas: dict,
) -> str | None:
    """Scalar message returned by the function."""
    return await fetch_scalar(db, _REGISTER_ASSIGNMENT, {
        "estudiante_id": estudiante_id,
        "fecha_inicio": fecha_inicio,
        "tipos_ids": tipos_ids,
        "nivel_inicial": nivel_inicial,
        "metricas": metricas,
    }, operation="register_assignment", commit=True)


async def variable_progress(db: AsyncSession, asignacion_id: str) -> dict[str, Any] | None:
    return await fetch_one(
        db, _PROGRESS, {"asignacion_id": asignacion_id},
        operation="variable_progress",
    )


async def update_session_observation(
    db: AsyncSession, sesion_id: str, observacion: str,
) -> dict[str, Any] | None:
    return await fetch_one(db, _UPDATE_OBSERVATION, {
        "sesion_id": sesion_id, "observacion": observacion,
    }, operation="update_session_observation", commit=True)


async def modify_training(
    db: AsyncSession,
    sigla_estudiante: str,
    numero_estudiante: str,
    agregar: list[str] | None,
    remover: list[str] | None,
    sigla_entrenador: str | None,
    numero_entrenador: str | None,
    fecha_fin: datetime | None,
) -> dict[str, Any] | None:
    return await fetch_one(db, _MODIFY, {
        "sigla_estudiante": sigla_estudiante,
        "numero_estudiante": numero_estudiante,
        "agregar": agregar,
        "remover": remover,
        "sigla_entrenador": sigla_entrenador,
        "numero_entrenador": numero_entrenador,
        "fecha_fin": fecha_fin,
    }, operation="modify_training", commit=True)


async def finish_assignment(db: AsyncSession, asignacion_id: str) -> dict[str, Any] | None:
    return await fetch_one(
        db, _FINISH_ASSIGNMENT, {"asignacion_id": asignacion_id},
        operation="finish_assignment", commit=True,
    )
