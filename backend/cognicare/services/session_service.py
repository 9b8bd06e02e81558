"""Session Service — training session lifecycle (Por Iniciar → En Progreso → Finalizado).

Invariants:
    - State transitions are enforced by the database functions; this module only
      reports their verdict (`sesionentrenamientoid`, `exito`, `mensaje`)
    - A session created without a start date starts now, with an empty observation
"""

import logging
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.core.db_messages import is_session_finish_error
from cognicare.core.errors import BusinessRuleError, RequestDataError, UnexpectedResultError
from cognicare.core.service_result import ServiceResult
from cognicare.core.validation import is_blank, parse_datetime, require_uuid
from cognicare.repositories import session_repository
from cognicare.schemas.training import SessionCreate

logger = logging.getLogger(__name__)


async def create_session(db: AsyncSession, body: SessionCreate) -> ServiceResult:
    if (
        is_blank(body.sigla_tipo_doc_estudiante)
        or is_blank(body.numero_doc_estudiante)
        or is_blank(body.nombre_variable_cognitiva)
    ):
        raise RequestDataError(
            "Se requieren los datos del estudiante y el nombre de la variable.",
        )

    fecha_inicio = datetime.now()
    if body.fecha_inicio:
        fecha_inicio = parse_datetime(body.fecha_inicio)
        if fecha_inicio is None:
            raise RequestDataError(
                "La fecha de inicio no tiene un formato válido.", "fechaInicio",
            )

    row = await session_repository.create_session(
        db,
        body.sigla_tipo_doc_estudiante.strip(),
        body.numero_doc_estudiante.strip(),
        body.nombre_variable_cognitiva.strip(),
        fecha_inicio,
        "",
    )
    if not row or not row.get("sesionentrenamientoid"):
        raise BusinessRuleError(
            (row or {}).get("mensaje") or "Error al crear la sesión en la base de datos.",
        )

    logger.info(f"Session created with id {row['sesionentrenamientoid']}")
    return ServiceResult(
        message="Sesión creada exitosamente", data=row, status_code=201, nest=True,
    )


async def start_session(db: AsyncSession, sesion_id: str) -> ServiceResult:
    require_uuid(sesion_id, "El ID de la sesión debe ser un UUID válido.", "idSesion")
    row = await session_repository.start_session(db, sesion_id)
    if not row or not row.get("exito"):
        raise BusinessRuleError((row or {}).get("mensaje") or "No se pudo iniciar la sesión.")

    logger.info(f"Session {sesion_id} started")
    return ServiceResult(message="Sesión iniciada correctamente", data=row, nest=True)


async def finish_session(
    db: AsyncSession, sesion_id: str, metricas: dict, nivel_inicial: dict,
) -> ServiceResult:
    require_uuid(
        sesion_id, "El ID de la sesión es requerido y debe ser un UUID válido.", "idSesion",
    )
    row = await session_repository.finish_session(db, sesion_id, metricas, nivel_inicial)
    if not row or not row.get("mensaje"):
        raise UnexpectedResultError("Error al finalizar la sesión en la base de datos.")

    message = row["mensaje"]
    if is_session_finish_error(message):
        logger.warning(f"Session finish rejected by database: {message}")
        raise BusinessRuleError(message)

    logger.info(f"Session {sesion_id} finished")
    return ServiceResult(
        message=message,
        data={"idSesion": row.get("idsesion"), "detalles": row.get("detalles")},
        nest=True,
    )
