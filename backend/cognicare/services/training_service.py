"""Training Service — cognitive trainings, variable assignments, progress and session notes.

Invariants:
    - Inputs validated before any DB call; each failure carries its own 400 message
    - Outcome of create/modify/register read from the function's `mensaje` via core.db_messages
    - A PL/pgSQL RAISE (SQLSTATE P0001) during modification or assignment finish is a 400
      with the database text; other driver failures are a generic 500

Design Decisions:
    - Trainings created without an end date are left open by the repository default,
      so the service passes None instead of inventing a date
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.core.db_messages import (
    classify_assignment_registration, classify_training_creation,
    classify_training_modification, error_for_status, is_raise_exception,
)
from cognicare.core.errors import (
    BusinessRuleError, DatabaseError, RequestDataError,
    ResourceNotFoundError, UnexpectedResultError,
)
from cognicare.core.service_result import ServiceResult
from cognicare.core.validation import (
    contains_only_text, is_json_object, is_valid_datetime,
    is_valid_uuid, parse_datetime, require_text, require_uuid,
)
from cognicare.repositories import training_repository
from cognicare.schemas.training import (
    AssignmentCreate, StudentDocument, TrainingCreate, TrainingUpdate,
)

logger = logging.getLogger(__name__)


# ─── Queries ─────────────────────────────────────────────────────

async def students_by_faculty(db: AsyncSession, facultad_id: str) -> ServiceResult:
    require_uuid(facultad_id, "El ID de la facultad debe ser un UUID válido.", "facultadId")
    students = await training_repository.students_by_faculty(db, facultad_id)
    logger.info(f"Found {len(students)} students for faculty {facultad_id}")
    message = (
        "Estudiantes obtenidos exitosamente."
        if students else "No se encontraron estudiantes para la facultad especificada."
    )
    return ServiceResult(message=message, data=students)


async def trainings_by_document(db: AsyncSession, body: StudentDocument) -> ServiceResult:
    tipo = require_text(
        body.tipo_documento,
        "El tipo de documento es requerido y debe ser una cadena de texto no vacía.",
        "tipoDocumento",
    )
    numero = require_text(
        body.numero_documento,
        "El número de documento es requerido y debe ser una cadena de texto no vacía.",
        "numeroDocumento",
    )
    trainings = await training_repository.trainings_by_document(db, tipo, numero)
    if not trainings:
        logger.info(f"No trainings for {tipo}-{numero}")
        return ServiceResult(
            message="No se encontró ningún entrenamiento cognitivo para el estudiante especificado.",
            data=[],
        )
    return ServiceResult(
        message="Entrenamientos cognitivos obtenidos exitosamente.", data=trainings,
    )


async def variable_progress(db: AsyncSession, asignacion_id: str) -> ServiceResult:
    require_uuid(
        asignacion_id, "El ID de la asignación de variable debe ser un UUID válido.", "asignacionId",
    )
    row = await training_repository.variable_progress(db, asignacion_id)
    if not row:
        raise ResourceNotFoundError(
            "No se encontraron detalles de progreso para el ID proporcionado.",
        )
    return ServiceResult(
        message="Progreso de la variable obtenido exitosamente.", data=row, nest=True,
    )


# ─── Training creation & modification ────────────────────────────

def _validate_creation(body: TrainingCreate) -> dict[str, Any]:
    data = {
        "sigla_estudiante": require_text(
            body.sigla_tipo_doc_estudiante,
            "La sigla del tipo de documento del estudiante es requerida.",
        ),
        "numero_estudiante": require_text(
            body.numero_doc_estudiante, "El número de documento del estudiante es requerido.",
        ),
        "sigla_entrenador": require_text(
            body.sigla_tipo_doc_entrenador,
            "La sigla del tipo de documento del entrenador es requerida.",
        ),
        "numero_entrenador": require_text(
            body.numero_doc_entrenador, "El número de documento del entrenador es requerido.",
        ),
    }
    fecha_fin = None
    if body.fecha_fin_entrenamiento not in (None, ""):
        if not is_valid_datetime(body.fecha_fin_entrenamiento):
            raise RequestDataError(
                "La fecha de fin del entrenamiento debe estar en formato YYYY-MM-DD HH:MM:SS.",
                "fechaFinEntrenamiento",
            )
        fecha_fin = parse_datetime(body.fecha_fin_entrenamiento)
    data["fecha_fin"] = fecha_fin
    variables = body.variables_cognitivas
    if not isinstance(variables, list) or not variables:
        raise RequestDataError(
            "Se debe especificar al menos una variable cognitiva.", "variablesCognitivas",
        )
    if not contains_only_text(variables):
        raise RequestDataError(
            "Las variables cognitivas deben ser cadenas de texto no vacías.",
            "variablesCognitivas",
        )
    data["variables"] = variables
    return data


async def create_training(db: AsyncSession, body: TrainingCreate) -> ServiceResult:
    data = _validate_creation(body)
    row = await training_repository.create_training(db, **data)
    if not row:
        raise UnexpectedResultError(
            "No se obtuvo respuesta de la base de datos al crear el entrenamiento.",
        )

    message = row.get("mensaje")
    status = classify_training_creation(message)
    if status >= 400:
        logger.warning(f"Training creation rejected by database: {message}")
        raise error_for_status(status, message or "No se pudo crear el entrenamiento cognitivo.")

    logger.info(f"Training created with id {row.get('entrenamientocognitivoid')}")
    return ServiceResult(
        message=message,
        data={
            **body.model_dump(by_alias=True),
            "id": row.get("entrenamientocognitivoid"),
            "mensajeBD": message,
            "detalles": row.get("detalles"),
        },
        status_code=201,
        nest=True,
    )


def _validate_modification(body: TrainingUpdate) -> None:
    has_sigla = bool(body.sigla_tipo_doc_nuevo_entrenador)
    has_numero = bool(body.numero_doc_nuevo_entrenador)
    if has_sigla != has_numero:
        raise RequestDataError(
            "Para cambiar el entrenador, se deben proporcionar tanto la sigla del tipo de "
            "documento como el número de documento del nuevo entrenador.",
        )
    if body.variables_a_agregar is not None and not isinstance(body.variables_a_agregar, list):
        raise RequestDataError(
            'El campo "variablesAAgregar" debe ser un arreglo.', "variablesAAgregar",
        )
    if body.variables_a_remover is not None and not isinstance(body.variables_a_remover, list):
        raise RequestDataError(
            'El campo "variablesARemover" debe ser un arreglo.', "variablesARemover",
        )


async def modify_training(
    db: AsyncSession, sigla: str, numero_documento: str, body: TrainingUpdate,
) -> ServiceResult:
    _validate_modification(body)
    fecha_fin = None
    if body.nueva_fecha_fin_entrenamiento:
        fecha_fin = parse_datetime(body.nueva_fecha_fin_entrenamiento)
        if fecha_fin is None:
            raise RequestDataError(
                "La nueva fecha de fin del entrenamiento no tiene un formato válido.",
                "nuevaFechaFinEntrenamiento",
            )

    try:
        row = await training_repository.modify_training(
            db, sigla, numero_documento,
            body.variables_a_agregar or None,
            body.variables_a_remover or None,
            body.sigla_tipo_doc_nuevo_entrenador or None,
            body.numero_doc_nuevo_entrenador or None,
            fecha_fin,
        )
    except DatabaseError as e:
        if is_raise_exception(e.sqlstate):
            raise BusinessRuleError(e.message) from e
        raise UnexpectedResultError(
            "Ocurrió un error inesperado en el servidor al intentar modificar el entrenamiento.",
        ) from e

    if not row:
        raise UnexpectedResultError("La modificación no devolvió ningún resultado.")
    message = row.get("mensaje") or ""
    status = classify_training_modification(message)
    if status >= 400:
        logger.warning(f"Training modification rejected by database: {message}")
        raise error_for_status(status, message)

    logger.info(f"Training of {sigla}-{numero_documento} modified")
    return ServiceResult(
        message=message,
        data={
            "entrenamientoId": row.get("entrenamientocognitivoid"),
            "detalles": row.get("detalles"),
        },
    )


# ─── Variable assignments ────────────────────────────────────────

def _validate_assignment(body: AssignmentCreate) -> None:
    if not is_valid_uuid(body.estudiante_id):
        raise RequestDataError(
            "El ID del estudiante es requerido y debe ser un UUID válido.", "estudianteId",
        )
    ids = body.tipos_variables_cognitivas_ids
    if not isinstance(ids, list) or not ids:
        raise RequestDataError(
            "Se debe proporcionar al menos un ID de tipo de variable cognitiva en un arreglo.",
            "tiposVariablesCognitivasIds",
        )
    for type_id in ids:
        if not is_valid_uuid(type_id):
            raise RequestDataError(
                f"El ID de tipo de variable cognitiva '{type_id}' no es un UUID válido.",
                "tiposVariablesCognitivasIds",
            )
    if not is_valid_datetime(body.fecha_inicio):
        raise RequestDataError(
            "La fecha de inicio es requerida y debe estar en formato YYYY-MM-DD HH:MM:SS.",
            "fechaInicio",
        )
    if not is_json_object(body.nivel_inicial):
        raise RequestDataError(
            "El nivel inicial es requerido y debe ser un objeto JSON.", "nivelInicial",
        )
    if not is_json_object(body.metricas):
        raise RequestDataError(
            "Las métricas son requeridas y deben ser un objeto JSON.", "metricas",
        )


async def register_assignment(db: AsyncSession, body: AssignmentCreate) -> ServiceResult:
    _validate_assignment(body)
    message = await training_repository.register_assignment(
        db,
        body.estudiante_id,
        parse_datetime(body.fecha_inicio),
        body.tipos_variables_cognitivas_ids,
        body.nivel_inicial,
        body.metricas,
    )
    if classify_assignment_registration(message) >= 400:
        logger.warning(f"Assignment registration rejected by database: {message}")
        raise BusinessRuleError(message or "Ocurrió un error en la base de datos.")

    logger.info(f"Assignment registered for student {body.estudiante_id}")
    return ServiceResult(message=message, status_code=201)


async def finish_assignment(db: AsyncSession, asignacion_id: str) -> ServiceResult:
    require_uuid(
        asignacion_id,
        "El ID de la asignación de variable es requerido y debe ser un UUID válido.",
        "idAsignacion",
    )
    try:
        row = await training_repository.finish_assignment(db, asignacion_id)
    except DatabaseError as e:
        if is_raise_exception(e.sqlstate):
            raise BusinessRuleError(e.message) from e
        raise UnexpectedResultError(
            "Ocurrió un error inesperado en el servidor al finalizar la asignación.",
        ) from e

    if not row:
        raise UnexpectedResultError(
            "Error al finalizar la asignación de variable en la base de datos.",
        )
    if not row.get("exito"):
        raise BusinessRuleError(
            row.get("mensaje") or "No se pudo finalizar la asignación de variable.",
        )

    logger.info(f"Assignment {asignacion_id} finished")
    return ServiceResult(
        message=row.get("mensaje") or "Asignación finalizada correctamente.",
        data={"asignacionId": row.get("asignacionid"), "detalles": row.get("detalles")},
        nest=True,
    )


# ─── Session notes ───────────────────────────────────────────────

async def update_observation(
    db: AsyncSession, sesion_id: str, observacion: str,
) -> ServiceResult:
    require_uuid(sesion_id, "El ID de la sesión debe ser un UUID válido.", "idSesion")
    try:
        row = await training_repository.update_session_observation(db, sesion_id, observacion)
    except DatabaseError as e:
        raise BusinessRuleError(e.message) from e

    if row and row.get("sesionid"):
        return ServiceResult(
            message=row.get("mensaje") or "Observación actualizada exitosamente.",
            data=row,
            nest=True,
        )
    raise BusinessRuleError(
        (row or {}).get("mensaje") or "No se pudo actualizar la observación.",
    )
