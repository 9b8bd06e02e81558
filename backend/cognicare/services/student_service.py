"""Student Service — registration, profile update, lookup and gender change."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.core.db_messages import (
    classify_student_registration, classify_student_update, contains,
    error_for_status, student_conflict_message,
)
from cognicare.core.domain_types import PgErrorCode
from cognicare.core.errors import (
    ConflictError, DatabaseError, RequestDataError,
    ResourceNotFoundError, UnexpectedResultError,
)
from cognicare.core.service_result import ServiceResult
from cognicare.core.validation import (
    contains_only_text, is_blank, is_valid_date, is_valid_email,
    parse_datetime, require_text, require_uuid,
)
from cognicare.repositories import student_repository
from cognicare.schemas.student import StudentCreate, StudentUpdate

logger = logging.getLogger(__name__)


def _validate_registration(body: StudentCreate) -> dict:
    data = {
        "sigla": require_text(body.sigla_tipo_documento, "La sigla del tipo de documento es requerida."),
        "genero": require_text(body.nombre_genero, "El nombre del género es requerido."),
        "nombres": require_text(body.nombres, "El nombre del estudiante es requerido."),
        "apellidos": require_text(body.apellidos, "Los apellidos del estudiante son requeridos."),
        "numero_documento": require_text(body.numero_documento, "El número de documento es requerido."),
    }
    if not is_valid_date(body.fecha_nacimiento):
        raise RequestDataError(
            "La fecha de nacimiento es requerida y debe estar en formato YYYY-MM-DD.",
            "fechaNacimiento",
        )
    data["fecha_nacimiento"] = parse_datetime(body.fecha_nacimiento)
    if not is_valid_email(body.correo, strict=False):
        raise RequestDataError(
            "El correo electrónico es requerido y debe tener un formato válido.", "correo",
        )
    data["correo"] = body.correo
    if not isinstance(body.programa_nombres, list) or not body.programa_nombres:
        raise RequestDataError(
            "Se debe especificar al menos un programa académico.", "programaNombres",
        )
    if not contains_only_text(body.programa_nombres):
        raise RequestDataError(
            "Los nombres de los programas deben ser cadenas de texto no vacías.",
            "programaNombres",
        )
    data["programas"] = body.programa_nombres
    return data


async def register_student(db: AsyncSession, body: StudentCreate) -> ServiceResult:
    data = _validate_registration(body)
    try:
        row = await student_repository.register(db, **data)
    except DatabaseError as e:
        if e.sqlstate == PgErrorCode.UNIQUE_VIOLATION.value:
            raise ConflictError(
                student_conflict_message(f"{e.message} {e.detail or ''}"),
            ) from e
        logger.error(f"Unexpected error registering student: {e.message}")
        raise UnexpectedResultError("Ocurrió un error inesperado en el servidor.") from e

    message = (row or {}).get("mensaje")
    status = classify_student_registration(message)
    if status == 409:
        logger.warning(f"Student registration conflict: {message}")
        raise ConflictError(student_conflict_message(message))
    if status >= 400:
        raise error_for_status(
            status, message or "La operación en la base de datos no se completó correctamente.",
        )

    logger.info(f"Student registered with id {row.get('estudianteid')}")
    return ServiceResult(
        message=message,
        data={"estudianteId": row.get("estudianteid"), "detalles": row.get("detalles")},
        status_code=201,
    )


async def update_student(
    db: AsyncSession, sigla: str, numero_documento: str, body: StudentUpdate,
) -> ServiceResult:
    fecha_nacimiento = None
    if body.fecha_nacimiento:
        if not is_valid_date(body.fecha_nacimiento):
            raise RequestDataError(
                "La fecha de nacimiento debe estar en formato YYYY-MM-DD.", "fechaNacimiento",
            )
        fecha_nacimiento = parse_datetime(body.fecha_nacimiento)

    try:
        row = await student_repository.update(
            db, sigla, numero_documento,
            body.nombres, body.apellidos, body.correo,
            fecha_nacimiento, body.genero, body.programa_nombres,
        )
    except DatabaseError as e:
        raise UnexpectedResultError(
            "Ocurrió un error inesperado en el servidor al intentar modificar el estudiante.",
        ) from e

    if not row:
        raise UnexpectedResultError("La operación de modificación no devolvió ningún resultado.")

    message = row.get("mensaje") or ""
    status = classify_student_update(message)
    if status >= 400:
        logger.warning(f"Student update rejected by database: {message}")
        raise error_for_status(status, message)

    return ServiceResult(
        message=message,
        data={"estudianteId": row.get("estudianteid"), "detalles": row.get("detalles")},
    )


async def get_student(db: AsyncSession, sigla: str, numero_documento: str) -> ServiceResult:
    if is_blank(sigla) or is_blank(numero_documento):
        raise RequestDataError("El tipo y número de documento son requeridos.")
    try:
        rows = await student_repository.get_full_info(db, sigla, numero_documento)
    except DatabaseError as e:
        raise UnexpectedResultError(
            "Ocurrió un error inesperado en el servidor al buscar el estudiante.",
        ) from e
    if not rows:
        raise ResourceNotFoundError("Estudiante no encontrado.")
    return ServiceResult(message="Estudiante encontrado exitosamente.", data=rows[0])


async def update_gender(db: AsyncSession, estudiante_id: str, genero: str) -> ServiceResult:
    require_uuid(
        estudiante_id, "El ID del estudiante en la URL debe ser un UUID válido.", "id",
    )
    try:
        row = await student_repository.update_gender(db, estudiante_id, genero)
    except DatabaseError as e:
        raise UnexpectedResultError(
            "Ocurrió un error inesperado en el servidor al actualizar el género.",
        ) from e

    if not row or not row.get("estudianteid"):
        raise ResourceNotFoundError(
            (row or {}).get("mensaje") or "Estudiante o género no encontrado.",
        )
    message = row.get("mensaje") or ""
    if not contains(message, "no se requiere actualización") and not row.get("generoactualizadoid"):
        raise error_for_status(400, message or "Ocurrió un error en la base de datos.")

    return ServiceResult(
        message=message or "Género actualizado exitosamente.",
        data={
            "estudianteId": row.get("estudianteid"),
            "generoId": row.get("generoactualizadoid"),
        },
    )
