"""Trainer Service — trainer registration, maintenance and lookups.

Invariants:
    - Uniqueness failures (SQLSTATE 23505 or constraint names in the message) become 409
    - The update/deactivate outcome is read from the `mensaje` / `exito` columns, never assumed
    - Unclassified driver errors on registration surface as a generic 500 message

Design Decisions:
    - Validation of admin input happens here rather than in schemas so every
      failure carries the Spanish message the admin frontend displays
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.core.db_messages import (
    classify_trainer_deactivation_failure, classify_trainer_update,
    error_for_status, is_trainer_unique_violation, trainer_conflict_message,
    trainer_training_link_not_found_message,
)
from cognicare.core.domain_types import PgErrorCode
from cognicare.core.errors import (
    ConflictError, DatabaseError, RequestDataError,
    ResourceNotFoundError, UnexpectedResultError,
)
from cognicare.core.service_result import ServiceResult
from cognicare.core.validation import (
    is_blank, is_non_empty_text_list, is_valid_date, is_valid_email,
    parse_datetime, require_text, require_uuid,
)
from cognicare.repositories import trainer_repository
from cognicare.schemas.trainer import TrainerCreate, TrainerTrainingLink, TrainerUpdate

logger = logging.getLogger(__name__)


# ─── Admin operations ────────────────────────────────────────────

def _validate_registration(body: TrainerCreate) -> dict[str, Any]:
    data = {
        "sigla": require_text(body.sigla_tipo_documento, "La sigla del tipo de documento es requerida."),
        "nombres": require_text(body.nombres, "Los nombres del entrenador son requeridos."),
        "apellidos": require_text(body.apellidos, "Los apellidos del entrenador son requeridos."),
        "numero_documento": require_text(body.numero_documento, "El número de documento es requerido."),
    }
    if not is_valid_email(body.correo):
        raise RequestDataError(
            "El correo electrónico es requerido y debe tener un formato válido.", "correo",
        )
    data["correo"] = body.correo.strip()
    if not is_non_empty_text_list(body.facultad_nombres):
        raise RequestDataError(
            "Se debe especificar al menos una facultad.", "facultadNombres",
        )
    data["facultades"] = [name.strip() for name in body.facultad_nombres]
    fecha_fin = None
    if body.fecha_fin not in (None, ""):
        fecha_fin = parse_datetime(body.fecha_fin)
        if fecha_fin is None:
            raise RequestDataError(
                "La fecha de fin debe estar en formato YYYY-MM-DD.", "fechaFin",
            )
    data["fecha_fin"] = fecha_fin
    return data


async def register_trainer(db: AsyncSession, body: TrainerCreate) -> ServiceResult:
    data = _validate_registration(body)
    try:
        row = await trainer_repository.register(db, **data)
    except DatabaseError as e:
        if is_trainer_unique_violation(e.message, e.sqlstate):
            logger.warning(f"Trainer uniqueness conflict: {e.message}")
            raise ConflictError(trainer_conflict_message(e.message, e.detail)) from e
        raise UnexpectedResultError(
            "Ocurrió un error inesperado al registrar al entrenador.",
        ) from e

    if not row or not row.get("identrenador"):
        message = (row or {}).get("mensaje")
        if is_trainer_unique_violation(message, None):
            raise ConflictError(trainer_conflict_message(message))
        raise UnexpectedResultError(
            "Ocurrió un error inesperado al registrar al entrenador.",
        )

    logger.info(f"Trainer registered with id {row['identrenador']}")
    return ServiceResult(
        message=row.get("mensaje") or "Entrenador registrado exitosamente.",
        data={"entrenadorId": row["identrenador"], "details": row.get("detalles")},
        status_code=201,
    )


async def list_trainers(db: AsyncSession, faculty_name: str | None = None) -> ServiceResult:
    filters = {"nombreFacultad": faculty_name} if faculty_name else {}
    trainers = await trainer_repository.list_all(db, faculty_name or None)
    return ServiceResult(
        message="Lista de entrenadores obtenida exitosamente.",
        data={
            "total": len(trainers),
            "filtrosAplicados": filters,
            "entrenadores": trainers,
        },
    )


async def update_trainer(
    db: AsyncSession, entrenador_id: str, body: TrainerUpdate,
) -> ServiceResult:
    require_uuid(entrenador_id, "El ID del entrenador debe ser un UUID válido.", "entrenadorID")
    fecha_fin = None
    if body.nueva_fecha_fin:
        if not is_valid_date(body.nueva_fecha_fin):
            raise RequestDataError(
                "La nueva fecha de fin debe estar en formato YYYY-MM-DD.", "nuevaFechaFin",
            )
        fecha_fin = parse_datetime(body.nueva_fecha_fin)

    row = await trainer_repository.update(
        db, entrenador_id,
        body.nuevos_nombres, body.nuevos_apellidos, body.nuevo_correo,
        fecha_fin, body.nuevos_nombres_facultades,
    )
    if not row or not row.get("mensaje"):
        raise UnexpectedResultError(
            "La operación en la base de datos no produjo un resultado.",
        )

    message = row["mensaje"]
    status = classify_trainer_update(message)
    if status >= 400:
        logger.warning(f"Trainer update rejected by database: {message}")
        raise error_for_status(status, message)

    logger.info(f"Trainer {entrenador_id} updated")
    return ServiceResult(
        message=message,
        data={"entrenadorId": row.get("entrenadorid"), "details": row.get("detalles")},
    )


async def deactivate_trainer(db: AsyncSession, entrenador_id: str) -> ServiceResult:
    require_uuid(entrenador_id, "El ID del entrenador debe ser un UUID válido.", "entrenadorID")
    row = await trainer_repository.deactivate(db, entrenador_id)
    if not row:
        raise UnexpectedResultError(
            "No se pudo completar la desactivación, la operación no produjo resultado.",
        )
    if not row.get("exito"):
        message = row.get("mensaje") or "No se pudo desactivar al entrenador."
        raise error_for_status(classify_trainer_deactivation_failure(message), message)

    logger.info(f"Trainer {entrenador_id} deactivated")
    return ServiceResult(
        message=row.get("mensaje") or "Entrenador desactivado exitosamente.",
        data={"entrenadorId": row.get("entrenadorid")},
    )


# ─── Lookups by email ────────────────────────────────────────────

async def faculties_by_email(db: AsyncSession, correo: str) -> list[dict[str, Any]]:
    """Bare list of the trainer's faculties."""
    if is_blank(correo) or "@" not in correo:
        logger.warning(f"Faculty lookup with invalid email: {correo}")
        raise RequestDataError("Correo electrónico inválido.", "correo")
    faculties = await trainer_repository.faculties_by_email(db, correo)
    if not faculties:
        raise ResourceNotFoundError(
            "No se encontraron facultades para el correo proporcionado.",
        )
    return faculties


async def trainer_by_email(db: AsyncSession, correo: str) -> ServiceResult:
    if is_blank(correo):
        raise RequestDataError(
            "El correo electrónico es requerido y debe ser una cadena de texto no vacía.",
            "correo",
        )
    if not is_valid_email(correo):
        raise RequestDataError(
            "El correo electrónico debe tener un formato válido.", "correo",
        )
    row = await trainer_repository.find_by_email(db, correo.strip())
    if not row:
        raise ResourceNotFoundError(
            "No se encontró un entrenador con el correo electrónico proporcionado.",
        )
    return ServiceResult(
        message="Datos del entrenador obtenidos exitosamente",
        data={
            "numeroDocumento": row.get("numerodocumento"),
            "siglaTipoDocumento": row.get("siglatipodocumento"),
            "nombres": row.get("nombres"),
            "apellidos": row.get("apellidos"),
        },
        nest=True,
    )


# ─── Trainer ↔ training link ─────────────────────────────────────

async def link_trainer_training(db: AsyncSession, body: TrainerTrainingLink) -> ServiceResult:
    entrenador_id = require_text(
        body.entrenador_id,
        "El ID del entrenador es requerido y debe ser una cadena de texto no vacía.",
        "entrenadorId",
    )
    entrenamiento_id = require_text(
        body.entrenamiento_cognitivo_id,
        "El ID del entrenamiento cognitivo es requerido y debe ser una cadena de texto no vacía.",
        "entrenamientoCognitivoId",
    )
    require_uuid(entrenador_id, "El ID del entrenador debe tener formato UUID válido.", "entrenadorId")
    require_uuid(
        entrenamiento_id,
        "El ID del entrenamiento cognitivo debe tener formato UUID válido.",
        "entrenamientoCognitivoId",
    )

    try:
        row = await trainer_repository.link_training(db, entrenador_id, entrenamiento_id)
    except DatabaseError as e:
        if e.sqlstate == PgErrorCode.FOREIGN_KEY_VIOLATION.value:
            raise ResourceNotFoundError(
                trainer_training_link_not_found_message(e.message, e.detail),
            ) from e
        if e.sqlstate == PgErrorCode.UNIQUE_VIOLATION.value:
            raise ConflictError(
                "Ya existe una relación entre este entrenador y este entrenamiento cognitivo.",
            ) from e
        raise

    if not row:
        raise UnexpectedResultError("No se pudo crear la relación entrenador-entrenamiento.")
    logger.info(f"Trainer/training link created with id {row['id']}")
    return ServiceResult(
        message="Relación entrenador-entrenamiento creada exitosamente.",
        data={
            "relacionId": row["id"],
            "entrenadorId": row.get("entrenador"),
            "entrenamientoCognitivoId": row.get("entrenamientocognitivo"),
        },
        status_code=201,
        nest=True,
    )
