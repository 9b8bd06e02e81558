"""Catalog Service — lookup lists for the frontend forms and the student id resolver."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.core.errors import ResourceNotFoundError
from cognicare.core.service_result import ServiceResult
from cognicare.core.validation import require_text
from cognicare.repositories import catalog_repository

logger = logging.getLogger(__name__)


async def genders(db: AsyncSession) -> ServiceResult:
    rows = await catalog_repository.genders(db)
    logger.info(f"Loaded {len(rows)} genders")
    return ServiceResult(message="Lista de géneros obtenida exitosamente.", data=rows)


async def document_types(db: AsyncSession) -> ServiceResult:
    rows = await catalog_repository.document_types(db)
    logger.info(f"Loaded {len(rows)} document type acronyms")
    return ServiceResult(
        message="Lista de tipos de documento obtenida exitosamente.", data=rows,
    )


async def programs(db: AsyncSession) -> ServiceResult:
    rows = await catalog_repository.programs(db)
    logger.info(f"Loaded {len(rows)} programs")
    return ServiceResult(message="Lista de programas obtenida exitosamente.", data=rows)


async def cognitive_variable_types(db: AsyncSession) -> ServiceResult:
    rows = await catalog_repository.cognitive_variable_types(db)
    logger.info(f"Loaded {len(rows)} cognitive variable types")
    return ServiceResult(
        message="Lista de tipos de variables cognitivas obtenida exitosamente.", data=rows,
    )


async def student_id_by_document(
    db: AsyncSession, tipo_documento: str, numero_documento: str,
) -> ServiceResult:
    tipo = require_text(
        tipo_documento,
        "El tipo de documento es requerido y debe ser una cadena de texto no vacía.",
        "tipoDocumento",
    )
    numero = require_text(
        numero_documento,
        "El número de documento es requerido y debe ser una cadena de texto no vacía.",
        "numeroDocumento",
    )
    student_id = await catalog_repository.student_id_by_document(db, tipo, numero)
    if not student_id:
        logger.warning(f"No student id for {tipo}-{numero}")
        raise ResourceNotFoundError(
            "No se encontró estudiante con el tipo y número de documento especificados.",
        )
    return ServiceResult(
        message="ID de estudiante obtenido exitosamente.",
        data={"estudianteId": student_id},
        nest=True,
    )
