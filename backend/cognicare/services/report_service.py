"""Report Service — training reports for admins and trainers."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.core.service_result import ServiceResult
from cognicare.core.validation import require_uuid
from cognicare.repositories import report_repository

logger = logging.getLogger(__name__)


async def admin_trainings(db: AsyncSession) -> ServiceResult:
    trainings = await report_repository.admin_trainings(db)
    logger.info(f"Admin training list with {len(trainings)} rows")
    return ServiceResult(
        message="Lista de entrenamientos obtenida exitosamente.",
        data={"total": len(trainings), "entrenamientos": trainings},
    )


async def training_report(db: AsyncSession, entrenamiento_id: str) -> ServiceResult:
    require_uuid(
        entrenamiento_id, "El ID del entrenamiento debe ser un UUID válido.", "entrenamientoId",
    )
    report = await report_repository.training_report(db, entrenamiento_id)
    return ServiceResult(
        message="Informe del entrenamiento obtenido exitosamente.",
        data={"entrenamientoId": entrenamiento_id, "informe": report},
    )


async def trainer_trainings(db: AsyncSession, entrenador_id: str) -> ServiceResult:
    trainings = await report_repository.trainer_trainings(db, entrenador_id)
    logger.info(
        f"Trainer training list with {len(trainings)} rows",
        extra={"user_id": entrenador_id},
    )
    return ServiceResult(
        message="Lista de entrenamientos obtenida exitosamente.",
        data={"total": len(trainings), "entrenamientos": trainings},
    )
