"""Faculty Service — faculty catalog."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.core.service_result import ServiceResult
from cognicare.repositories import faculty_repository

logger = logging.getLogger(__name__)


async def list_faculties(db: AsyncSession) -> ServiceResult:
    faculties = await faculty_repository.list_all(db)
    logger.info(f"Loaded {len(faculties)} faculties")
    return ServiceResult(message="Lista de facultades obtenida exitosamente.", data=faculties)
