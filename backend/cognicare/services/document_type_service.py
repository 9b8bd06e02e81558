"""Document Type Service — document type catalog."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.core.service_result import ServiceResult
from cognicare.repositories import document_type_repository

logger = logging.getLogger(__name__)


async def list_document_types(db: AsyncSession) -> ServiceResult:
    document_types = await document_type_repository.list_all(db)
    logger.info(f"Loaded {len(document_types)} document types")
    return ServiceResult(
        message="Lista de tipos de documento obtenida exitosamente.", data=document_types,
    )
