"""Catalog Routes — document types and faculties."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.api.dependencies import get_current_user
from cognicare.api.responses import send
from cognicare.infrastructure.database import get_db
from cognicare.services import document_type_service, faculty_service

router = APIRouter(
    prefix="/api", tags=["catalogs"], dependencies=[Depends(get_current_user)],
)


@router.get("/tipos-documento")
async def list_document_types(db: AsyncSession = Depends(get_db)):
    return send(await document_type_service.list_document_types(db))


@router.get("/facultades")
async def list_faculties(db: AsyncSession = Depends(get_db)):
    return send(await faculty_service.list_faculties(db))
