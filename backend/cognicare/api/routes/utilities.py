"""Utility Routes — lookup catalogs used by the front-end forms."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.api.dependencies import get_current_user
from cognicare.api.responses import send
from cognicare.infrastructure.database import get_db
from cognicare.services import catalog_service

router = APIRouter(
    prefix="/api/utilidades", tags=["utilities"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/generos")
async def genders(db: AsyncSession = Depends(get_db)):
    return send(await catalog_service.genders(db))


@router.get("/tipos-documento")
async def document_types(db: AsyncSession = Depends(get_db)):
    return send(await catalog_service.document_types(db))


@router.get("/programas")
async def programs(db: AsyncSession = Depends(get_db)):
    return send(await catalog_service.programs(db))


@router.get("/tipos-variables-cognitivas")
async def cognitive_variable_types(db: AsyncSession = Depends(get_db)):
    return send(await catalog_service.cognitive_variable_types(db))


@router.get("/estudiantes/documento/{tipo_documento}/{numero_documento}")
async def student_id_by_document(
    tipo_documento: str, numero_documento: str, db: AsyncSession = Depends(get_db),
):
    return send(
        await catalog_service.student_id_by_document(db, tipo_documento, numero_documento),
    )
