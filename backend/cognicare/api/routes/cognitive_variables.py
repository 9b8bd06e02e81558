"""Cognitive Variable Routes — abandon, reactivate and lookup by name."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.api.dependencies import get_current_user
from cognicare.api.responses import send
from cognicare.infrastructure.database import get_db
from cognicare.schemas.cognitive_variable import VariableAssignmentRef
from cognicare.services import cognitive_variable_service

router = APIRouter(
    prefix="/api/variables-cognitivas", tags=["cognitive-variables"],
    dependencies=[Depends(get_current_user)],
)


@router.patch("/abandonar")
async def abandon_variable(body: VariableAssignmentRef, db: AsyncSession = Depends(get_db)):
    return send(await cognitive_variable_service.abandon_variable(db, body))


@router.patch("/reactivar")
async def reactivate_variable(
    body: VariableAssignmentRef, db: AsyncSession = Depends(get_db),
):
    return send(await cognitive_variable_service.reactivate_variable(db, body))


@router.get("/nombre/{nombre}")
async def variable_id_by_name(nombre: str, db: AsyncSession = Depends(get_db)):
    return send(await cognitive_variable_service.variable_id_by_name(db, nombre))
