"""Trainer Routes — trainer lookups, reports and training links.

Invariants:
    - /facultad-entrenador/{correo} answers with a bare JSON list (no envelope)
    - Report routes read the trainer id from the token, never from the URL
"""

from fastapi import APIRouter, Depends
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.api.dependencies import get_current_user, require_trainer
from cognicare.api.responses import send
from cognicare.infrastructure.database import get_db
from cognicare.infrastructure.security import AuthenticatedUser
from cognicare.schemas.trainer import TrainerTrainingLink
from cognicare.services import report_service, trainer_service

router = APIRouter(prefix="/api/entrenadores", tags=["trainers"])


@router.get("/facultad-entrenador/{correo}", dependencies=[Depends(get_current_user)])
async def faculties_by_email(correo: str, db: AsyncSession = Depends(get_db)):
    faculties = await trainer_service.faculties_by_email(db, correo)
    return JSONResponse(content=jsonable_encoder(faculties))


@router.get("/datosporcorreo/{correo}", dependencies=[Depends(get_current_user)])
async def trainer_by_email(correo: str, db: AsyncSession = Depends(get_db)):
    return send(await trainer_service.trainer_by_email(db, correo))


@router.get("/informes")
async def trainer_trainings(
    user: AuthenticatedUser = Depends(require_trainer),
    db: AsyncSession = Depends(get_db),
):
    return send(await report_service.trainer_trainings(db, user.id))


@router.get("/informes/{entrenamiento_id}", dependencies=[Depends(require_trainer)])
async def training_report(entrenamiento_id: str, db: AsyncSession = Depends(get_db)):
    return send(await report_service.training_report(db, entrenamiento_id))


@router.post("/asignar-entrenamiento", dependencies=[Depends(get_current_user)])
async def link_trainer_training(
    body: TrainerTrainingLink, db: AsyncSession = Depends(get_db),
):
    return send(await trainer_service.link_trainer_training(db, body))
