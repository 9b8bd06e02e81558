"""Admin Routes — trainer management and training reports.

Invariants:
    - Every route requires an admin token (router-level dependency)
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.api.dependencies import require_admin
from cognicare.api.responses import send
from cognicare.infrastructure.database import get_db
from cognicare.schemas.trainer import TrainerCreate, TrainerUpdate
from cognicare.services import report_service, trainer_service

router = APIRouter(
    prefix="/api/admin", tags=["admin"], dependencies=[Depends(require_admin)],
)


# ─── Trainers ───────────────────────────────────────────────────

@router.post("/entrenadores")
async def register_trainer(body: TrainerCreate, db: AsyncSession = Depends(get_db)):
    return send(await trainer_service.register_trainer(db, body))


@router.get("/entrenadores")
async def list_trainers(
    nombre_facultad: str | None = Query(default=None, alias="nombreFacultad"),
    db: AsyncSession = Depends(get_db),
):
    return send(await trainer_service.list_trainers(db, nombre_facultad))


@router.put("/entrenadores/{entrenador_id}")
async def update_trainer(
    entrenador_id: str, body: TrainerUpdate, db: AsyncSession = Depends(get_db),
):
    return send(await trainer_service.update_trainer(db, entrenador_id, body))


@router.put("/entrenadores/{entrenador_id}/desactivar")
async def deactivate_trainer(entrenador_id: str, db: AsyncSession = Depends(get_db)):
    return send(await trainer_service.deactivate_trainer(db, entrenador_id))


# ─── Reports ────────────────────────────────────────────────────

@router.get("/informes/entrenamientos")
async def admin_trainings(db: AsyncSession = Depends(get_db)):
    return send(await report_service.admin_trainings(db))


@router.get("/informes/entrenamientos/{entrenamiento_id}")
async def training_report(entrenamiento_id: str, db: AsyncSession = Depends(get_db)):
    return send(await report_service.training_report(db, entrenamiento_id))
