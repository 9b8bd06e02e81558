"""Cognitive Training Routes — trainings, assignments, progress and session notes.

Invariants:
    - All routes require a valid token; progress and modification routes require a trainer
    - Path ids are validated as UUIDs by the services (400 with a Spanish message)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.api.dependencies import get_current_user, require_trainer
from cognicare.api.responses import send
from cognicare.infrastructure.database import get_db
from cognicare.schemas.training import (
    AssignmentCreate,
    ObservationUpdate,
    SessionFinish,
    StudentDocument,
    TrainingCreate,
    TrainingUpdate,
)
from cognicare.services import session_service, training_service

router = APIRouter(
    prefix="/api/entrenamientos-cognitivos", tags=["training"],
    dependencies=[Depends(get_current_user)],
)


@router.get("/facultad/{facultad_id}/estudiantes")
async def students_by_faculty(facultad_id: str, db: AsyncSession = Depends(get_db)):
    return send(await training_service.students_by_faculty(db, facultad_id))


@router.post("/estudiante/detalle-entrenamiento")
async def trainings_by_document(body: StudentDocument, db: AsyncSession = Depends(get_db)):
    return send(await training_service.trainings_by_document(db, body))


@router.post("/crear")
async def create_training(body: TrainingCreate, db: AsyncSession = Depends(get_db)):
    return send(await training_service.create_training(db, body))


@router.post("/asignacion")
async def register_assignment(body: AssignmentCreate, db: AsyncSession = Depends(get_db)):
    return send(await training_service.register_assignment(db, body))


# ─── Trainer-only ───────────────────────────────────────────────

@router.get("/progreso/{asignacion_id}", dependencies=[Depends(require_trainer)])
async def variable_progress(asignacion_id: str, db: AsyncSession = Depends(get_db)):
    return send(await training_service.variable_progress(db, asignacion_id))


@router.patch("/estudiante/{sigla}/{numero}", dependencies=[Depends(require_trainer)])
async def modify_training(
    sigla: str, numero: str, body: TrainingUpdate, db: AsyncSession = Depends(get_db),
):
    return send(await training_service.modify_training(db, sigla, numero, body))


@router.put("/sesiones/{id_sesion}/observacion", dependencies=[Depends(require_trainer)])
async def update_observation(
    id_sesion: str, body: ObservationUpdate, db: AsyncSession = Depends(get_db),
):
    return send(
        await training_service.update_observation(db, id_sesion, body.nueva_observacion),
    )


@router.put("/sesiones/{id_sesion}/finalizar", dependencies=[Depends(require_trainer)])
async def finish_session(
    id_sesion: str, body: SessionFinish, db: AsyncSession = Depends(get_db),
):
    return send(
        await session_service.finish_session(
            db, id_sesion, body.nuevas_metricas, body.nuevo_nivel_inicial,
        ),
    )


@router.put("/asignaciones/{id_asignacion}/finalizar", dependencies=[Depends(require_trainer)])
async def finish_assignment(id_asignacion: str, db: AsyncSession = Depends(get_db)):
    return send(await training_service.finish_assignment(db, id_asignacion))
