"""Training Session Routes — create and start sessions.

Invariants:
    - Trainer token required on every route
    - Lifecycle: Por Iniciar → En Progreso here; finishing lives under
      /api/entrenamientos-cognitivos/sesiones/{id}/finalizar
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.api.dependencies import require_trainer
from cognicare.api.responses import send
from cognicare.infrastructure.database import get_db
from cognicare.schemas.training import SessionCreate
from cognicare.services import session_service

router = APIRouter(
    prefix="/api/sesiones", tags=["sessions"], dependencies=[Depends(require_trainer)],
)


@router.post("/crear")
async def create_session(body: SessionCreate, db: AsyncSession = Depends(get_db)):
    return send(await session_service.create_session(db, body))


@router.post("/{id_sesion}/iniciar")
async def start_session(id_sesion: str, db: AsyncSession = Depends(get_db)):
    return send(await session_service.start_session(db, id_sesion))
