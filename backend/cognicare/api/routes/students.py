"""Student Routes — registration, lookup, updates and gender changes."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.api.dependencies import get_current_user, require_trainer
from cognicare.api.responses import send
from cognicare.infrastructure.database import get_db
from cognicare.schemas.student import StudentCreate, StudentGenderUpdate, StudentUpdate
from cognicare.services import student_service

router = APIRouter(
    prefix="/api/estudiantes", tags=["students"],
    dependencies=[Depends(get_current_user)],
)


@router.post("")
async def register_student(body: StudentCreate, db: AsyncSession = Depends(get_db)):
    return send(await student_service.register_student(db, body))


@router.get("/{sigla}/{numero}")
async def get_student(sigla: str, numero: str, db: AsyncSession = Depends(get_db)):
    return send(await student_service.get_student(db, sigla, numero))


@router.put("/{sigla}/{numero}")
async def update_student(
    sigla: str, numero: str, body: StudentUpdate, db: AsyncSession = Depends(get_db),
):
    return send(await student_service.update_student(db, sigla, numero, body))


@router.patch("/{estudiante_id}/genero", dependencies=[Depends(require_trainer)])
async def update_gender(
    estudiante_id: str, body: StudentGenderUpdate, db: AsyncSession = Depends(get_db),
):
    return send(
        await student_service.update_gender(db, estudiante_id, body.nuevo_nombre_genero),
    )
