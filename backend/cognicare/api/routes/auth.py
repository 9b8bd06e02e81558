"""Login Routes — admin and trainer authentication."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.api.responses import send
from cognicare.infrastructure.database import get_db
from cognicare.schemas.auth import AdminLogin, TrainerLogin
from cognicare.services import auth_service

router = APIRouter(prefix="/api/login", tags=["auth"])


@router.post("/admin")
async def login_admin(body: AdminLogin):
    return send(await auth_service.login_admin(body))


@router.post("/entrenador")
async def login_trainer(body: TrainerLogin, db: AsyncSession = Depends(get_db)):
    return send(await auth_service.login_trainer(db, body))
