"""Session Repository — training session lifecycle functions (create, start, finish)."""

from datetime import datetime
from typing import Any

from sqlalchemy import bindparam, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.infrastructure.database import fetch_one

_CREATE = text(
    "SELECT * FROM CC.CrearSesionEntrenamientoUFT("
    ":sigla, :numero_documento, :variable, :fecha_inicio, :observacion)"
)

_START = text("SELECT * FROM CC.IniciarSesionEntrenamientoUFT(:sesion_id)")

_FINISH = text(
    "SELECT * FROM CC.FinalizarSesionEntrenamientoUFT(:sesion_id, :metricas, :nivel_inicial)"
).bindparams(
    bindparam("metricas", type_=JSONB),
    bindparam("nivel_inicial", type_=JSONB),
)


async def create_session(
    db: AsyncSession,
    sigla: str,
    numero_documento: str,
    variable: str,
    fecha_inicio: datetime,
    observacion: str = "",
) -> dict[str, Any] | None:
    return await fetch_one(db, _CREATE, {
        "sigla": sigla,
        "numero_documento": numero_documento,
        "variable": variable,
        "fecha_inicio": fecha_inicio,
        "observacion": observacion,
    }, operation="create_session", commit=True)


async def start_session(db: AsyncSession, sesion_id: str) -> dict[str, Any] | None:
    return await fetch_one(
        db, _START, {"sesion_id": sesion_id},
        operation="start_session", commit=True,
    )


async def finish_session(
    db: AsyncSession, sesion_id: str, metricas: dict, nivel_inicial: dict,
) -> dict[str, Any] | None:
    return await fetch_one(db, _FINISH, {
        "sesion_id": sesion_id,
        "metricas": metricas,
        "nivel_inicial": nivel_inicial,
    }, operation="finish_session", commit=True)
