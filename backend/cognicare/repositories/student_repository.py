"""Student Repository — CC.estudiante stored functions."""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import bindparam, text, String
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.infrastructure.database import fetch_all, fetch_one

logger = logging.getLogger(__name__)

# Argument order is fixed by the function signature: gender name is sixth.
_REGISTER = text(
    "SELECT * FROM CC.registrarestudianteuft("
    ":sigla, :nombres, :apellidos, :numero_documento, :correo, "
    ":genero, :fecha_nacimiento, :programas)"
).bindparams(bindparam("programas", type_=ARRAY(String)))

_UPDATE = text(
    "SELECT * FROM CC.modificarinformacionestudianteuft("
    ":sigla, :numero_documento, :nombres, :apellidos, :correo, "
    ":fecha_nacimiento, :genero, :programas)"
).bindparams(bindparam("programas", type_=ARRAY(String)))

_FULL_INFO = text(
    "SELECT * FROM cc.obtenerinformacioncompletaestudianteufs(:sigla, :numero_documento)"
)

_UPDATE_GENDER = text(
    "SELECT * FROM CC.ActualizarGeneroEstudianteUFT(:estudiante_id, :genero)"
)


async def register(
    db: AsyncSession,
    sigla: str,
    nombres: str,
    apellidos: str,
    numero_documento: str,
    correo: str,
    genero: str,
    fecha_nacimiento: datetime,
    programas: list[str],
) -> dict[str, Any] | None:
    logger.debug(f"Registering student {sigla}-{numero_documento}")
    return await fetch_one(db, _REGISTER, {
        "sigla": sigla,
        "nombres": nombres,
        "apellidos": apellidos,
        "numero_documento": numero_documento,
        "correo": correo,
        "genero": genero,
        "fecha_nacimiento": fecha_nacimiento,
        "programas": programas,
    }, operation="register_student", commit=True)


async def update(
    db: AsyncSession,
    sigla: str,
    numero_documento: str,
    nombres: str | None,
    apellidos: str | None,
    correo: str | None,
    fecha_nacimiento: datetime | None,
    genero: str | None,
    programas: list[str] | None,
) -> dict[str, Any] | None:
    """None fields are left unchanged by the stored function."""
    return await fetch_one(db, _UPDATE, {
        "sigla": sigla,
        "numero_documento": numero_documento,
        "nombres": nombres,
        "apellidos": apellidos,
        "correo": correo,
        "fecha_nacimiento": fecha_nacimiento,
        "genero": genero,
        "programas": programas,
    }, operation="update_student", commit=True)


async def get_full_info(
    db: AsyncSession, sigla: str, numero_documento: str,
) -> list[dict[str, Any]]:
    return await fetch_all(db, _FULL_INFO, {
        "sigla": sigla, "numero_documento": numero_documento,
    }, operation="get_student")


async def update_gender(
    db: AsyncSession, estudiante_id: str, genero: str,
) -> dict[str, Any] | None:
    return await fetch_one(db, _UPDATE_GENDER, {
        "estudiante_id": estudiante_id, "genero": genero,
    }, operation="update_student_gender", commit=True)
