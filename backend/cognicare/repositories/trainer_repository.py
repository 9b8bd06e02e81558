"""Trainer Repository — CC.entrenador stored functions, views and the trainer/training link table.

Invariants:
    - One statement per function; rows returned as dicts, never interpreted here
    - Mutating calls commit; read calls do not
"""

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import bindparam, text, String
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.infrastructure.database import fetch_all, fetch_one

logger = logging.getLogger(__name__)

_REGISTER = text(
    "SELECT * FROM CC.RegistrarEntrenadorUFT("
    ":sigla, :nombres, :apellidos, :numero_documento, :correo, :facultades, :fecha_fin)"
).bindparams(bindparam("facultades", type_=ARRAY(String)))

_UPDATE = text(
    "SELECT * FROM CC.ModificarInformacionEntrenadorUFT("
    ":entrenador_id, :nombres, :apellidos, :correo, :fecha_fin, :facultades)"
).bindparams(bindparam("facultades", type_=ARRAY(String)))

_DEACTIVATE = text("SELECT * FROM CC.DesactivarEntrenadorUFT(:entrenador_id)")

_FACULTIES_BY_EMAIL = text("SELECT * FROM CC.ObtenerEntrenadorPorEmailUFT(:correo)")

_BY_EMAIL = text(
    "SELECT e.numerodocumento, td.sigla AS siglaTipoDocumento, e.nombres, e.apellidos "
    "FROM CC.entrenador e "
    "INNER JOIN CC.tipodocumento td ON e.tipodocumento = td.id "
    "WHERE e.correo = :correo"
)

_FOR_LOGIN = text(
    "SELECT e.id, e.nombres, e.apellidos, e.correo, e.numerodocumento, e.fechafin "
    "FROM CC.entrenador e WHERE lower(e.correo) = lower(:correo)"
)

_LINK_TRAINING = text(
    "INSERT INTO CC.entrenadorentrenamiento (id, entrenador, entrenamientocognitivo) "
    "VALUES (gen_random_uuid(), :entrenador_id, :entrenamiento_id) "
    "RETURNING id, entrenador, entrenamientocognitivo"
)


async def register(
    db: AsyncSession,
    sigla: str,
    nombres: str,
    apellidos: str,
    numero_documento: str,
    correo: str,
    facultades: list[str],
    fecha_fin: datetime | None,
) -> dict[str, Any] | None:
    logger.debug(f"Registering trainer {sigla}-{numero_documento}")
    return await fetch_one(db, _REGISTER, {
        "sigla": sigla,
        "nombres": nombres,
        "apellidos": apellidos,
        "numero_documento": numero_documento,
        "correo": correo,
        "facultades": facultades,
        "fecha_fin": fecha_fin,
    }, operation="register_trainer", commit=True)


async def list_all(
    db: AsyncSession, faculty_name: str | None = None,
) -> list[dict[str, Any]]:
    """Trainer detail view, optionally restricted to one assigned faculty."""
    sql = "SELECT * FROM CC.DetalleEntrenadoresFacultadesUV"
    params: dict[str, Any] = {}
    if faculty_name:
        sql += " WHERE :facultad = ANY(facultadesAsignadas)"
        params["facultad"] = faculty_name
    sql += " ORDER BY apellidosEntrenador, nombresEntrenador"
    rows = await fetch_all(db, text(sql), params, operation="list_trainers")
    logger.info(f"Found {len(rows)} trainers", extra={"operation": "list_trainers"})
    return rows


async def update(
    db: AsyncSession,
    entrenador_id: str,
    nombres: str | None,
    apellidos: str | None,
    correo: str | None,
    fecha_fin: datetime | None,
    facultades: list[str] | None,
) -> dict[str, Any] | None:
    return await fetch_one(db, _UPDATE, {
        "entrenador_id": entrenador_id,
        "nombres": nombres,
        "apellidos": apellidos,
        "correo": correo,
        "fecha_fin": fecha_fin,
        "facultades": facultades,
    }, operation="update_trainer", commit=True)


async def deactivate(db: AsyncSession, entrenador_id: str) -> dict[str, Any] | None:
    return await fetch_one(
        db, _DEACTIVATE, {"entrenador_id": entrenador_id},
        operation="deactivate_trainer", commit=True,
    )


async def faculties_by_email(db: AsyncSession, correo: str) -> list[dict[str, Any]]:
    return await fetch_all(
        db, _FACULTIES_BY_EMAIL, {"correo": correo},
        operation="trainer_faculties_by_email",
    )


async def find_by_email(db: AsyncSession, correo: str) -> dict[str, Any] | None:
    return await fetch_one(
        db, _BY_EMAIL, {"correo": correo}, operation="trainer_by_email",
    )


async def find_for_login(db: AsyncSession, correo: str) -> dict[str, Any] | None:
    return await fetch_one(
        db, _FOR_LOGIN, {"correo": correo}, operation="trainer_login",
    )


async def link_training(
    db: AsyncSession, entrenador_id: str, entrenamiento_id: str,
) -> dict[str, Any] | None:
    return await fetch_one(db, _LINK_TRAINING, {
        "entrenador_id": entrenador_id,
        "entrenamiento_id": entrenamiento_id,
    }, operation="link_trainer_training", commit=True)
