"""Cognitive Variable Repository — abandon/reactivate assignment functions and name lookup."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.infrastructure.database import fetch_one

_ABANDON = text(
    "SELECT * FROM cc.abandonarvariablecognitivauft(:sigla, :numero_documento, :variable_id)"
)
_REACTIVATE = text(
    "SELECT * FROM cc.reactivarvariablecognitivauft(:sigla, :numero_documento, :variable_id)"
)
_ID_BY_NAME = text("SELECT id FROM CC.variablecognitiva WHERE nombre = :nombre")


async def abandon(
    db: AsyncSession, sigla: str, numero_documento: str, variable_id: str,
) -> dict[str, Any] | None:
    return await fetch_one(db, _ABANDON, {
        "sigla": sigla, "numero_documento": numero_documento, "variable_id": variable_id,
    }, operation="abandon_variable", commit=True)


async def reactivate(
    db: AsyncSession, sigla: str, numero_documento: str, variable_id: str,
) -> dict[str, Any] | None:
    return await fetch_one(db, _REACTIVATE, {
        "sigla": sigla, "numero_documento": numero_documento, "variable_id": variable_id,
    }, operation="reactivate_variable", commit=True)


async def id_by_name(db: AsyncSession, nombre: str) -> dict[str, Any] | None:
    return await fetch_one(
        db, _ID_BY_NAME, {"nombre": nombre}, operation="variable_id_by_name",
    )
