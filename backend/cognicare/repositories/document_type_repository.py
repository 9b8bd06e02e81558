"""Document Type Repository — full document type catalog (id, sigla, nombre)."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.infrastructure.database import fetch_all

_LIST = text("SELECT id, sigla, nombre FROM CC.tipodocumento ORDER BY sigla")


async def list_all(db: AsyncSession) -> list[dict[str, Any]]:
    return await fetch_all(db, _LIST, operation="list_document_types")
