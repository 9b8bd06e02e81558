"""Faculty Repository — faculty catalog."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.infrastructure.database import fetch_all

_LIST = text("SELECT id, nombre FROM CC.facultad ORDER BY nombre")


async def list_all(db: AsyncSession) -> list[dict[str, Any]]:
    return await fetch_all(db, _LIST, operation="list_faculties")
