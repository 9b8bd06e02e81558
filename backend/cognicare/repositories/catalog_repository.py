"""Catalog Repository — lookup views (genders, document types, programs, variable types) and id resolvers."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.infrastructure.database import fetch_all, fetch_one, fetch_scalar

_GENDERS = text("SELECT * FROM CC.VistaGenerosUV")
_DOCUMENT_TYPES = text("SELECT * FROM CC.VistaSiglasTipoDocumentoUV")
_PROGRAMS = text("SELECT * FROM CC.VistaNombresProgramaUV")
_VARIABLE_TYPES = text("SELECT * FROM CC.ObtenerEntrenamientoCognitivosUV")

_STUDENT_ID_BY_DOCUMENT = text(
    "SELECT CC.obteneridestudiantepordocumentoufs(:tipo, :numero) AS estudiante_id"
)
_DOCUMENT_TYPE_ID = text("SELECT id FROM CC.obteneridtipodocumentoporsiglaufs(:sigla)")
_GENDER_ID = text("SELECT id FROM CC.obtenergeneropornombreuft(:nombre)")


async def genders(db: AsyncSession) -> list[dict[str, Any]]:
    return await fetch_all(db, _GENDERS, operation="list_genders")


async def document_types(db: AsyncSession) -> list[dict[str, Any]]:
    return await fetch_all(db, _DOCUMENT_TYPES, operation="list_document_type_acronyms")


async def programs(db: AsyncSession) -> list[dict[str, Any]]:
    return await fetch_all(db, _PROGRAMS, operation="list_programs")


async def cognitive_variable_types(db: AsyncSession) -> list[dict[str, Any]]:
    return await fetch_all(db, _VARIABLE_TYPES, operation="list_cognitive_variable_types")


async def student_id_by_document(
    db: AsyncSession, tipo_documento: str, numero_documento: str,
) -> Any:
    return await fetch_scalar(db, _STUDENT_ID_BY_DOCUMENT, {
        "tipo": tipo_documento, "numero": numero_documento,
    }, operation="student_id_by_document")


async def document_type_id_by_acronym(db: AsyncSession, sigla: str) -> Any:
    row = await fetch_one(
        db, _DOCUMENT_TYPE_ID, {"sigla": sigla}, operation="document_type_id",
    )
    return row["id"] if row else None


async def gender_id_by_name(db: AsyncSession, nombre: str) -> Any:
    row = await fetch_one(
        db, _GENDER_ID, {"nombre": nombre}, operation="gender_id",
    )
    return row["id"] if row else None
