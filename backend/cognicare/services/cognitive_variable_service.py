"""Cognitive Variable Service — abandon and reactivate a student's variable, lookup by name."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.core.errors import BusinessRuleError, RequestDataError, ResourceNotFoundError
from cognicare.core.service_result import ServiceResult
from cognicare.core.validation import is_blank
from cognicare.repositories import cognitive_variable_repository
from cognicare.schemas.cognitive_variable import VariableAssignmentRef

logger = logging.getLogger(__name__)


def _require_reference(body: VariableAssignmentRef, message: str) -> tuple[str, str, str]:
    if (
        is_blank(body.sigla_documento)
        or is_blank(body.numero_documento)
        or is_blank(body.id_variable_cognitiva)
    ):
        raise RequestDataError(message)
    return body.sigla_documento, body.numero_documento, body.id_variable_cognitiva


async def abandon_variable(db: AsyncSession, body: VariableAssignmentRef) -> ServiceResult:
    sigla, numero, variable_id = _require_reference(
        body,
        "Datos incompletos. Se requiere siglaDocumento, numeroDocumento y idVariableCognitiva.",
    )
    row = await cognitive_variable_repository.abandon(db, sigla, numero, variable_id)
    if not row or not row.get("exito"):
        raise BusinessRuleError(
            (row or {}).get("mensaje") or "No se pudo completar la operación de abandono.",
        )
    logger.info(f"Variable {variable_id} abandoned for {sigla}-{numero}")
    return ServiceResult(
        message=row.get("mensaje"),
        data={"asignacionId": row.get("asignacionid"), "detalles": row.get("detalles")},
        nest=True,
    )


async def reactivate_variable(db: AsyncSession, body: VariableAssignmentRef) -> ServiceResult:
    sigla, numero, variable_id = _require_reference(
        body,
        "Datos incompletos para reactivar. Se requiere siglaDocumento, numeroDocumento "
        "y idVariableCognitiva.",
    )
    row = await cognitive_variable_repository.reactivate(db, sigla, numero, variable_id)
    if not row or not row.get("exito"):
        raise BusinessRuleError(
            (row or {}).get("mensaje") or "No se pudo completar la reactivación.",
        )
    logger.info(f"Variable {variable_id} reactivated for {sigla}-{numero}")
    return ServiceResult(
        message=row.get("mensaje"),
        data={"asignacionId": row.get("asignacionid"), "detalles": row.get("detalles")},
        nest=True,
    )


async def variable_id_by_name(db: AsyncSession, nombre: str) -> ServiceResult:
    if is_blank(nombre):
        raise RequestDataError("El nombre de la variable cognitiva es requerido.", "nombre")
    row = await cognitive_variable_repository.id_by_name(db, nombre)
    if not row:
        raise ResourceNotFoundError(f'Variable cognitiva con nombre "{nombre}" no encontrada.')
    return ServiceResult(
        message="Variable cognitiva encontrada.", data={"id": row["id"]}, nest=True,
    )
