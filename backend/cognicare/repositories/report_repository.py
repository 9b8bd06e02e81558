"""Report Repository — read-only training report views."""

from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.infrastructure.database import fetch_all

_ADMIN_TRAININGS = text(
    "SELECT * FROM CC.AdminListaEntrenamientosUV "
    "ORDER BY fechainicioentrenamiento DESC, estudianteapellidos, estudiantenombres"
)

_TRAINING_REPORT = text(
    "SELECT * FROM CC.InformeVariablesFinalizadasPorEntrenamientoUV "
    "WHERE entrenamientoId = :entrenamiento_id ORDER BY variablecognitivanombre"
)

_TRAINER_TRAININGS = text(
    "SELECT * FROM CC.EntrenadorInformesPorFacultadUV WHERE entrenadorId = :entrenador_id"
)


async def admin_trainings(db: AsyncSession) -> list[dict[str, Any]]:
    return await fetch_all(db, _ADMIN_TRAININGS, operation="admin_trainings")


async def training_report(db: AsyncSession, entrenamiento_id: str) -> list[dict[str, Any]]:
    """Finished variables of one training, one row per variable."""
    return await fetch_all(
        db, _TRAINING_REPORT, {"entrenamiento_id": entrenamiento_id},
        operation="training_report",
    )


async def trainer_trainings(db: AsyncSession, entrenador_id: str) -> list[dict[str, Any]]:
    return await fetch_all(
        db, _TRAINER_TRAININGS, {"entrenador_id": entrenador_id},
        operation="trainer_trainings",
    )
