"""Trainer Schemas — admin trainer management and trainer/training linking."""

from typing import Any

from cognicare.schemas.base import CamelModel


class TrainerCreate(CamelModel):
    sigla_tipo_documento: Any = None
    nombres: Any = None
    apellidos: Any = None
    numero_documento: Any = None
    correo: Any = None
    facultad_nombres: Any = None
    fecha_fin: Any = None


class TrainerUpdate(CamelModel):
    """Every field optional; omitted fields are left unchanged."""
    nuevos_nombres: str | None = None
    nuevos_apellidos: str | None = None
    nuevo_correo: str | None = None
    nueva_fecha_fin: str | None = None
    nuevos_nombres_facultades: list[str] | None = None


class TrainerTrainingLink(CamelModel):
    entrenador_id: Any = None
    entrenamiento_cognitivo_id: Any = None
