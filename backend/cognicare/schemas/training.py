"""Training Schemas — cognitive trainings, assignments and session bodies.

Invariants:
    - Observation text is stripped and limited to 500 characters
    - Finishing a session requires both JSON documents as objects (not arrays)
"""

from typing import Any

from pydantic import Field, field_validator

from cognicare.schemas.base import CamelModel


class StudentDocument(CamelModel):
    tipo_documento: Any = None
    numero_documento: Any = None


class TrainingCreate(CamelModel):
    sigla_tipo_doc_estudiante: Any = None
    numero_doc_estudiante: Any = None
    sigla_tipo_doc_entrenador: Any = None
    numero_doc_entrenador: Any = None
    fecha_fin_entrenamiento: Any = None
    variables_cognitivas: Any = None


class AssignmentCreate(CamelModel):
    estudiante_id: Any = None
    tipos_variables_cognitivas_ids: Any = None
    fecha_inicio: Any = None
    nivel_inicial: Any = None
    metricas: Any = None


class TrainingUpdate(CamelModel):
    variables_a_agregar: Any = None
    variables_a_remover: Any = None
    sigla_tipo_doc_nuevo_entrenador: str | None = None
    numero_doc_nuevo_entrenador: str | None = None
    nueva_fecha_fin_entrenamiento: str | None = None


class ObservationUpdate(CamelModel):
    nueva_observacion: Any = Field(default=None, validate_default=True)

    @field_validator("nueva_observacion", mode="before")
    @classmethod
    def check_observation(cls, v: Any) -> str:
        if v is None or (isinstance(v, str) and not v.strip()):
            raise ValueError("La observación no puede estar vacía.")
        if not isinstance(v, str):
            raise ValueError("La observación debe ser una cadena de texto.")
        v = v.strip()
        if len(v) > 500:
            raise ValueError("La observación no puede exceder los 500 caracteres.")
        return v


class SessionFinish(CamelModel):
    nuevas_metricas: Any = Field(default=None, validate_default=True)
    nuevo_nivel_inicial: Any = Field(default=None, validate_default=True)

    @field_validator("nuevas_metricas", mode="before")
    @classmethod
    def check_metrics(cls, v: Any) -> dict:
        return _require_object(
            v, "Las nuevas métricas son requeridas.",
            "Las nuevas métricas no pueden ser un array.",
            "Las nuevas métricas deben ser un objeto JSON válido.",
        )

    @field_validator("nuevo_nivel_inicial", mode="before")
    @classmethod
    def check_initial_level(cls, v: Any) -> dict:
        return _require_object(
            v, "El nuevo nivel inicial es requerido.",
            "El nuevo nivel inicial no puede ser un array.",
            "El nuevo nivel inicial debe ser un objeto JSON válido.",
        )


class SessionCreate(CamelModel):
    sigla_tipo_doc_estudiante: Any = None
    numero_doc_estudiante: Any = None
    nombre_variable_cognitiva: Any = None
    fecha_inicio: Any = None


def _require_object(v: Any, missing: str, array: str, invalid: str) -> dict:
    if v is None or v == "":
        raise ValueError(missing)
    if isinstance(v, list):
        raise ValueError(array)
    if not isinstance(v, dict):
        raise ValueError(invalid)
    return v
