"""Student Schemas — registration, update and gender change bodies."""

from typing import Any

from pydantic import Field, field_validator

from cognicare.schemas.base import CamelModel


class StudentCreate(CamelModel):
    sigla_tipo_documento: Any = None
    nombre_genero: Any = None
    nombres: Any = None
    apellidos: Any = None
    numero_documento: Any = None
    fecha_nacimiento: Any = None
    correo: Any = None
    programa_nombres: Any = None


class StudentUpdate(CamelModel):
    """Omitted fields are sent to the database as NULL (unchanged)."""
    nombres: str | None = None
    apellidos: str | None = None
    correo: str | None = None
    fecha_nacimiento: str | None = None
    genero: str | None = None
    programa_nombres: list[str] | None = None


class StudentGenderUpdate(CamelModel):
    nuevo_nombre_genero: Any = Field(default=None, validate_default=True)

    @field_validator("nuevo_nombre_genero", mode="before")
    @classmethod
    def strip_gender(cls, v: Any) -> str:
        if not isinstance(v, str) or not v.strip():
            raise ValueError("El nuevo nombre del género es requerido.")
        return v.strip()
