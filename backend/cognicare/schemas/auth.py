"""Auth Schemas — login bodies and token response."""

from pydantic import Field

from cognicare.schemas.base import CamelModel


class AdminLogin(CamelModel):
    correo: str = Field(min_length=1)
    password: str = Field(min_length=1)


class TrainerLogin(CamelModel):
    correo: str = Field(min_length=1)
    numero_documento: str = Field(min_length=1)
