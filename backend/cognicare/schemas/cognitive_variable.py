"""Cognitive Variable Schemas — abandon/reactivate body."""

from typing import Any

from cognicare.schemas.base import CamelModel


class VariableAssignmentRef(CamelModel):
    sigla_documento: Any = None
    numero_documento: Any = None
    id_variable_cognitiva: Any = None
