"""Request Bodies — verifies camelCase aliases and the body-level validators.

Tests:
    - camelCase and snake_case keys both populate fields
    - Observation is stripped, required and capped at 500 characters
    - Session finish requires JSON objects, arrays rejected with their own message
    - Gender update requires a non-blank name
"""

import pytest
from pydantic import ValidationError

from cognicare.schemas.student import StudentGenderUpdate, StudentUpdate
from cognicare.schemas.training import ObservationUpdate, SessionFinish, TrainingUpdate


def _first_message(exc_info) -> str:
    return exc_info.value.errors()[0]["msg"]


def test_camel_case_aliases():
    body = TrainingUpdate.model_validate({
        "variablesAAgregar": ["Memoria"],
        "siglaTipoDocNuevoEntrenador": "CC",
        "numeroDocNuevoEntrenador": "123",
    })
    assert body.variables_a_agregar == ["Memoria"]
    assert body.sigla_tipo_doc_nuevo_entrenador == "CC"


def test_snake_case_names_accepted():
    assert StudentUpdate(fecha_nacimiento="2001-05-04").fecha_nacimiento == "2001-05-04"


def test_observation_stripped():
    assert ObservationUpdate.model_validate({"nuevaObservacion": "  Bien  "}).nueva_observacion == "Bien"


@pytest.mark.parametrize("payload,message", [
    ({}, "La observación no puede estar vacía."),
    ({"nuevaObservacion": "   "}, "La observación no puede estar vacía."),
    ({"nuevaObservacion": 5}, "La observación debe ser una cadena de texto."),
    ({"nuevaObservacion": "x" * 501}, "La observación no puede exceder los 500 caracteres."),
])
def test_observation_rejected(payload, message):
    with pytest.raises(ValidationError) as exc_info:
        ObservationUpdate.model_validate(payload)
    assert message in _first_message(exc_info)


def test_session_finish_accepts_empty_objects():
    body = SessionFinish.model_validate({"nuevasMetricas": {}, "nuevoNivelInicial": {"a": 1}})
    assert body.nuevas_metricas == {}
    assert body.nuevo_nivel_inicial == {"a": 1}


@pytest.mark.parametrize("payload,message", [
    ({"nuevoNivelInicial": {}}, "Las nuevas métricas son requeridas."),
    ({"nuevasMetricas": [], "nuevoNivelInicial": {}}, "Las nuevas métricas no pueden ser un array."),
    ({"nuevasMetricas": "x", "nuevoNivelInicial": {}}, "Las nuevas métricas deben ser un objeto JSON válido."),
    ({"nuevasMetricas": {}, "nuevoNivelInicial": [1]}, "El nuevo nivel inicial no puede ser un array."),
])
def test_session_finish_rejected(payload, message):
    with pytest.raises(ValidationError) as exc_info:
        SessionFinish.model_validate(payload)
    assert message in _first_message(exc_info)


def test_gender_update_requires_name():
    assert StudentGenderUpdate.model_validate({"nuevoNombreGenero": " Femenino "}).nuevo_nombre_genero == "Femenino"
    with pytest.raises(ValidationError) as exc_info:
        StudentGenderUpdate.model_validate({})
    assert "El nuevo nombre del género es requerido." in _first_message(exc_info)
