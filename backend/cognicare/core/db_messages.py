"""Stored-Function Messages — maps the text returned by CC.* functions to HTTP outcomes.

Invariants:
    - Pure functions, no IO: message in, status code (or user-facing text) out
    - Matching is case-insensitive substring search over the DB message
    - Success checks run before failure checks, in the same order for every caller
    - error_for_status() is the single place a status code becomes a typed error

Design Decisions:
    - The database reports controlled failures as a `mensaje` column rather than raising,
      so the HTTP status has to be recovered from the wording; keeping every marker
      here makes the coupling to the SQL side visible in one module
    - Classifiers return the HTTP status for success too (200/201) so services
      never duplicate the branching
"""

from cognicare.core.errors import (
    CogniCareError, BusinessRuleError, ConflictError,
    ResourceNotFoundError, UnexpectedResultError,
)
from cognicare.core.domain_types import PgErrorCode


def contains(message: str | None, *fragments: str) -> bool:
    """True if any fragment occurs in message (case-insensitive)."""
    if not message:
        return False
    lowered = message.lower()
    return any(fragment.lower() in lowered for fragment in fragments)


def is_success_message(message: str | None, markers: tuple[str, ...]) -> bool:
    """True if the stored function reported success with any of its markers."""
    return contains(message, *markers)


def error_for_status(status: int, message: str) -> CogniCareError:
    """Typed error for a failure status decided by a classifier."""
    if status == 404:
        return ResourceNotFoundError(message)
    if status == 409:
        return ConflictError(message)
    if status >= 500:
        return UnexpectedResultError(message)
    return BusinessRuleError(message)


# ─── Students ────────────────────────────────────────────────────

def classify_student_registration(message: str | None) -> int:
    if is_success_message(message, ("exitosamente",)):
        return 201
    if contains(message, "unicidad", "violates unique constraint"):
        return 409
    return 400


def student_conflict_message(message: str | None) -> str:
    if contains(message, "correo"):
        return "El correo electrónico ingresado ya está registrado."
    if contains(message, "numerodocumento"):
        return "El número de documento ingresado ya está registrado."
    return "El valor de un campo único ya está registrado."


def classify_student_update(message: str | None) -> int:
    if contains(message, "ya está en uso por otro estudiante"):
        return 409
    if is_success_message(message, ("procesada para actualización",)):
        return 200
    return 400


# ─── Trainers ────────────────────────────────────────────────────

_TRAINER_UNIQUE_MARKERS = ("unicidad", "ccentrenador001uq", "ccentrenador002uq")


def is_trainer_unique_violation(message: str | None, sqlstate: str | None) -> bool:
    return (
        sqlstate == PgErrorCode.UNIQUE_VIOLATION.value
        or contains(message, *_TRAINER_UNIQUE_MARKERS)
    )


def trainer_conflict_message(message: str | None, detail: str | None = None) -> str:
    if contains(message, "correo") or contains(detail, "correo"):
        return "El correo electrónico ingresado ya está registrado."
    if contains(message, "documento"):
        return "Ya existe un entrenador con ese tipo y número de documento."
    return "Ya existe un entrenador con el documento o correo proporcionado."


def classify_trainer_update(message: str | None) -> int:
    if is_success_message(message, ("actualiza", "no se especificaron cambios")):
        return 200
    if contains(message, "ya está en uso"):
        return 409
    if contains(message, "no encontrado"):
        return 404
    return 400


def classify_trainer_deactivation_failure(message: str | None) -> int:
    return 404 if contains(message, "no encontrado") else 400


def trainer_training_link_not_found_message(
    message: str | None, detail: str | None = None,
) -> str:
    """Which foreign key failed on CC.entrenadorentrenamiento."""
    text = f"{message or ''} {detail or ''}"
    if contains(text, "(entrenamientocognitivo)", "entrenamientocognitivo_fkey"):
        return "El ID del entrenamiento cognitivo proporcionado no existe en la base de datos."
    if contains(text, "(entrenador)", "entrenador_fkey"):
        return "El ID del entrenador proporcionado no existe en la base de datos."
    return "Uno de los IDs proporcionados no existe en la base de datos."


# ─── Trainings & assignments ─────────────────────────────────────

def classify_training_creation(message: str | None) -> int:
    if is_success_message(message, ("exitosamente",)):
        return 201
    if contains(message, "ya tiene un entrenamiento"):
        return 409
    return 400


def classify_training_modification(message: str | None) -> int:
    if is_success_message(message, ("exitosamente",)):
        return 200
    if contains(message, "no tiene un entrenamiento"):
        return 404
    return 400


def classify_assignment_registration(message: str | None) -> int:
    return 201 if is_success_message(message, ("éxito",)) else 400


def is_raise_exception(sqlstate: str | None) -> bool:
    """PL/pgSQL RAISE EXCEPTION without an explicit code."""
    return sqlstate == PgErrorCode.RAISE_EXCEPTION.value


# ─── Sessions ────────────────────────────────────────────────────

def is_session_finish_error(message: str | None) -> bool:
    return contains(message, "error")
