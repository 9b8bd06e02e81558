"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - StudentId, TrainerId, TrainingId, AssignmentId, SessionId wrap UUIDs
    - Lifecycle labels match the values stored by the database functions exactly
    - All valid roles encoded as an Enum — tokens never carry free-form role strings

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

StudentId = NewType("StudentId", UUID)
TrainerId = NewType("TrainerId", UUID)
TrainingId = NewType("TrainingId", UUID)
AssignmentId = NewType("AssignmentId", UUID)
SessionId = NewType("SessionId", UUID)


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Roles carried in the JWT `role` claim."""
    ADMIN = "admin"
    TRAINER = "entrenador"


class SessionStatus(str, Enum):
    """Training session lifecycle, enforced by the session stored functions."""
    PENDING = "Por Iniciar"
    IN_PROGRESS = "En Progreso"
    FINISHED = "Finalizado"
    ABANDONED = "Abandono"


class AssignmentStatus(str, Enum):
    """Cognitive-variable assignment lifecycle."""
    IN_PROGRESS = "En Progreso"
    FINISHED = "Finalizado"
    ABANDONED = "Abandono"


class PgErrorCode(str, Enum):
    """PostgreSQL SQLSTATE codes the services translate into client errors."""
    UNIQUE_VIOLATION = "23505"
    FOREIGN_KEY_VIOLATION = "23503"
    RAISE_EXCEPTION = "P0001"
