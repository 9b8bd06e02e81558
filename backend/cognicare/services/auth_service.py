"""Auth Service — admin and trainer login, JWT issuance.

Invariants:
    - Failed credentials always produce the same 401 message (no user enumeration)
    - A trainer whose contract end date has passed cannot log in (403)
    - The issued token carries the trainer's database id; handlers read it as the trainer id

Design Decisions:
    - Admin credentials come from settings (email + bcrypt hash): there is no admin table
    - Trainers authenticate with email + document number: the trainer table has no password column
"""

import hmac
import logging
from datetime import datetime, timezone

from sqlalchemy.ext.asyncio import AsyncSession

from cognicare.config import get_settings
from cognicare.core.domain_types import Role
from cognicare.core.errors import AuthenticationError, PermissionDeniedError
from cognicare.core.service_result import ServiceResult
from cognicare.infrastructure.security import create_access_token, verify_password
from cognicare.repositories import trainer_repository
from cognicare.schemas.auth import AdminLogin, TrainerLogin

logger = logging.getLogger(__name__)

_INVALID_CREDENTIALS = "Credenciales inválidas."


def _token_payload(user_id: str, email: str, role: Role, **profile) -> dict:
    settings = get_settings()
    return {
        "token": create_access_token(user_id, email, role),
        "tokenType": "Bearer",
        "expiresIn": settings.jwt_expiration_minutes * 60,
        "usuario": {"id": user_id, "correo": email, "rol": role.value, **profile},
    }


async def login_admin(body: AdminLogin) -> ServiceResult:
    settings = get_settings()
    email_ok = hmac.compare_digest(
        body.correo.strip().lower().encode(), settings.admin_email.strip().lower().encode(),
    )
    if not (email_ok and verify_password(body.password, settings.admin_password_hash)):
        logger.warning("Failed admin login", extra={"role": Role.ADMIN.value})
        raise AuthenticationError(_INVALID_CREDENTIALS)

    logger.info("Admin logged in", extra={"role": Role.ADMIN.value})
    return ServiceResult(
        message="Inicio de sesión exitoso.",
        data=_token_payload("admin", settings.admin_email, Role.ADMIN),
    )


def _is_active(fecha_fin) -> bool:
    if fecha_fin is None:
        return True
    if not isinstance(fecha_fin, datetime):
        fecha_fin = datetime(fecha_fin.year, fecha_fin.month, fecha_fin.day, 23, 59, 59)
    if fecha_fin.tzinfo is None:
        return fecha_fin >= datetime.now()
    return fecha_fin >= datetime.now(timezone.utc)


async def login_trainer(db: AsyncSession, body: TrainerLogin) -> ServiceResult:
    row = await trainer_repository.find_for_login(db, body.correo.strip())
    if not row or not hmac.compare_digest(
        str(row.get("numerodocumento") or "").encode(), body.numero_documento.strip().encode(),
    ):
        logger.warning("Failed trainer login", extra={"role": Role.TRAINER.value})
        raise AuthenticationError(_INVALID_CREDENTIALS)
    if not _is_active(row.get("fechafin")):
        logger.warning(
            "Login attempt by inactive trainer",
            extra={"user_id": str(row["id"]), "role": Role.TRAINER.value},
        )
        raise PermissionDeniedError("El entrenador se encuentra inactivo.")

    user_id = str(row["id"])
    logger.info("Trainer logged in", extra={"user_id": user_id, "role": Role.TRAINER.value})
    return ServiceResult(
        message="Inicio de sesión exitoso.",
        data=_token_payload(
            user_id, row["correo"], Role.TRAINER,
            nombres=row.get("nombres"), apellidos=row.get("apellidos"),
        ),
    )
