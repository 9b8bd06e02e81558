"""Token & Password Security — JWT issue/verify (PyJWT) and bcrypt hash checks.

Invariants:
    - Tokens are HS256-signed and always carry sub, email, role, iat, exp
    - decode_access_token() raises AuthenticationError for every failure mode
      (expired, bad signature, malformed, unknown role)
    - Password checks never raise on a malformed hash; they return False

Design Decisions:
    - Claims kept minimal: the trainer id in `sub` is all the handlers need
"""

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from cognicare.config import get_settings
from cognicare.core.domain_types import Role
from cognicare.core.errors import AuthenticationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AuthenticatedUser:
    """Identity extracted from a verified token."""
    id: str
    email: str
    role: Role


def create_access_token(
    user_id: str, email: str, role: Role, expires_minutes: int | None = None,
) -> str:
    settings = get_settings()
    now = datetime.now(timezone.utc)
    minutes = expires_minutes if expires_minutes is not None else settings.jwt_expiration_minutes
    payload = {
        "sub": str(user_id),
        "email": email,
        "role": role.value,
        "iat": now,
        "exp": now + timedelta(minutes=minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> AuthenticatedUser:
    settings = get_settings()
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError:
        raise AuthenticationError("Token expirado.")
    except jwt.InvalidTokenError as e:
        logger.warning(f"Rejected token: {e}")
        raise AuthenticationError("Token inválido.")
    try:
        role = Role(payload.get("role"))
    except ValueError:
        raise AuthenticationError("Token inválido.")
    return AuthenticatedUser(
        id=payload["sub"], email=payload.get("email", ""), role=role,
    )


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password or not password_hash:
        return False
    try:
        return bcrypt.checkpw(
            password.encode("utf-8"), password_hash.encode("utf-8"),
        )
    except ValueError:
        logger.error("Configured password hash is not a valid bcrypt hash")
        return False
