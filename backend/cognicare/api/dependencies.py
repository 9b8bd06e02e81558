"""Auth Dependencies — bearer-token verification and role gates for routes.

Invariants:
    - Missing, malformed, expired or tampered tokens → AuthenticationError (401)
    - Valid token with the wrong role → PermissionDeniedError (403)
    - Role gates always run token verification first

Design Decisions:
    - HTTPBearer(auto_error=False): FastAPI's own 403 for a missing header is replaced by
      our 401 envelope
"""

import logging

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from cognicare.core.domain_types import Role
from cognicare.core.errors import AuthenticationError, PermissionDeniedError
from cognicare.infrastructure.security import AuthenticatedUser, decode_access_token

logger = logging.getLogger(__name__)

_bearer = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
) -> AuthenticatedUser:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Token no proporcionado.")
    return decode_access_token(credentials.credentials)


def _require_role(role: Role):
    async def check_role(
        user: AuthenticatedUser = Depends(get_current_user),
    ) -> AuthenticatedUser:
        if user.role != role:
            logger.warning(
                f"Role {user.role.value} denied on {role.value}-only route",
                extra={"user_id": user.id, "role": user.role.value},
            )
            raise PermissionDeniedError()
        return user
    return check_role


require_admin = _require_role(Role.ADMIN)
require_trainer = _require_role(Role.TRAINER)
