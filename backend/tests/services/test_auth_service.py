"""Auth Service — verifies admin and trainer login.

Invariants:
    - Wrong email and wrong secret produce the same 401 message
    - A trainer past their end date gets 403
    - Issued tokens decode back to the logged-in identity
"""

from datetime import date, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from cognicare.core.domain_types import Role
from cognicare.core.errors import AuthenticationError, PermissionDeniedError
from cognicare.infrastructure.security import decode_access_token
from cognicare.repositories import trainer_repository
from cognicare.schemas.auth import AdminLogin, TrainerLogin
from cognicare.services import auth_service

TRAINER_ID = uuid4()


def _trainer_row(**overrides) -> dict:
    row = {
        "id": TRAINER_ID, "nombres": "Ana", "apellidos": "Gómez",
        "correo": "ana@uni.edu.co", "numerodocumento": "1020304050",
        "fechafin": date.today() + timedelta(days=30),
    }
    row.update(overrides)
    return row


async def test_admin_login_issues_admin_token(admin_credentials):
    result = await auth_service.login_admin(AdminLogin(
        correo=admin_credentials["correo"].upper(), password=admin_credentials["password"],
    ))

    body = result.to_body()
    assert body["tokenType"] == "Bearer"
    assert body["usuario"]["rol"] == "admin"
    assert decode_access_token(body["token"]).role is Role.ADMIN


@pytest.mark.parametrize("correo,password", [
    (None, "incorrecta"),
    ("otro@cognicare.test", None),
    ("señor@cognicare.test", None),
])
async def test_admin_login_rejected(admin_credentials, correo, password):
    login = AdminLogin(
        correo=correo or admin_credentials["correo"],
        password=password or admin_credentials["password"],
    )
    with pytest.raises(AuthenticationError) as exc_info:
        await auth_service.login_admin(login)
    assert exc_info.value.message == "Credenciales inválidas."


async def test_trainer_login(db, monkeypatch):
    monkeypatch.setattr(trainer_repository, "find_for_login", AsyncMock(return_value=_trainer_row()))

    body = (await auth_service.login_trainer(
        db, TrainerLogin(correo="ana@uni.edu.co", numero_documento="1020304050"),
    )).to_body()

    user = decode_access_token(body["token"])
    assert user.id == str(TRAINER_ID)
    assert user.role is Role.TRAINER
    assert body["usuario"]["nombres"] == "Ana"


async def test_trainer_login_wrong_document(db, monkeypatch):
    monkeypatch.setattr(trainer_repository, "find_for_login", AsyncMock(return_value=_trainer_row()))

    with pytest.raises(AuthenticationError):
        await auth_service.login_trainer(
            db, TrainerLogin(correo="ana@uni.edu.co", numero_documento="999"),
        )


async def test_trainer_login_unknown_email(db, monkeypatch):
    monkeypatch.setattr(trainer_repository, "find_for_login", AsyncMock(return_value=None))

    with pytest.raises(AuthenticationError):
        await auth_service.login_trainer(
            db, TrainerLogin(correo="nadie@uni.edu.co", numero_documento="1"),
        )


async def test_inactive_trainer_forbidden(db, monkeypatch):
    monkeypatch.setattr(trainer_repository, "find_for_login", AsyncMock(
        return_value=_trainer_row(fechafin=date.today() - timedelta(days=1)),
    ))

    with pytest.raises(PermissionDeniedError):
        await auth_service.login_trainer(
            db, TrainerLogin(correo="ana@uni.edu.co", numero_documento="1020304050"),
        )
