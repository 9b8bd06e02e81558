"""API test fixtures — ASGI client with the DB dependency overridden and role tokens.

Invariants:
    - get_db yields a stand-in session; repositories are monkeypatched per test
    - raise_app_exceptions=False so the catch-all 500 handler's response is observable
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from httpx import ASGITransport, AsyncClient

from cognicare.core.domain_types import Role
from cognicare.infrastructure.database import get_db
from cognicare.infrastructure.security import create_access_token
from cognicare.main import app

TRAINER_ID = str(uuid4())


@pytest.fixture
async def client():
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        yield AsyncMock(name="AsyncSession")

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def trainer_id() -> str:
    return TRAINER_ID


@pytest.fixture
def admin_headers() -> dict:
    token = create_access_token("admin", "admin@cognicare.test", Role.ADMIN)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def trainer_headers() -> dict:
    token = create_access_token(TRAINER_ID, "ana@uni.edu.co", Role.TRAINER)
    return {"Authorization": f"Bearer {token}"}
