"""Service test fixtures — a stand-in session; repositories are patched per test.

Design Decisions:
    - Services only hand the session through to repositories, so an AsyncMock is
      enough; each test monkeypatches the repository functions it expects
"""

from unittest.mock import AsyncMock

import pytest


@pytest.fixture
def db():
    return AsyncMock(name="AsyncSession")
