"""Configuration — verifies environment-driven defaults."""

from cognicare.config import Settings


def test_environment_defaults_to_production(monkeypatch):
    monkeypatch.delenv("ENVIRONMENT", raising=False)

    settings = Settings(_env_file=None)

    assert settings.environment == "production"
    assert settings.is_development is False


def test_development_enabled_explicitly(monkeypatch):
    monkeypatch.setenv("ENVIRONMENT", "Development")

    assert Settings(_env_file=None).is_development is True


def test_plain_postgres_url_uses_asyncpg(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://u:p@db:5432/cognicare")

    assert Settings(_env_file=None).database_url == "postgresql+asyncpg://u:p@db:5432/cognicare"
