"""Unit tests for application settings."""

from homestead.config import Settings


def test_frontend_url_in_development():
    settings = Settings(
        _env_file=None, environment="development", frontend_host="localhost"
    )

    assert settings.api.frontend_url == "http://localhost:3000"


def test_frontend_url_in_production():
    settings = Settings(
        _env_file=None, environment="production", frontend_host="homestead.example"
    )

    assert settings.api.frontend_url == "https://homestead.example"
    assert set(settings.api.model_dump()) == {
        "protocol",
        "frontend_host",
        "frontend_url",
    }


def test_nested_database_url(monkeypatch):
    monkeypatch.setenv("DATABASE__URL", "postgresql+asyncpg://app:secret@db:5432/homes")

    settings = Settings(_env_file=None)

    assert settings.database.url == "postgresql+asyncpg://app:secret@db:5432/homes"
