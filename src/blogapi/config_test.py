"""
Tests for Config.from_env().

Run with: pytest src/blogapi/config_test.py -v
"""
from pathlib import Path

from blogapi.config import Config

ENV_VARS = [
    "DATABASE_URL",
    "TEST_DATABASE_URL",
    "MIGRATIONS_PATH",
    "LOG_LEVEL",
    "SEED_COUNT",
]


def test_from_env_defaults(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)

    result = Config.from_env()

    assert result.database_url == "postgresql://localhost:5432/blog_api"
    assert result.test_database_url == "postgresql://localhost:5432/blog_api_test"
    assert result.migrations_path == Path("./migrations")
    assert result.log_level == "INFO"
    assert result.seed_count == 10


def test_from_env_overrides(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql://db/prod")
    monkeypatch.setenv("TEST_DATABASE_URL", "postgresql://db/test")
    monkeypatch.setenv("MIGRATIONS_PATH", "/srv/migrations")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("SEED_COUNT", "25")

    result = Config.from_env()

    assert result.database_url == "postgresql://db/prod"
    assert result.test_database_url == "postgresql://db/test"
    assert result.migrations_path == Path("/srv/migrations")
    assert result.log_level == "DEBUG"
    assert result.seed_count == 25


def test_test_database_differs_by_default(monkeypatch):
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.delenv("TEST_DATABASE_URL", raising=False)

    result = Config.from_env()

    assert result.database_url != result.test_database_url
