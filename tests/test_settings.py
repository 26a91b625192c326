"""
Environment-driven configuration
"""

import importlib
from unittest.mock import patch

import pytest

from crud_backend.config.settings import Settings, load_settings


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "ENV", "PORT", "LOG_LEVEL", "STORE_BACKEND", "DATABASE_URL",
        "ENABLE_AUTH", "JWT_SECRET", "JWT_AUDIENCE", "JWT_ISSUER",
        "DB_POOL_MIN_SIZE", "DB_POOL_MAX_SIZE",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestLoadSettings:

    def test_defaults(self, clean_env):
        settings = load_settings()

        assert settings.store_backend == "memory"
        assert settings.port == 8080
        assert settings.enable_auth is False

    def test_postgres_from_env(self, clean_env):
        clean_env.setenv("STORE_BACKEND", "Postgres")
        clean_env.setenv("DATABASE_URL", "postgresql://localhost/crud")
        clean_env.setenv("PORT", "9000")

        settings = load_settings()

        assert settings.store_backend == "postgres"
        assert settings.database_url == "postgresql://localhost/crud"
        assert settings.port == 9000

    @pytest.mark.parametrize("value", ["true", "1", "YES"])
    def test_enable_auth_flag(self, clean_env, value):
        clean_env.setenv("ENABLE_AUTH", value)
        clean_env.setenv("JWT_SECRET", "x" * 32)

        assert load_settings().enable_auth is True

    def test_postgres_requires_database_url(self, clean_env):
        clean_env.setenv("STORE_BACKEND", "postgres")

        with pytest.raises(ValueError, match="DATABASE_URL"):
            load_settings()

    def test_auth_requires_secret(self, clean_env):
        clean_env.setenv("ENABLE_AUTH", "true")

        with pytest.raises(ValueError, match="JWT_SECRET"):
            load_settings()

    def test_unknown_backend(self, clean_env):
        clean_env.setenv("STORE_BACKEND", "redis")

        with pytest.raises(ValueError, match="STORE_BACKEND"):
            load_settings()


def test_pool_bounds_checked():
    with pytest.raises(ValueError):
        Settings(db_pool_min_size=5, db_pool_max_size=2).validate()


def test_log_level_configures_logging(clean_env):
    clean_env.setenv("LOG_LEVEL", "debug")
    settings = load_settings()
    entry_point = importlib.import_module("main")

    with patch("logging.basicConfig") as basic_config:
        entry_point.configure_logging(settings)

    basic_config.assert_called_once_with(level="DEBUG")
