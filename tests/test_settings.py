"""Tests for settings, logging configuration and the database manager."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from neo_role_manager.config import LoggingConfig, RoleManagerSettings, get_settings
from neo_role_manager.database import DatabaseManager


class TestRoleManagerSettings:
    """Test environment-driven settings."""

    def test_defaults(self):
        settings = RoleManagerSettings()

        assert settings.db_schema == "admin"
        assert settings.api_prefix == "/role-manager"
        assert settings.catalog_cache_enabled is True
        assert not settings.is_production

    def test_env_prefix(self, monkeypatch):
        monkeypatch.setenv("ROLE_MANAGER_DB_SCHEMA", "tenant_admin")
        monkeypatch.setenv("ROLE_MANAGER_CATALOG_CACHE_ENABLED", "false")
        monkeypatch.setenv("ROLE_MANAGER_ENVIRONMENT", "production")

        settings = RoleManagerSettings()

        assert settings.db_schema == "tenant_admin"
        assert settings.catalog_cache_enabled is False
        assert settings.is_production

    @pytest.mark.parametrize("schema", ["admin; DROP TABLE roles", "1admin", "admin.roles"])
    def test_invalid_schema_rejected(self, schema):
        with pytest.raises(PydanticValidationError):
            RoleManagerSettings(db_schema=schema)

    def test_api_prefix_trailing_slash_stripped(self):
        assert RoleManagerSettings(api_prefix="/admin/roles/").api_prefix == "/admin/roles"

    @pytest.mark.parametrize("prefix", ["roles", "/"])
    def test_invalid_api_prefix(self, prefix):
        with pytest.raises(PydanticValidationError):
            RoleManagerSettings(api_prefix=prefix)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        assert get_settings() is get_settings()
        get_settings.cache_clear()


class TestLoggingConfig:

    def test_log_level_overrides_verbosity(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_VERBOSITY", "QUIET")

        config = LoggingConfig.build_config()

        assert config["root"]["level"] == "DEBUG"
        assert config["loggers"]["neo_role_manager.database"]["level"] == "DEBUG"

    def test_verbosity_mapping(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("LOG_VERBOSITY", "VERBOSE")

        assert LoggingConfig.build_config()["root"]["level"] == "INFO"

    def test_sql_logging_toggle(self, monkeypatch):
        monkeypatch.setenv("ENABLE_SQL_LOGGING", "false")
        assert "asyncpg" in LoggingConfig.build_config()["loggers"]

        monkeypatch.setenv("ENABLE_SQL_LOGGING", "true")
        assert "asyncpg" not in LoggingConfig.build_config()["loggers"]

    def test_unknown_values_fall_back_to_defaults(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.setenv("LOG_VERBOSITY", "chatty")
        monkeypatch.setenv("LOG_FORMAT", "xml")

        config = LoggingConfig.from_env()

        assert config.level == "WARNING"
        assert config.log_format == "simple"

    def test_json_format(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "json")
        fmt = LoggingConfig.build_config()["formatters"]["default"]["format"]
        assert fmt.startswith("{")


class TestDatabaseManager:

    def test_from_settings(self):
        settings = RoleManagerSettings(
            database_url="postgresql+asyncpg://user:pw@db:5432/roles",
            db_pool_min_size=2,
            db_pool_max_size=5
        )

        database = DatabaseManager.from_settings(settings)

        assert database.dsn == "postgresql://user:pw@db:5432/roles"
        assert database.pool_config["min_size"] == 2
        assert database.pool_config["max_size"] == 5
        assert database.pool is None
