"""
Tests for core.config module.

These tests verify ServiceConfig validation and environment parsing.
"""

import pytest

from core.config import DEFAULT_CONFIG, DEFAULT_CORS_ORIGINS, ServiceConfig


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's .env file out of environment parsing tests."""
    monkeypatch.setattr("core.config.load_dotenv", lambda: False)
    for var in (
        "DATABASE_URL",
        "DB_POOL_SIZE",
        "DB_MAX_OVERFLOW",
        "API_PREFIX",
        "CORS_ORIGINS",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)


class TestServiceConfigValidation:
    """Test ServiceConfig parameter validation."""

    def test_default_values(self) -> None:
        config = ServiceConfig()
        assert config.database_url == "sqlite:///data/elevator.db"
        assert config.pool_size == 5
        assert config.max_overflow == 10
        assert config.api_prefix == ""
        assert config.cors_origins == DEFAULT_CORS_ORIGINS
        assert config.log_level == "INFO"

    def test_empty_database_url_raises(self) -> None:
        with pytest.raises(ValueError, match="database_url must not be empty"):
            ServiceConfig(database_url="  ")

    def test_zero_pool_size_raises(self) -> None:
        with pytest.raises(ValueError, match="pool_size must be positive"):
            ServiceConfig(pool_size=0)

    def test_negative_overflow_raises(self) -> None:
        with pytest.raises(ValueError, match="max_overflow must be non-negative"):
            ServiceConfig(max_overflow=-1)

    @pytest.mark.parametrize("prefix", ["api", "/api/", "api/"])
    def test_malformed_prefix_raises(self, prefix: str) -> None:
        with pytest.raises(ValueError, match="api_prefix"):
            ServiceConfig(api_prefix=prefix)

    def test_nested_prefix_is_valid(self) -> None:
        assert ServiceConfig(api_prefix="/api/v1").api_prefix == "/api/v1"

    def test_unknown_log_level_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown log_level"):
            ServiceConfig(log_level="VERBOSE")

    def test_is_sqlite(self) -> None:
        assert ServiceConfig().is_sqlite is True
        assert ServiceConfig(database_url="postgresql+psycopg://u:p@db/x").is_sqlite is False


class TestServiceConfigImmutability:
    """Test that ServiceConfig is frozen."""

    def test_cannot_modify(self) -> None:
        with pytest.raises(AttributeError):
            DEFAULT_CONFIG.pool_size = 20  # type: ignore[misc]


class TestFromEnv:
    def test_defaults_when_unset(self) -> None:
        assert ServiceConfig.from_env() == ServiceConfig()

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DATABASE_URL", "postgresql+psycopg://ia:ia@localhost:5432/lifts")
        monkeypatch.setenv("DB_POOL_SIZE", "2")
        monkeypatch.setenv("DB_MAX_OVERFLOW", "0")
        monkeypatch.setenv("API_PREFIX", "/api")
        monkeypatch.setenv("LOG_LEVEL", "debug")
        config = ServiceConfig.from_env()
        assert config.database_url.endswith("/lifts")
        assert config.pool_size == 2
        assert config.max_overflow == 0
        assert config.api_prefix == "/api"
        assert config.log_level == "DEBUG"

    def test_cors_origins_split_on_commas(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
        assert ServiceConfig.from_env().cors_origins == ("http://a.test", "http://b.test")

    def test_invalid_environment_raises(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("DB_POOL_SIZE", "-3")
        with pytest.raises(ValueError, match="pool_size"):
            ServiceConfig.from_env()
