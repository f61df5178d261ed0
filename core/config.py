"""
Configuration dataclass for the elevator state service.

The immutable config object decouples environment parsing from the code that
builds engines and apps, so tests can construct one directly without touching
``os.environ``.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///data/elevator.db"

# Dashboard dev servers. Browsers treat localhost and 127.0.0.1 as different origins.
DEFAULT_CORS_ORIGINS: tuple[str, ...] = (
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
)

VALID_LOG_LEVELS: frozenset[str] = frozenset(
    {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
)


@dataclass(frozen=True)
class ServiceConfig:
    """
    Runtime configuration for the elevator state service.

    Attributes:
        database_url: SQLAlchemy connection URL. Defaults to a local SQLite
            file under ``data/``.
        pool_size: Persistent connections in the pool. Ignored for SQLite.
        max_overflow: Extra connections allowed above ``pool_size`` under
            burst load. Ignored for SQLite.
        api_prefix: Path prefix for every route, e.g. ``/api``. Empty by default.
        cors_origins: Origins allowed to call the API from a browser.
        log_level: Root logging level name.

    Example:
        >>> config = ServiceConfig(database_url="sqlite://", api_prefix="/api")
    """

    database_url: str = DEFAULT_DATABASE_URL
    pool_size: int = 5
    max_overflow: int = 10
    api_prefix: str = ""
    cors_origins: tuple[str, ...] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"

    def __post_init__(self) -> None:
        """Validate configuration parameters."""
        if not self.database_url.strip():
            raise ValueError("database_url must not be empty")
        if self.pool_size <= 0:
            raise ValueError(f"pool_size must be positive, got {self.pool_size}")
        if self.max_overflow < 0:
            raise ValueError(f"max_overflow must be non-negative, got {self.max_overflow}")
        if self.api_prefix and (
            not self.api_prefix.startswith("/") or self.api_prefix.endswith("/")
        ):
            raise ValueError(
                f"api_prefix must start with '/' and not end with '/', got {self.api_prefix!r}"
            )
        if self.log_level not in VALID_LOG_LEVELS:
            raise ValueError(
                f"Unknown log_level {self.log_level!r}, "
                f"valid options: {sorted(VALID_LOG_LEVELS)}"
            )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @classmethod
    def from_env(cls) -> ServiceConfig:
        """Build a config from environment variables (and ``.env`` if present)."""
        load_dotenv()
        origins = os.getenv("CORS_ORIGINS")
        return cls(
            database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
            pool_size=int(os.getenv("DB_POOL_SIZE", "5")),
            max_overflow=int(os.getenv("DB_MAX_OVERFLOW", "10")),
            api_prefix=os.getenv("API_PREFIX", ""),
            cors_origins=(
                tuple(o.strip() for o in origins.split(",") if o.strip())
                if origins is not None
                else DEFAULT_CORS_ORIGINS
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def configure_logging(self) -> None:
        """Apply ``log_level`` to the root logger."""
        logging.basicConfig(
            level=self.log_level,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


DEFAULT_CONFIG = ServiceConfig()
"""Default configuration: local SQLite file, no prefix, dev-server CORS origins."""
