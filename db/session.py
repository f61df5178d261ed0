"""
SQLAlchemy engine factory.

The engine is the storage handle the elevator state store is constructed
with. Nothing here is created at import time; callers build an engine from a
``ServiceConfig`` and pass it on explicitly.

Environment variables (read through ``ServiceConfig.from_env``)
---------------------------------------------------------------
``DATABASE_URL``
    Full SQLAlchemy connection URL.  Default: ``sqlite:///data/elevator.db``

``DB_POOL_SIZE``
    Number of persistent connections in the pool (default ``5``).

``DB_MAX_OVERFLOW``
    Extra connections allowed above ``pool_size`` under burst
    load (default ``10``).
"""

from pathlib import Path

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url

from core.config import ServiceConfig


def create_engine_from_config(config: ServiceConfig) -> Engine:
    """Create an engine for ``config.database_url``.

    SQLite engines are shared across FastAPI's worker threads, so
    ``check_same_thread`` is disabled and the parent directory of a file
    database is created. Pool sizing applies to server databases only.
    """
    if config.is_sqlite:
        url = make_url(config.database_url)
        if url.database and url.database != ":memory:":
            Path(url.database).parent.mkdir(parents=True, exist_ok=True)
        return create_engine(
            config.database_url,
            connect_args={"check_same_thread": False},
        )
    return create_engine(
        config.database_url,
        pool_pre_ping=True,
        pool_size=config.pool_size,
        max_overflow=config.max_overflow,
    )
