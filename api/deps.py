"""
FastAPI dependency providers.

The service config is read from the environment once. ``create_app`` may
override ``get_service_config`` with its own config; the engine and store
follow whichever config the app resolves, one of each per database URL.
Tests replace ``get_elevator_store`` through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.engine import Engine

from core.config import ServiceConfig
from db.elevator_store import ElevatorStateStore
from db.session import create_engine_from_config

_service_config: ServiceConfig | None = None


def get_service_config() -> ServiceConfig:
    """Return the ``ServiceConfig`` singleton read from the environment."""
    global _service_config  # noqa: PLW0603
    if _service_config is None:
        _service_config = ServiceConfig.from_env()
    return _service_config


_engines: dict[str, Engine] = {}


def get_engine(config: Annotated[ServiceConfig, Depends(get_service_config)]) -> Engine:
    """Return the shared SQLAlchemy engine for ``config.database_url``.

    Its connection pool is shared by every request-handling thread.
    """
    engine = _engines.get(config.database_url)
    if engine is None:
        engine = _engines[config.database_url] = create_engine_from_config(config)
    return engine


_elevator_stores: dict[Engine, ElevatorStateStore] = {}


def get_elevator_store(engine: Annotated[Engine, Depends(get_engine)]) -> ElevatorStateStore:
    """Return the cached ElevatorStateStore for ``engine``.

    Created on first call; the ``elevator_conf`` table is created if it does
    not exist.
    """
    store = _elevator_stores.get(engine)
    if store is None:
        store = _elevator_stores[engine] = ElevatorStateStore(engine)
    return store
