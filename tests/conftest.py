"""
Shared fixtures for the test suite.

Centralizes reusable test infrastructure so individual test files
don't need to repeat engine/store/override boilerplate.
"""

from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.engine import Engine

from api.deps import get_elevator_store
from api.main import app
from core.config import ServiceConfig
from db.elevator_store import ElevatorStateStore
from db.session import create_engine_from_config

# ---------------------------------------------------------------------------
# Storage fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def engine(tmp_path: Path) -> Iterator[Engine]:
    """SQLite engine backed by a per-test database file."""
    config = ServiceConfig(database_url=f"sqlite:///{tmp_path / 'elevator.db'}")
    eng = create_engine_from_config(config)
    yield eng
    eng.dispose()


@pytest.fixture()
def store(engine: Engine) -> ElevatorStateStore:
    return ElevatorStateStore(engine)


# ---------------------------------------------------------------------------
# FastAPI test client fixture
# ---------------------------------------------------------------------------


@pytest.fixture()
def api_client(store: ElevatorStateStore) -> Iterator[TestClient]:
    """FastAPI ``TestClient`` with the store overridden by the per-test store."""
    app.dependency_overrides[get_elevator_store] = lambda: store
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
