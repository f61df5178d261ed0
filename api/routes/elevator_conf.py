"""REST endpoints for elevator state records."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_elevator_store
from api.schemas.elevator_conf import ElevatorStateRequest, ElevatorStateResponse
from core.elevator.errors import (
    DuplicateElevatorNameError,
    ElevatorNotFoundError,
    InvalidElevatorStateError,
)
from core.elevator.types import ElevatorState
from db.elevator_store import ElevatorStateStore
from infrastructure.metrics import LatencyTimer, record_store_operation

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/elevator-conf", tags=["elevator-conf"])

Store = Annotated[ElevatorStateStore, Depends(get_elevator_store)]


@contextmanager
def _store_call(operation: str) -> Iterator[None]:
    """Time a store call, record its outcome, and map store errors to HTTP.

    Anything that is not a store error (e.g. a lost DB connection) propagates
    unchanged and is answered by the app-level storage error handler.
    """
    outcome = "error"
    timer = LatencyTimer()
    try:
        with timer:
            yield
        outcome = "ok"
    except ElevatorNotFoundError as exc:
        outcome = "not_found"
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except DuplicateElevatorNameError as exc:
        outcome = "conflict"
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    except InvalidElevatorStateError as exc:
        outcome = "invalid"
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    finally:
        record_store_operation(
            operation=operation, outcome=outcome, latency_seconds=timer.elapsed
        )


def _to_state(body: ElevatorStateRequest) -> ElevatorState:
    """Convert a request body to an ElevatorState without an id."""
    return ElevatorState(
        elevator_name=body.elevator_name,
        door_status=body.door_status,
        person_count=body.person_count,
        sensor_data=body.sensor_data,
        hall_calls=body.hall_calls,
        car_calls=body.car_calls,
    )


def _to_response(state: ElevatorState) -> ElevatorStateResponse:
    """Convert a stored ElevatorState to an ElevatorStateResponse."""
    return ElevatorStateResponse(
        id=state.id,
        elevator_name=state.elevator_name,
        door_status=state.door_status,
        person_count=state.person_count,
        sensor_data=state.sensor_data,
        hall_calls=state.hall_calls,
        car_calls=state.car_calls,
    )


@router.get("", response_model=list[ElevatorStateResponse])
def list_elevator_states(store: Store) -> list[ElevatorStateResponse]:
    """List every elevator state record."""
    with _store_call("list_all"):
        states = store.list_all()
    return [_to_response(s) for s in states]


# NOTE: elevator names may contain "/", so the name is a :path parameter.
# The route is declared before /{state_id} so it wins for "/elevator/..." paths.


@router.get("/elevator/{elevator_name:path}", response_model=ElevatorStateResponse)
def get_elevator_state_by_name(elevator_name: str, store: Store) -> ElevatorStateResponse:
    """Fetch the record for one elevator by its name."""
    with _store_call("get_by_name"):
        state = store.get_by_name(elevator_name)
    return _to_response(state)


@router.get("/{state_id}", response_model=ElevatorStateResponse)
def get_elevator_state(state_id: int, store: Store) -> ElevatorStateResponse:
    """Fetch a single record by id."""
    with _store_call("get"):
        state = store.get(state_id)
    return _to_response(state)


@router.post("", response_model=ElevatorStateResponse, status_code=201)
def create_elevator_state(body: ElevatorStateRequest, store: Store) -> ElevatorStateResponse:
    """Create a record. Any id in the body is ignored; the store assigns one."""
    if body.id is not None:
        logger.debug("Ignoring client-supplied id=%s on create", body.id)
    with _store_call("create"):
        created = store.create(_to_state(body))
    return _to_response(created)


@router.put("/{state_id}", response_model=ElevatorStateResponse)
def update_elevator_state(
    state_id: int,
    body: ElevatorStateRequest,
    store: Store,
) -> ElevatorStateResponse:
    """Replace the whole record at ``state_id``. The path id wins over the body."""
    with _store_call("update"):
        updated = store.update(state_id, _to_state(body))
    return _to_response(updated)


@router.delete("/{state_id}", status_code=204)
def delete_elevator_state(state_id: int, store: Store) -> None:
    """Delete a record. Deleting a missing id still succeeds."""
    with _store_call("delete"):
        deleted = store.delete(state_id)
    if not deleted:
        logger.debug("Delete of missing elevator state id=%s treated as success", state_id)
