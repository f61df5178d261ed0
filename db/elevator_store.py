"""SQLAlchemy-backed store for elevator state records.

The store is constructed with an explicit ``Engine``. Every operation opens
its own ``engine.begin()`` block, so a connection is held only for the
duration of one call, the write commits before the call returns, and the
transaction rolls back and releases the connection on any error.

Schema (``db.models.elevator_conf``, auto-created on first use):
    elevator_conf(
        id        INTEGER PK AUTOINCREMENT,
        elevator  VARCHAR(128) UNIQUE NOT NULL,
        door      VARCHAR(16) NOT NULL,   -- DoorStatus value
        person    INTEGER NOT NULL,
        sensors   TEXT,                   -- opaque payload
        hallcall  TEXT,                   -- opaque payload
        carcall   TEXT                    -- opaque payload
    )
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any

from sqlalchemy import delete, insert, select, update
from sqlalchemy.engine import Engine, Row
from sqlalchemy.exc import IntegrityError

from core.elevator.errors import (
    DuplicateElevatorNameError,
    ElevatorNotFoundError,
    InvalidElevatorStateError,
)
from core.elevator.types import DoorStatus, ElevatorState
from db.models import ELEVATOR_NAME_MAX_LENGTH, ID_MAX, ID_MIN, elevator_conf, metadata

logger = logging.getLogger(__name__)


def _validate(state: ElevatorState) -> ElevatorState:
    """Check field invariants and normalize ``door_status`` to ``DoorStatus``.

    Raises:
        InvalidElevatorStateError: If any field is out of range or mistyped.
    """
    if not isinstance(state.elevator_name, str) or not state.elevator_name.strip():
        raise InvalidElevatorStateError("elevator_name must be a non-empty string")
    if len(state.elevator_name) > ELEVATOR_NAME_MAX_LENGTH:
        raise InvalidElevatorStateError(
            f"elevator_name must be <= {ELEVATOR_NAME_MAX_LENGTH} characters, "
            f"got {len(state.elevator_name)}"
        )
    try:
        door = DoorStatus(state.door_status)
    except ValueError as exc:
        allowed = [d.value for d in DoorStatus]
        raise InvalidElevatorStateError(
            f"door_status must be one of {allowed}, got {state.door_status!r}"
        ) from exc
    # bool is an int subclass; True is not an occupant count
    if isinstance(state.person_count, bool) or not isinstance(state.person_count, int):
        raise InvalidElevatorStateError(
            f"person_count must be an integer, got {state.person_count!r}"
        )
    if state.person_count < 0:
        raise InvalidElevatorStateError(
            f"person_count must be non-negative, got {state.person_count}"
        )
    for field_name in ("sensor_data", "hall_calls", "car_calls"):
        value = getattr(state, field_name)
        if value is not None and not isinstance(value, str):
            raise InvalidElevatorStateError(
                f"{field_name} must be serialized text or None, got {type(value).__name__}"
            )
    return dataclasses.replace(state, door_status=door)


def _storable_id(state_id: int) -> bool:
    """Whether ``state_id`` fits the key column. Drivers raise OverflowError otherwise."""
    return ID_MIN <= state_id <= ID_MAX


def _state_to_values(state: ElevatorState) -> dict[str, Any]:
    """Map an ElevatorState to column values. The id is never written."""
    return {
        "elevator": state.elevator_name,
        "door": DoorStatus(state.door_status).value,
        "person": state.person_count,
        "sensors": state.sensor_data,
        "hallcall": state.hall_calls,
        "carcall": state.car_calls,
    }


def _row_to_state(row: Row) -> ElevatorState:
    """Convert an ``elevator_conf`` row to an ElevatorState."""
    return ElevatorState(
        id=row.id,
        elevator_name=row.elevator,
        door_status=DoorStatus(row.door),
        person_count=row.person,
        sensor_data=row.sensors,
        hall_calls=row.hallcall,
        car_calls=row.carcall,
    )


class ElevatorStateStore:
    """Persistent store for ElevatorState records.

    Thread-safety: holds no mutable state besides the engine, whose pool
    hands each call its own connection. Concurrent updates to the same id
    are last-writer-wins.

    Args:
        engine: SQLAlchemy engine for the backing database.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self.ensure_schema()

    @property
    def engine(self) -> Engine:
        return self._engine

    def ensure_schema(self) -> None:
        """Create the ``elevator_conf`` table if it does not exist."""
        metadata.create_all(bind=self._engine, tables=[elevator_conf])

    # ------------------------------------------------------------------ #
    # Writes                                                               #
    # ------------------------------------------------------------------ #

    def create(self, state: ElevatorState) -> ElevatorState:
        """Persist a new record and return it with its assigned id.

        Any id carried by ``state`` is ignored.

        Raises:
            InvalidElevatorStateError: If a field invariant is violated.
            DuplicateElevatorNameError: If the name is already in use.
        """
        state = _validate(state)
        try:
            with self._engine.begin() as conn:
                result = conn.execute(insert(elevator_conf).values(**_state_to_values(state)))
                new_id = result.inserted_primary_key[0]
        except IntegrityError as exc:
            logger.warning("Rejected create: elevator name %r already exists", state.elevator_name)
            raise DuplicateElevatorNameError(state.elevator_name) from exc
        logger.info("Created elevator state id=%s name=%r", new_id, state.elevator_name)
        return state.with_id(new_id)

    def update(self, state_id: int, state: ElevatorState) -> ElevatorState:
        """Replace every field of the record at ``state_id``.

        Args:
            state_id: Id of the record to overwrite. Wins over ``state.id``.
            state: New field values.

        Returns:
            The stored record, carrying ``state_id``.

        Raises:
            InvalidElevatorStateError: If a field invariant is violated.
            ElevatorNotFoundError: If no record has ``state_id``.
            DuplicateElevatorNameError: If another record already has the name.
        """
        state = _validate(state)
        if not _storable_id(state_id):
            raise ElevatorNotFoundError(state_id)
        try:
            with self._engine.begin() as conn:
                result = conn.execute(
                    update(elevator_conf)
                    .where(elevator_conf.c.id == state_id)
                    .values(**_state_to_values(state))
                )
                if result.rowcount == 0:
                    raise ElevatorNotFoundError(state_id)
        except IntegrityError as exc:
            logger.warning(
                "Rejected update of id=%s: elevator name %r belongs to another record",
                state_id,
                state.elevator_name,
            )
            raise DuplicateElevatorNameError(state.elevator_name) from exc
        logger.info("Updated elevator state id=%s", state_id)
        return state.with_id(state_id)

    def delete(self, state_id: int) -> bool:
        """Delete a record permanently.

        Deleting a missing id is not an error.

        Returns:
            True if a record was deleted, False if none existed.
        """
        if not _storable_id(state_id):
            return False
        with self._engine.begin() as conn:
            result = conn.execute(delete(elevator_conf).where(elevator_conf.c.id == state_id))
            deleted = result.rowcount > 0
        if deleted:
            logger.info("Deleted elevator state id=%s", state_id)
        return deleted

    # ------------------------------------------------------------------ #
    # Reads                                                                #
    # ------------------------------------------------------------------ #

    def get(self, state_id: int) -> ElevatorState:
        """Fetch a record by id.

        Raises:
            ElevatorNotFoundError: If no record has ``state_id``.
        """
        if not _storable_id(state_id):
            raise ElevatorNotFoundError(state_id)
        with self._engine.connect() as conn:
            row = conn.execute(
                select(elevator_conf).where(elevator_conf.c.id == state_id)
            ).first()
        if row is None:
            raise ElevatorNotFoundError(state_id)
        return _row_to_state(row)

    def get_by_name(self, elevator_name: str) -> ElevatorState:
        """Fetch the record with ``elevator_name``. Names are unique.

        Raises:
            ElevatorNotFoundError: If no record has that name.
        """
        with self._engine.connect() as conn:
            row = conn.execute(
                select(elevator_conf).where(elevator_conf.c.elevator == elevator_name)
            ).first()
        if row is None:
            raise ElevatorNotFoundError(elevator_name)
        return _row_to_state(row)

    def list_all(self) -> list[ElevatorState]:
        """Return every record in insertion (id) order."""
        with self._engine.connect() as conn:
            rows = conn.execute(select(elevator_conf).order_by(elevator_conf.c.id)).all()
        return [_row_to_state(r) for r in rows]
