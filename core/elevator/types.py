"""Elevator state types: pure value objects.

These are the data contracts shared by the store and the HTTP layer.
No I/O, no validation, no imports from db/ or api/.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import Enum


class DoorStatus(str, Enum):
    """Door state of an elevator car.

    Carried as data only; no transition order is enforced.
    """

    OPEN = "OPEN"
    CLOSED = "CLOSED"
    OPENING = "OPENING"
    CLOSING = "CLOSING"


@dataclass(frozen=True)
class ElevatorState:
    """Operational state of one physical elevator.

    Attributes:
        elevator_name: Caller-assigned name, unique across records.
        door_status: One of OPEN | CLOSED | OPENING | CLOSING.
        person_count: Number of occupants in the car.
        sensor_data: Opaque serialized sensor readings (usually JSON text).
        hall_calls: Opaque serialized hall-call buttons (per floor, per direction).
        car_calls: Opaque serialized car-call buttons (per floor).
        id: Store-assigned surrogate key. ``None`` until persisted.
    """

    elevator_name: str
    door_status: DoorStatus
    person_count: int
    sensor_data: str | None = None
    hall_calls: str | None = None
    car_calls: str | None = None
    id: int | None = None

    def with_id(self, state_id: int | None) -> ElevatorState:
        """Return a copy of this state carrying ``state_id``."""
        return dataclasses.replace(self, id=state_id)
