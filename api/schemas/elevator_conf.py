"""Pydantic schemas for /elevator-conf endpoints.

JSON uses the dashboard's camelCase field names; snake_case names are
accepted on input as well.
"""

from __future__ import annotations

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from core.elevator.types import DoorStatus


class ElevatorStateRequest(BaseModel):
    """Full elevator state submitted on create and update.

    ``id`` is accepted for compatibility with clients that echo a stored
    record back, but is never used: the store or the path decides it.
    The older column-style names (``elevator``, ``door``, ``person``) are
    accepted too. Counts and names are strict: ``true`` or ``2.0`` is not a
    person count.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: int | None = None
    elevator_name: str = Field(
        ...,
        alias="elevatorName",
        validation_alias=AliasChoices("elevatorName", "elevator_name", "elevator"),
        min_length=1,
        max_length=128,
        strict=True,
    )
    door_status: DoorStatus = Field(
        ...,
        alias="doorStatus",
        validation_alias=AliasChoices("doorStatus", "door_status", "door"),
    )
    person_count: int = Field(
        ...,
        alias="personCount",
        validation_alias=AliasChoices("personCount", "person_count", "person"),
        ge=0,
        strict=True,
    )
    sensor_data: str | None = Field(
        default=None,
        alias="sensors",
        validation_alias=AliasChoices("sensors", "sensor_data"),
    )
    hall_calls: str | None = Field(
        default=None,
        alias="hallcall",
        validation_alias=AliasChoices("hallcall", "hall_calls"),
    )
    car_calls: str | None = Field(
        default=None,
        alias="carcall",
        validation_alias=AliasChoices("carcall", "car_calls"),
    )


class ElevatorStateResponse(BaseModel):
    """Serialized stored ElevatorState for API responses."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    elevator_name: str = Field(..., alias="elevatorName")
    door_status: DoorStatus = Field(..., alias="doorStatus")
    person_count: int = Field(..., alias="personCount")
    sensor_data: str | None = Field(default=None, alias="sensors")
    hall_calls: str | None = Field(default=None, alias="hallcall")
    car_calls: str | None = Field(default=None, alias="carcall")
