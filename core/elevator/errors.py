"""Errors raised by the elevator state store."""

from __future__ import annotations


class ElevatorStoreError(Exception):
    """Base class for elevator state store failures."""


class ElevatorNotFoundError(ElevatorStoreError):
    """No record exists for the requested id or elevator name."""

    def __init__(self, key: int | str) -> None:
        self.key = key
        super().__init__(f"Elevator state not found: {key!r}")


class DuplicateElevatorNameError(ElevatorStoreError):
    """A write would give two records the same elevator name."""

    def __init__(self, elevator_name: str) -> None:
        self.elevator_name = elevator_name
        super().__init__(f"Elevator name already in use: {elevator_name!r}")


class InvalidElevatorStateError(ElevatorStoreError, ValueError):
    """Field values violate an ElevatorState invariant."""
