"""
SQLAlchemy schema for the elevator state store.

The table is declared explicitly with SQLAlchemy Core; mapping between rows
and ``ElevatorState`` lives in ``db.elevator_store``.
"""

from sqlalchemy import Column, Integer, MetaData, String, Table, Text

ELEVATOR_NAME_MAX_LENGTH = 128

# Signed 64-bit range of INTEGER / BIGINT keys; no row can have an id outside it.
ID_MIN = -(2**63)
ID_MAX = 2**63 - 1

metadata = MetaData()

elevator_conf = Table(
    "elevator_conf",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("elevator", String(ELEVATOR_NAME_MAX_LENGTH), nullable=False, unique=True),
    Column("door", String(16), nullable=False),
    Column("person", Integer, nullable=False),
    Column("sensors", Text, nullable=True),
    Column("hallcall", Text, nullable=True),
    Column("carcall", Text, nullable=True),
    # AUTOINCREMENT keeps SQLite from handing out the id of a deleted row again.
    sqlite_autoincrement=True,
)
