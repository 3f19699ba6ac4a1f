"""Storage layer for Line-O-Matic."""

from lineomatic.storage.database import Database, get_db, reset_db
from lineomatic.storage.repositories import (
    LineRepository,
    SectionRepository,
    StationRepository,
)

__all__ = [
    "Database",
    "get_db",
    "reset_db",
    "StationRepository",
    "LineRepository",
    "SectionRepository",
]
