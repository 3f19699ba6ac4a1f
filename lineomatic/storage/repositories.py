"""Repository pattern implementation for data access layer."""

from __future__ import annotations

from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.orm import Session

from lineomatic.models.line import Line
from lineomatic.models.section import Section
from lineomatic.models.station import Station


class StationRepository:
    """Repository for station operations."""

    def __init__(self, session: Session):
        """Initialize repository with a database session."""
        self.session = session

    def create(self, station: Station) -> Station:
        """Create a new station."""
        self.session.add(station)
        self.session.flush()
        return station

    def get_by_id(self, station_id: str) -> Optional[Station]:
        """Get station by ID."""
        return self.session.get(Station, station_id)

    def get_by_name(self, name: str) -> Optional[Station]:
        """Get station by its unique name."""
        return self.session.scalar(select(Station).where(Station.name == name))

    def list(self, limit: int = 100, offset: int = 0) -> list[Station]:
        """List stations ordered by name."""
        stmt = select(Station).order_by(Station.name).limit(limit).offset(offset)
        return list(self.session.scalars(stmt))

    def count(self) -> int:
        """Count all stations."""
        return self.session.scalar(select(func.count(Station.id))) or 0

    def delete(self, station_id: str) -> bool:
        """Delete a station by ID."""
        station = self.get_by_id(station_id)
        if station:
            self.session.delete(station)
            return True
        return False


class LineRepository:
    """Repository for line operations. Sections are loaded with their line."""

    def __init__(self, session: Session):
        """Initialize repository with a database session."""
        self.session = session

    def create(self, line: Line) -> Line:
        """Create a new line together with its sections."""
        self.session.add(line)
        self.session.flush()
        return line

    def get_by_id(self, line_id: str) -> Optional[Line]:
        """Get line by ID."""
        return self.session.get(Line, line_id)

    def get_by_name(self, name: str) -> Optional[Line]:
        """Get line by its unique name."""
        return self.session.scalar(select(Line).where(Line.name == name))

    def list(self, limit: int = 100, offset: int = 0) -> list[Line]:
        """List lines ordered by name."""
        stmt = select(Line).order_by(Line.name).limit(limit).offset(offset)
        return list(self.session.scalars(stmt))

    def count(self) -> int:
        """Count all lines."""
        return self.session.scalar(select(func.count(Line.id))) or 0

    def update(self, line: Line) -> Line:
        """Flush pending changes of a line and its sections."""
        self.session.flush()
        return line

    def delete(self, line_id: str) -> bool:
        """Delete a line by ID. Its sections go with it."""
        line = self.get_by_id(line_id)
        if line:
            self.session.delete(line)
            return True
        return False


class SectionRepository:
    """Repository for read-only section queries.

    Sections are created and removed through their line's chain, never directly.
    """

    def __init__(self, session: Session):
        """Initialize repository with a database session."""
        self.session = session

    def get_by_line_id(self, line_id: str) -> list[Section]:
        """Get all sections of a line in storage order."""
        stmt = select(Section).where(Section.line_id == line_id)
        return list(self.session.scalars(stmt))

    def get_line_ids_by_station(self, station_id: str) -> list[str]:
        """Get IDs of the lines that pass through a station."""
        stmt = (
            select(Section.line_id)
            .where(
                or_(
                    Section.up_station_id == station_id,
                    Section.down_station_id == station_id,
                )
            )
            .distinct()
        )
        return list(self.session.scalars(stmt))
