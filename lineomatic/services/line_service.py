"""Line service layer for business logic and validation."""

import logging
import uuid

from sqlalchemy.orm import Session

from lineomatic.exceptions import (
    DatabaseError,
    DuplicateError,
    IntegrityError,
    NotFoundError,
    ValidationError,
)
from lineomatic.models.line import Line
from lineomatic.models.section import Section
from lineomatic.models.station import Station
from lineomatic.services.section.editing import SectionEditor
from lineomatic.services.section.validation import LineValidator
from lineomatic.storage.repositories import LineRepository, StationRepository

logger = logging.getLogger(__name__)


class LineService:
    """Service layer for line CRUD and section chain operations."""

    def __init__(self, session: Session):
        """
        Initialize line service with database session.

        Args:
            session: SQLAlchemy database session
        """
        self.session = session
        self.line_repo = LineRepository(session)
        self.station_repo = StationRepository(session)
        self.validator = LineValidator()
        self.editor = SectionEditor(self.session, self.line_repo, self.station_repo)

    def create_line(
        self,
        name: str,
        color: str,
        up_station_id: str,
        down_station_id: str,
        distance: int,
        line_id: str | None = None,
    ) -> Line:
        """
        Create a new line with its first section.

        Args:
            name: Line name (required, unique)
            color: Line color (required)
            up_station_id: Station the first section starts at
            down_station_id: Station the first section ends at
            distance: Length of the first section
            line_id: Optional line ID. If not provided, generates a UUID.

        Returns:
            Created line

        Raises:
            ValidationError: If any argument is invalid
            NotFoundError: If a station is not found
            DuplicateError: If a line with the same ID or name exists
            DatabaseError: If database operation fails
        """
        self.validator.validate_name(name)
        self.validator.validate_color(color)
        self.validator.validate_section_stations(up_station_id, down_station_id)
        self.validator.validate_distance(distance)

        if line_id is None:
            line_id = str(uuid.uuid4())
        else:
            self.validator.validate_id(line_id)

        if self.line_repo.get_by_id(line_id) is not None:
            raise DuplicateError("Line", "id", line_id)
        if self.line_repo.get_by_name(name) is not None:
            raise DuplicateError("Line", "name", name)

        try:
            line = Line(id=line_id, name=name, color=color)
            line.add_section(
                Section(
                    id=str(uuid.uuid4()),
                    up_station=self._get_station(up_station_id),
                    down_station=self._get_station(down_station_id),
                    distance=distance,
                )
            )
            self.line_repo.create(line)
            self.session.commit()
            logger.info("Created line %s (%s)", line_id, name)
            return line

        except (DuplicateError, ValidationError, NotFoundError):
            raise
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to create line: {str(e)}", e) from e

    def get_line(self, line_id: str) -> Line:
        """
        Get line by ID with its sections loaded.

        Raises:
            ValidationError: If line_id is invalid
            NotFoundError: If line is not found
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(line_id)

        try:
            line = self.line_repo.get_by_id(line_id)
            if line is None:
                raise NotFoundError("Line", line_id)
            return line

        except NotFoundError:
            raise
        except Exception as e:
            raise DatabaseError(f"Failed to get line: {str(e)}", e) from e

    def list_lines(self, limit: int = 100, offset: int = 0) -> list[Line]:
        """
        List lines ordered by name.

        Raises:
            ValidationError: If limit or offset is negative
            DatabaseError: If database operation fails
        """
        self.validator.validate_pagination(limit, offset)

        try:
            return self.line_repo.list(limit=limit, offset=offset)
        except Exception as e:
            raise DatabaseError(f"Failed to list lines: {str(e)}", e) from e

    def update_line(
        self,
        line_id: str,
        name: str | None = None,
        color: str | None = None,
    ) -> Line:
        """
        Update line name and/or color.

        Raises:
            ValidationError: If line_id, name or color is invalid
            NotFoundError: If line is not found
            DuplicateError: If another line already has the new name
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(line_id)
        if name is not None:
            self.validator.validate_name(name)
        if color is not None:
            self.validator.validate_color(color)

        try:
            line = self.line_repo.get_by_id(line_id)
            if line is None:
                raise NotFoundError("Line", line_id)

            if name is not None and name != line.name:
                if self.line_repo.get_by_name(name) is not None:
                    raise DuplicateError("Line", "name", name)
                line.name = name
            if color is not None:
                line.color = color

            self.line_repo.update(line)
            self.session.commit()
            return line

        except (NotFoundError, DuplicateError, ValidationError):
            raise
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to update line: {str(e)}", e) from e

    def delete_line(self, line_id: str) -> bool:
        """
        Delete a line and all its sections.

        Returns:
            True if line was deleted, False if not found

        Raises:
            ValidationError: If line_id is invalid
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(line_id)

        try:
            deleted = self.line_repo.delete(line_id)
            if deleted:
                self.session.commit()
                logger.info("Deleted line %s", line_id)
            return deleted

        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to delete line: {str(e)}", e) from e

    def add_section(
        self,
        line_id: str,
        up_station_id: str,
        down_station_id: str,
        distance: int,
    ) -> Line:
        """
        Add a section to a line.

        The section either extends the line at one end or splits the existing
        section that shares its up or down station.

        Raises:
            ValidationError: If input is invalid or the section breaks a chain rule
            NotFoundError: If the line or a station is not found
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(line_id, "line_id")
        self.validator.validate_section_stations(up_station_id, down_station_id)
        self.validator.validate_distance(distance)

        return self.editor.add_section(line_id, up_station_id, down_station_id, distance)

    def remove_station(self, line_id: str, station_id: str) -> Line:
        """
        Remove a station from a line.

        Raises:
            ValidationError: If an ID is invalid or the line has a single section
            NotFoundError: If the line or station is not found or the station is not on the line
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(line_id, "line_id")
        self.validator.validate_id(station_id, "station_id")

        return self.editor.remove_station(line_id, station_id)

    def get_stations_in_order(self, line_id: str) -> list[Station]:
        """
        Get the stations of a line in travel order.

        Raises:
            ValidationError: If line_id is invalid
            NotFoundError: If line is not found
            IntegrityError: If the stored sections do not form a single path
        """
        line = self.get_line(line_id)
        try:
            return line.stations_in_order()
        except IntegrityError:
            logger.error("Section chain of line %s is broken", line_id)
            raise

    def _get_station(self, station_id: str) -> Station:
        station = self.station_repo.get_by_id(station_id)
        if station is None:
            raise NotFoundError("Station", station_id)
        return station
