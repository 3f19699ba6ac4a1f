"""Section chain editing: inserting and removing stations on a line."""

import logging
import uuid

from sqlalchemy.orm import Session

from lineomatic.exceptions import (
    DatabaseError,
    IntegrityError,
    NotFoundError,
    ValidationError,
)
from lineomatic.models.line import Line
from lineomatic.models.section import Section
from lineomatic.models.station import Station
from lineomatic.storage.repositories import LineRepository, StationRepository

logger = logging.getLogger(__name__)


class SectionEditor:
    """Applies chain mutations to persisted lines inside one transaction."""

    def __init__(
        self,
        session: Session,
        line_repo: LineRepository,
        station_repo: StationRepository,
    ):
        """
        Initialize editor with session and repositories.

        Args:
            session: SQLAlchemy database session
            line_repo: Line repository for data access
            station_repo: Station repository for data access
        """
        self.session = session
        self.line_repo = line_repo
        self.station_repo = station_repo

    def add_section(
        self,
        line_id: str,
        up_station_id: str,
        down_station_id: str,
        distance: int,
    ) -> Line:
        """
        Add a section to a line, extending it or splitting an existing section.

        Args:
            line_id: Line ID
            up_station_id: Station the section starts at
            down_station_id: Station the section ends at
            distance: Length of the section

        Returns:
            Updated line

        Raises:
            ValidationError: If the section breaks a chain rule (duplicate,
                distance, disconnected or cyclic section)
            NotFoundError: If the line or a station is not found
            DatabaseError: If database operation fails
        """
        try:
            line = self._get_line(line_id)
            section = Section(
                id=str(uuid.uuid4()),
                up_station=self._get_station(up_station_id),
                down_station=self._get_station(down_station_id),
                distance=distance,
            )
            line.add_section(section)

            self.line_repo.update(line)
            self.session.commit()
            logger.info(
                "Added section %s -> %s (%d) to line %s",
                up_station_id,
                down_station_id,
                distance,
                line_id,
            )
            return line

        except (NotFoundError, ValidationError, IntegrityError) as e:
            logger.debug("Rejected section %s -> %s on line %s: %s", up_station_id, down_station_id, line_id, e)
            raise
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to add section: {str(e)}", e) from e

    def remove_station(self, line_id: str, station_id: str) -> Line:
        """
        Remove a station from a line and re-link its neighbouring sections.

        Args:
            line_id: Line ID
            station_id: Station to remove

        Returns:
            Updated line

        Raises:
            ChainTooShortError: If the line has a single section
            NotFoundError: If the line or station is not found, or the station
                is not on the line
            DatabaseError: If database operation fails
        """
        try:
            line = self._get_line(line_id)
            station = self._get_station(station_id)
            line.remove_station(station)

            self.line_repo.update(line)
            self.session.commit()
            logger.info("Removed station %s from line %s", station_id, line_id)
            return line

        except (NotFoundError, ValidationError, IntegrityError) as e:
            logger.debug("Rejected removal of station %s from line %s: %s", station_id, line_id, e)
            raise
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to remove station: {str(e)}", e) from e

    def _get_line(self, line_id: str) -> Line:
        line = self.line_repo.get_by_id(line_id)
        if line is None:
            raise NotFoundError("Line", line_id)
        return line

    def _get_station(self, station_id: str) -> Station:
        station = self.station_repo.get_by_id(station_id)
        if station is None:
            raise NotFoundError("Station", station_id)
        return station
