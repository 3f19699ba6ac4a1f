"""Station service layer for business logic and validation."""

import uuid

from sqlalchemy.orm import Session

from lineomatic.exceptions import (
    DatabaseError,
    DuplicateError,
    NotFoundError,
    ValidationError,
)
from lineomatic.models.station import Station
from lineomatic.services.section.validation import LineValidator
from lineomatic.storage.repositories import SectionRepository, StationRepository


class StationService:
    """Service layer for station CRUD operations with validation and error handling."""

    def __init__(self, session: Session):
        """
        Initialize station service with database session.

        Args:
            session: SQLAlchemy database session
        """
        self.session = session
        self.station_repo = StationRepository(session)
        self.section_repo = SectionRepository(session)
        self.validator = LineValidator()

    def create_station(self, name: str, station_id: str | None = None) -> Station:
        """
        Create a new station.

        Args:
            name: Station name (required, unique)
            station_id: Optional station ID. If not provided, generates a UUID.

        Returns:
            Created station

        Raises:
            ValidationError: If name or ID is invalid
            DuplicateError: If a station with the same ID or name exists
            DatabaseError: If database operation fails
        """
        self.validator.validate_name(name)

        if station_id is None:
            station_id = str(uuid.uuid4())
        else:
            self.validator.validate_id(station_id)

        if self.station_repo.get_by_id(station_id) is not None:
            raise DuplicateError("Station", "id", station_id)
        if self.station_repo.get_by_name(name) is not None:
            raise DuplicateError("Station", "name", name)

        try:
            station = Station(id=station_id, name=name)
            self.station_repo.create(station)
            self.session.commit()
            return station

        except (DuplicateError, ValidationError):
            raise
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to create station: {str(e)}", e) from e

    def get_station(self, station_id: str) -> Station:
        """
        Get station by ID.

        Raises:
            ValidationError: If station_id is invalid
            NotFoundError: If station is not found
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(station_id)

        try:
            station = self.station_repo.get_by_id(station_id)
            if station is None:
                raise NotFoundError("Station", station_id)
            return station

        except NotFoundError:
            raise
        except Exception as e:
            raise DatabaseError(f"Failed to get station: {str(e)}", e) from e

    def list_stations(self, limit: int = 100, offset: int = 0) -> list[Station]:
        """
        List stations ordered by name.

        Raises:
            ValidationError: If limit or offset is negative
            DatabaseError: If database operation fails
        """
        self.validator.validate_pagination(limit, offset)

        try:
            return self.station_repo.list(limit=limit, offset=offset)
        except Exception as e:
            raise DatabaseError(f"Failed to list stations: {str(e)}", e) from e

    def delete_station(self, station_id: str) -> bool:
        """
        Delete a station that no line passes through.

        Args:
            station_id: Station ID

        Returns:
            True if station was deleted, False if not found

        Raises:
            ValidationError: If station_id is invalid or the station is on a line
            DatabaseError: If database operation fails
        """
        self.validator.validate_id(station_id)

        try:
            line_ids = self.section_repo.get_line_ids_by_station(station_id)
            if line_ids:
                raise ValidationError(
                    f"Station '{station_id}' is still on line(s): {', '.join(sorted(line_ids))}",
                    "station_id",
                )

            deleted = self.station_repo.delete(station_id)
            if deleted:
                self.session.commit()
            return deleted

        except ValidationError:
            raise
        except Exception as e:
            self.session.rollback()
            raise DatabaseError(f"Failed to delete station: {str(e)}", e) from e
