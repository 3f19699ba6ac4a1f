"""Validation of line, station and section input."""

from lineomatic.exceptions import DistanceError, ValidationError


class LineValidator:
    """Validates service input according to business rules."""

    # Validation constants
    NAME_MIN_LENGTH = 1
    NAME_MAX_LENGTH = 255
    COLOR_MAX_LENGTH = 20
    ID_MAX_LENGTH = 255

    @staticmethod
    def validate_name(name: str, field: str = "name") -> None:
        """
        Validate a line or station name.

        Args:
            name: Name to validate
            field: Field name reported in the error

        Raises:
            ValidationError: If name is invalid
        """
        if not isinstance(name, str):
            raise ValidationError("Name must be a string", field)
        if not name or not name.strip():
            raise ValidationError("Name is required and cannot be empty", field)
        if len(name) < LineValidator.NAME_MIN_LENGTH:
            raise ValidationError(
                f"Name must be at least {LineValidator.NAME_MIN_LENGTH} character(s)", field
            )
        if len(name) > LineValidator.NAME_MAX_LENGTH:
            raise ValidationError(
                f"Name must be at most {LineValidator.NAME_MAX_LENGTH} characters", field
            )

    @staticmethod
    def validate_color(color: str) -> None:
        """
        Validate a line color.

        Args:
            color: Color to validate

        Raises:
            ValidationError: If color is invalid
        """
        if not isinstance(color, str):
            raise ValidationError("Color must be a string", "color")
        if not color or not color.strip():
            raise ValidationError("Color is required and cannot be empty", "color")
        if len(color) > LineValidator.COLOR_MAX_LENGTH:
            raise ValidationError(
                f"Color must be at most {LineValidator.COLOR_MAX_LENGTH} characters", "color"
            )

    @staticmethod
    def validate_id(resource_id: str, field: str = "id") -> None:
        """
        Validate a line, station or section ID.

        Args:
            resource_id: ID to validate
            field: Field name reported in the error

        Raises:
            ValidationError: If the ID is invalid
        """
        if not isinstance(resource_id, str):
            raise ValidationError("ID must be a string", field)
        if not resource_id or not resource_id.strip():
            raise ValidationError("ID cannot be empty", field)
        if len(resource_id) > LineValidator.ID_MAX_LENGTH:
            raise ValidationError(
                f"ID must be at most {LineValidator.ID_MAX_LENGTH} characters", field
            )

    @staticmethod
    def validate_distance(distance: int) -> None:
        """
        Validate a section distance.

        Args:
            distance: Distance to validate

        Raises:
            DistanceError: If distance is not a positive integer
        """
        if not isinstance(distance, int) or isinstance(distance, bool):
            raise DistanceError("Distance must be an integer")
        if distance <= 0:
            raise DistanceError("Distance must be positive")

    @staticmethod
    def validate_section_stations(up_station_id: str, down_station_id: str) -> None:
        """
        Validate the station pair of a section.

        Raises:
            ValidationError: If either ID is invalid or both are the same
        """
        LineValidator.validate_id(up_station_id, "up_station_id")
        LineValidator.validate_id(down_station_id, "down_station_id")
        if up_station_id == down_station_id:
            raise ValidationError(
                "Up and down station must be different", "down_station_id"
            )

    @staticmethod
    def validate_pagination(limit: int, offset: int) -> None:
        """Validate list pagination arguments."""
        if limit < 0:
            raise ValidationError("limit must be non-negative", "limit")
        if offset < 0:
            raise ValidationError("offset must be non-negative", "offset")
