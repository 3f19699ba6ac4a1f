"""Custom exceptions for line service operations."""


class LineServiceError(Exception):
    """Base exception for line service errors."""

    pass


class ValidationError(LineServiceError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFoundError(LineServiceError):
    """Raised when a station, line or section is not found."""

    def __init__(self, resource_type: str, resource_id: str, message: str | None = None):
        if message is None:
            message = f"{resource_type} with ID '{resource_id}' not found"
        super().__init__(message)
        self.resource_type = resource_type
        self.resource_id = resource_id


class DuplicateError(LineServiceError):
    """Raised when attempting to create a duplicate resource."""

    def __init__(self, resource_type: str, field: str, value: str):
        message = f"{resource_type} with {field} '{value}' already exists"
        super().__init__(message)
        self.resource_type = resource_type
        self.field = field
        self.value = value


class IntegrityError(LineServiceError):
    """Raised when a section chain is structurally broken.

    A broken chain means an earlier mutation left the sections in a state that
    does not describe a single path. It is never an input problem.
    """

    pass


class DuplicateSectionError(ValidationError):
    """Raised when a new section matches an existing section exactly."""

    def __init__(self, up_station_id: str, down_station_id: str):
        super().__init__(
            f"Section from '{up_station_id}' to '{down_station_id}' already exists",
            "section",
        )
        self.up_station_id = up_station_id
        self.down_station_id = down_station_id


class DistanceError(ValidationError):
    """Raised when a section distance is invalid or does not fit the section it splits."""

    def __init__(self, message: str):
        super().__init__(message, "distance")


class DisconnectedSectionError(ValidationError):
    """Raised when a new section shares no station with the line."""

    def __init__(self, up_station_id: str, down_station_id: str):
        super().__init__(
            f"Section from '{up_station_id}' to '{down_station_id}' "
            "does not connect to any station on the line",
            "section",
        )
        self.up_station_id = up_station_id
        self.down_station_id = down_station_id


class CyclicSectionError(ValidationError):
    """Raised when both stations of a new section are already on the line."""

    def __init__(self, up_station_id: str, down_station_id: str):
        super().__init__(
            f"Stations '{up_station_id}' and '{down_station_id}' are both already on the line",
            "section",
        )
        self.up_station_id = up_station_id
        self.down_station_id = down_station_id


class ChainTooShortError(ValidationError):
    """Raised when removing a station would leave the line without a section."""

    def __init__(self):
        super().__init__("Cannot remove a station from a line with a single section", "station")


class DatabaseError(LineServiceError):
    """Raised when a database operation fails."""

    def __init__(self, message: str, original_error: Exception | None = None):
        super().__init__(message)
        self.original_error = original_error
