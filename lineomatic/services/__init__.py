"""Service layer for business logic and validation."""

from lineomatic.services.line_service import LineService
from lineomatic.services.station_service import StationService

__all__ = ["LineService", "StationService"]
