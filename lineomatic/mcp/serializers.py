"""Model serialization for MCP responses."""

from typing import Any

from sqlalchemy import inspect

from lineomatic.models.line import Line
from lineomatic.models.section import Section
from lineomatic.models.station import Station


def serialize_model(obj: Any) -> dict[str, Any]:
    """
    Serialize the column attributes of a SQLAlchemy model to a dictionary.

    Relationships are left out; expired attributes are reloaded on access.

    Args:
        obj: SQLAlchemy model instance

    Returns:
        Dictionary representation of the model
    """
    result = {}
    for attr in inspect(obj).mapper.column_attrs:
        value = getattr(obj, attr.key)
        if hasattr(value, "isoformat"):  # datetime
            value = value.isoformat()
        result[attr.key] = value
    return result


def serialize_station(station: Station) -> dict[str, Any]:
    """Serialize a station."""
    return serialize_model(station)


def serialize_section(section: Section) -> dict[str, Any]:
    """Serialize a section, keeping sentinel endpoints as None."""
    return {
        "id": section.id,
        "up_station_id": section.up_station.id if section.up_station is not None else None,
        "down_station_id": section.down_station.id if section.down_station is not None else None,
        "distance": section.distance,
    }


def serialize_line(line: Line, include_sections: bool = False) -> dict[str, Any]:
    """
    Serialize a line with its stations in travel order.

    Args:
        line: Line model instance
        include_sections: If True, also list the real sections of the line

    Returns:
        Dictionary with the line columns and a ``stations`` list
    """
    result = serialize_model(line)
    result["stations"] = [serialize_station(station) for station in line.stations_in_order()]
    if include_sections:
        result["sections"] = [
            serialize_section(section) for section in line.chain.real_sections()
        ]
    return result
