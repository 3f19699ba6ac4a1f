"""MCP tool handlers for executing tool operations."""

import json
from typing import Any

from mcp import McpError
from mcp.types import ErrorData, TextContent

from lineomatic.exceptions import (
    DatabaseError,
    DuplicateError,
    IntegrityError,
    NotFoundError,
    ValidationError,
)
from lineomatic.mcp.serializers import serialize_line, serialize_station
from lineomatic.services.line_service import LineService
from lineomatic.services.station_service import StationService


def _text(result: Any) -> list[TextContent]:
    return [TextContent(type="text", text=json.dumps(result, indent=2))]


# Station handlers
async def handle_create_station(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle create_station tool."""
    with db.session() as session:
        station = StationService(session).create_station(
            name=arguments["name"],
            station_id=arguments.get("station_id"),
        )
        return _text(serialize_station(station))


async def handle_get_station(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle get_station tool."""
    with db.session() as session:
        station = StationService(session).get_station(arguments["station_id"])
        return _text(serialize_station(station))


async def handle_list_stations(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle list_stations tool."""
    with db.session() as session:
        service = StationService(session)
        stations = service.list_stations(
            limit=arguments.get("limit", 100),
            offset=arguments.get("offset", 0),
        )
        result = {
            "stations": [serialize_station(s) for s in stations],
            "total": service.station_repo.count(),
        }
        return _text(result)


async def handle_delete_station(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle delete_station tool."""
    with db.session() as session:
        deleted = StationService(session).delete_station(arguments["station_id"])
        return _text({"deleted": deleted})


# Line handlers
async def handle_create_line(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle create_line tool."""
    with db.session() as session:
        line = LineService(session).create_line(
            name=arguments["name"],
            color=arguments["color"],
            up_station_id=arguments["up_station_id"],
            down_station_id=arguments["down_station_id"],
            distance=arguments["distance"],
            line_id=arguments.get("line_id"),
        )
        return _text(serialize_line(line))


async def handle_get_line(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle get_line tool."""
    with db.session() as session:
        line = LineService(session).get_line(arguments["line_id"])
        return _text(
            serialize_line(line, include_sections=arguments.get("include_sections", False))
        )


async def handle_list_lines(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle list_lines tool."""
    with db.session() as session:
        service = LineService(session)
        lines = service.list_lines(
            limit=arguments.get("limit", 100),
            offset=arguments.get("offset", 0),
        )
        result = {
            "lines": [serialize_line(line) for line in lines],
            "total": service.line_repo.count(),
        }
        return _text(result)


async def handle_update_line(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle update_line tool."""
    with db.session() as session:
        line = LineService(session).update_line(
            line_id=arguments["line_id"],
            name=arguments.get("name"),
            color=arguments.get("color"),
        )
        return _text(serialize_line(line))


async def handle_delete_line(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle delete_line tool."""
    with db.session() as session:
        deleted = LineService(session).delete_line(arguments["line_id"])
        return _text({"deleted": deleted})


# Section handlers
async def handle_add_section(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle add_section tool."""
    with db.session() as session:
        line = LineService(session).add_section(
            line_id=arguments["line_id"],
            up_station_id=arguments["up_station_id"],
            down_station_id=arguments["down_station_id"],
            distance=arguments["distance"],
        )
        return _text(serialize_line(line, include_sections=True))


async def handle_remove_station(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle remove_station tool."""
    with db.session() as session:
        line = LineService(session).remove_station(
            line_id=arguments["line_id"],
            station_id=arguments["station_id"],
        )
        return _text(serialize_line(line, include_sections=True))


async def handle_get_line_stations(arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """Handle get_line_stations tool."""
    with db.session() as session:
        stations = LineService(session).get_stations_in_order(arguments["line_id"])
        return _text({"stations": [serialize_station(s) for s in stations]})


# Tool handler registry
TOOL_HANDLERS = {
    "create_station": handle_create_station,
    "get_station": handle_get_station,
    "list_stations": handle_list_stations,
    "delete_station": handle_delete_station,
    "create_line": handle_create_line,
    "get_line": handle_get_line,
    "list_lines": handle_list_lines,
    "update_line": handle_update_line,
    "delete_line": handle_delete_line,
    "add_section": handle_add_section,
    "remove_station": handle_remove_station,
    "get_line_stations": handle_get_line_stations,
}


async def call_tool_handler(tool_name: str, arguments: dict[str, Any], db: Any) -> list[TextContent]:
    """
    Call the appropriate tool handler.

    Args:
        tool_name: Name of the tool to call
        arguments: Tool arguments
        db: Database instance

    Returns:
        List of TextContent with tool execution result

    Raises:
        McpError: If tool name is unknown or handler raises an error
    """
    if tool_name not in TOOL_HANDLERS:
        raise McpError(
            ErrorData(
                code=-32601,  # Method not found
                message=f"Unknown tool: {tool_name}",
            )
        )

    handler = TOOL_HANDLERS[tool_name]

    try:
        return await handler(arguments, db)
    except McpError:
        raise
    except KeyError as e:
        raise McpError(
            ErrorData(
                code=-32602,  # Invalid params
                message=f"Missing required argument: {e.args[0]}",
            )
        )
    except ValidationError as e:
        raise McpError(
            ErrorData(
                code=-32602,  # Invalid params
                message=f"Validation error: {str(e)}",
            )
        )
    except NotFoundError as e:
        raise McpError(
            ErrorData(
                code=-32001,  # Custom error: not found
                message=str(e),
            )
        )
    except DuplicateError as e:
        raise McpError(
            ErrorData(
                code=-32002,  # Custom error: duplicate
                message=str(e),
            )
        )
    except IntegrityError as e:
        raise McpError(
            ErrorData(
                code=-32603,  # Internal error
                message=f"Line integrity error: {str(e)}",
            )
        )
    except DatabaseError as e:
        raise McpError(
            ErrorData(
                code=-32603,  # Internal error
                message=f"Database error: {str(e)}",
            )
        )
    except Exception as e:
        raise McpError(
            ErrorData(
                code=-32603,  # Internal error
                message=f"Internal error: {str(e)}",
            )
        )
