"""MCP tool schema definitions."""

from typing import Any

_PAGINATION_PROPERTIES = {
    "limit": {
        "type": "integer",
        "description": "Maximum number of results (default: 100)",
    },
    "offset": {
        "type": "integer",
        "description": "Number of results to skip (default: 0)",
    },
}


def get_tool_schemas() -> dict[str, dict[str, Any]]:
    """Get all MCP tool schemas."""
    return {
        "create_station": {
            "name": "create_station",
            "description": "Create a new station",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Unique station name"},
                    "station_id": {
                        "type": "string",
                        "description": "Optional station ID (generates UUID if not provided)",
                    },
                },
                "required": ["name"],
            },
        },
        "get_station": {
            "name": "get_station",
            "description": "Retrieve a station by ID",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "station_id": {"type": "string", "description": "Station ID"},
                },
                "required": ["station_id"],
            },
        },
        "list_stations": {
            "name": "list_stations",
            "description": "List stations ordered by name",
            "inputSchema": {
                "type": "object",
                "properties": dict(_PAGINATION_PROPERTIES),
            },
        },
        "delete_station": {
            "name": "delete_station",
            "description": "Delete a station that is not on any line",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "station_id": {"type": "string", "description": "Station ID"},
                },
                "required": ["station_id"],
            },
        },
        "create_line": {
            "name": "create_line",
            "description": "Create a new line with its first section",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "name": {"type": "string", "description": "Unique line name"},
                    "color": {"type": "string", "description": "Line color, e.g. bg-red-600"},
                    "up_station_id": {
                        "type": "string",
                        "description": "Station the first section starts at",
                    },
                    "down_station_id": {
                        "type": "string",
                        "description": "Station the first section ends at",
                    },
                    "distance": {
                        "type": "integer",
                        "description": "Positive length of the first section",
                    },
                    "line_id": {
                        "type": "string",
                        "description": "Optional line ID (generates UUID if not provided)",
                    },
                },
                "required": ["name", "color", "up_station_id", "down_station_id", "distance"],
            },
        },
        "get_line": {
            "name": "get_line",
            "description": "Retrieve a line with its stations in travel order",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "line_id": {"type": "string", "description": "Line ID"},
                    "include_sections": {
                        "type": "boolean",
                        "description": "Include the line's sections in response (default: false)",
                    },
                },
                "required": ["line_id"],
            },
        },
        "list_lines": {
            "name": "list_lines",
            "description": "List lines ordered by name, each with its stations in travel order",
            "inputSchema": {
                "type": "object",
                "properties": dict(_PAGINATION_PROPERTIES),
            },
        },
        "update_line": {
            "name": "update_line",
            "description": "Update line name or color",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "line_id": {"type": "string", "description": "Line ID"},
                    "name": {"type": "string", "description": "New name"},
                    "color": {"type": "string", "description": "New color"},
                },
                "required": ["line_id"],
            },
        },
        "delete_line": {
            "name": "delete_line",
            "description": "Delete a line and all its sections",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "line_id": {"type": "string", "description": "Line ID"},
                },
                "required": ["line_id"],
            },
        },
        "add_section": {
            "name": "add_section",
            "description": (
                "Add a section to a line. The section must share exactly one station "
                "with the line; it extends the line at an end or splits an existing "
                "section, whose distance must be longer than the new one."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "line_id": {"type": "string", "description": "Line ID"},
                    "up_station_id": {"type": "string", "description": "Upstream station ID"},
                    "down_station_id": {"type": "string", "description": "Downstream station ID"},
                    "distance": {"type": "integer", "description": "Positive section length"},
                },
                "required": ["line_id", "up_station_id", "down_station_id", "distance"],
            },
        },
        "remove_station": {
            "name": "remove_station",
            "description": (
                "Remove a station from a line and join its neighbouring sections. "
                "A line always keeps at least one section."
            ),
            "inputSchema": {
                "type": "object",
                "properties": {
                    "line_id": {"type": "string", "description": "Line ID"},
                    "station_id": {"type": "string", "description": "Station ID to remove"},
                },
                "required": ["line_id", "station_id"],
            },
        },
        "get_line_stations": {
            "name": "get_line_stations",
            "description": "Get the stations of a line in travel order",
            "inputSchema": {
                "type": "object",
                "properties": {
                    "line_id": {"type": "string", "description": "Line ID"},
                },
                "required": ["line_id"],
            },
        },
    }
