"""MCP module with tool schemas, handlers, and serializers."""

from lineomatic.mcp.tool_handlers import call_tool_handler, TOOL_HANDLERS
from lineomatic.mcp.tool_schemas import get_tool_schemas
from lineomatic.mcp.serializers import serialize_line, serialize_model, serialize_station

__all__ = [
    "call_tool_handler",
    "TOOL_HANDLERS",
    "get_tool_schemas",
    "serialize_line",
    "serialize_model",
    "serialize_station",
]
