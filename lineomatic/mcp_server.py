"""MCP (Model Context Protocol) server for Line-O-Matic.

This server exposes station, line and section management to AI agents via the
Model Context Protocol. It uses the standardized mcp library for JSON-RPC 2.0
communication over stdio.
"""

import asyncio
import logging

from mcp.server import NotificationOptions, Server
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp import McpError
from mcp.types import ErrorData, TextContent, Tool

from lineomatic import __version__
from lineomatic.config import configure_logging
from lineomatic.storage.database import get_db
from lineomatic.mcp.tool_handlers import call_tool_handler
from lineomatic.mcp.tool_schemas import get_tool_schemas

logger = logging.getLogger(__name__)

# Initialize MCP server
app = Server("line-o-matic")


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List all available MCP tools."""
    return [Tool(**schema) for schema in get_tool_schemas().values()]


@app.call_tool()
async def call_tool(name: str, arguments: dict | None) -> list[TextContent]:
    """Handle tool calls."""
    if arguments is None:
        arguments = {}

    db = get_db()

    try:
        # Handlers manage their own database sessions
        return await call_tool_handler(name, arguments, db)
    except McpError:
        raise
    except Exception as e:
        logger.exception(f"Unexpected error handling tool {name}")
        raise McpError(
            ErrorData(
                code=-32603,  # Internal error
                message=f"Internal error: {str(e)}",
            )
        )


async def main():
    """Main entry point for MCP server."""
    get_db().create_tables()
    async with stdio_server() as (read_stream, write_stream):
        await app.run(
            read_stream,
            write_stream,
            InitializationOptions(
                server_name="line-o-matic",
                server_version=__version__,
                capabilities=app.get_capabilities(
                    notification_options=NotificationOptions(),
                    experimental_capabilities={},
                ),
            ),
        )


if __name__ == "__main__":
    configure_logging()
    asyncio.run(main())
