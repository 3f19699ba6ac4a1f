"""HTTP API for Line-O-Matic MCP service using Server-Sent Events (SSE)."""

import asyncio
import json
import logging
from typing import Any, Dict

from fastapi import FastAPI, Body
from fastapi.responses import JSONResponse, StreamingResponse
from mcp import McpError

from lineomatic import __version__
from lineomatic.config import configure_logging, get_settings
from lineomatic.storage.database import get_db
from lineomatic.mcp.tool_handlers import call_tool_handler
from lineomatic.mcp.tool_schemas import get_tool_schemas

logger = logging.getLogger(__name__)

# Create FastAPI app
app = FastAPI(
    title="Line-O-Matic MCP Service",
    description="Transit line section management for AI agents",
    version=__version__,
)


def _list_tools() -> list[dict[str, Any]]:
    return [
        {
            "name": tool_def["name"],
            "description": tool_def["description"],
            "inputSchema": tool_def["inputSchema"],
        }
        for tool_def in get_tool_schemas().values()
    ]


async def handle_jsonrpc_request(request: Dict[str, Any]) -> Dict[str, Any]:
    """Handle JSON-RPC 2.0 request."""
    jsonrpc = request.get("jsonrpc", "2.0")
    request_id = request.get("id")
    method = request.get("method")
    params = request.get("params") or {}

    if method == "initialize":
        return {
            "jsonrpc": jsonrpc,
            "id": request_id,
            "result": {
                "protocolVersion": "2024-11-05",
                "capabilities": {},
                "serverInfo": {
                    "name": "line-o-matic",
                    "version": __version__,
                },
            },
        }
    elif method == "tools/list":
        return {
            "jsonrpc": jsonrpc,
            "id": request_id,
            "result": {"tools": _list_tools()},
        }
    elif method == "tools/call":
        tool_name = params.get("name")
        arguments = params.get("arguments") or {}

        try:
            result = await call_tool_handler(tool_name, arguments, get_db())
            return {
                "jsonrpc": jsonrpc,
                "id": request_id,
                "result": {
                    "content": [{"type": "text", "text": item.text} for item in result]
                },
            }
        except McpError as e:
            return {
                "jsonrpc": jsonrpc,
                "id": request_id,
                "error": {"code": e.error.code, "message": e.error.message},
            }
        except Exception as e:
            logger.exception(f"Error handling tool {tool_name}")
            return {
                "jsonrpc": jsonrpc,
                "id": request_id,
                "error": {
                    "code": -32603,
                    "message": f"Internal error: {str(e)}",
                },
            }
    elif method in ("prompts/list", "resources/list"):
        # Line-O-Matic exposes tools only
        key = method.split("/")[0]
        return {
            "jsonrpc": jsonrpc,
            "id": request_id,
            "result": {key: []},
        }
    else:
        return {
            "jsonrpc": jsonrpc,
            "id": request_id,
            "error": {
                "code": -32601,
                "message": f"Method not found: {method}",
            },
        }


@app.post("/mcp/sse")
async def mcp_sse_post(request: dict = Body(...)):
    """Server-Sent Events endpoint for MCP (POST)."""
    result = await handle_jsonrpc_request(request)
    sse_result = f"data: {json.dumps(result)}\n\n"
    return StreamingResponse(content=iter([sse_result]), media_type="text/event-stream")


@app.get("/mcp/sse")
async def mcp_sse_get():
    """Server-Sent Events endpoint for MCP (GET).

    Sends the discovery responses (initialize, tools/list, prompts/list,
    resources/list) and then keeps the connection open with keepalives.
    """

    async def generate_sse_stream():
        discovery = [
            {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}},
            {"jsonrpc": "2.0", "id": 2, "method": "tools/list", "params": {}},
            {"jsonrpc": "2.0", "id": 3, "method": "prompts/list", "params": {}},
            {"jsonrpc": "2.0", "id": 4, "method": "resources/list", "params": {}},
        ]
        for request in discovery:
            response = await handle_jsonrpc_request(request)
            yield f"data: {json.dumps(response)}\n\n"
            await asyncio.sleep(0.1)

        try:
            while True:
                await asyncio.sleep(30)
                yield ": keepalive\n\n"
        except asyncio.CancelledError:
            logger.info("MCP SSE GET: Connection closed by client")
            raise

    return StreamingResponse(
        generate_sse_stream(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )


@app.get("/health")
async def health_check():
    """Report service health, 503 when the database is unreachable."""
    if get_db().ping():
        return {"status": "healthy", "service": "line-o-matic", "database": "ok"}
    return JSONResponse(
        status_code=503,
        content={"status": "unhealthy", "service": "line-o-matic", "database": "unreachable"},
    )


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    settings = get_settings()
    get_db().create_tables()
    uvicorn.run(app, host=settings.http_host, port=settings.http_port)
